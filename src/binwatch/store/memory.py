"""In-process document store."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any


class MemoryDocumentStore:
    """Dict-backed store for local runs and tests.

    Documents are deep-copied on the way in and out so callers can never
    mutate stored state behind the store's back.
    """

    def __init__(self, documents: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._documents: dict[str, dict[str, Any]] = {
            path: copy.deepcopy(dict(doc)) for path, doc in (documents or {}).items()
        }

    async def get(self, path: str) -> dict[str, Any] | None:
        document = self._documents.get(path)
        if document is None:
            return None
        return copy.deepcopy(document)

    async def set(self, path: str, document: Mapping[str, Any]) -> None:
        self._documents[path] = copy.deepcopy(dict(document))

    async def update(self, path: str, fields: Mapping[str, Any]) -> None:
        # Patching a missing path creates it, like the RTDB PATCH verb.
        target = self._documents.setdefault(path, {})
        target.update(copy.deepcopy(dict(fields)))

    def paths(self) -> list[str]:
        return sorted(self._documents)

    async def close(self) -> None:
        return None
