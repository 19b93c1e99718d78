"""Persistent store interface."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class DocumentStore(Protocol):
    """Structural interface of the async document store.

    Paths are ``"<location>/Bin-<id>"``. Having a protocol here makes it
    easy to pass test doubles while keeping the production implementations
    concrete.
    """

    async def get(self, path: str) -> dict[str, Any] | None:
        """Return the document at *path*, or ``None`` when absent."""
        ...

    async def set(self, path: str, document: Mapping[str, Any]) -> None:
        """Replace the document at *path*."""
        ...

    async def update(self, path: str, fields: Mapping[str, Any]) -> None:
        """Merge-patch *fields* into the document at *path*."""
        ...
