"""Persistent store layer.

Bin records live in a hierarchical document store addressed by
``"<location>/Bin-<id>"``. The service only needs ``get`` / ``set`` /
``update``; see :class:`~binwatch.store.base.DocumentStore`.
"""

from __future__ import annotations

import aiohttp

from binwatch.config import BinwatchConfig
from binwatch.store.base import DocumentStore
from binwatch.store.firebase import FirebaseDocumentStore
from binwatch.store.memory import MemoryDocumentStore


def open_store(
    config: BinwatchConfig,
    http_session: aiohttp.ClientSession | None = None,
) -> FirebaseDocumentStore | MemoryDocumentStore:
    """Return the store selected by *config*.

    Firebase when ``database_url`` is set, otherwise an empty in-memory
    store. Without *http_session* the Firebase store opens (and closes)
    its own.
    """
    if config.database_url:
        return FirebaseDocumentStore(
            config.database_url,
            http_session,
            root_path=config.root_path,
            auth=config.database_auth,
        )
    return MemoryDocumentStore()


__all__ = [
    "DocumentStore",
    "FirebaseDocumentStore",
    "MemoryDocumentStore",
    "open_store",
]
