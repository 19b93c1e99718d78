from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import pytest

from binwatch.config import BinwatchConfig
from binwatch.exceptions import BinStoreError
from binwatch.service import BinService
from binwatch.store.memory import MemoryDocumentStore


class FakeClock:
    """Manually advanced clock. Each display read yields a distinct string."""

    def __init__(self, start: float = 1000.0) -> None:
        self.instant = start
        self.display_reads = 0

    def now(self) -> float:
        return self.instant

    def advance(self, seconds: float) -> None:
        self.instant += seconds

    def human_readable(self) -> str:
        self.display_reads += 1
        return f"3/7/2026, 4:{self.display_reads:02d}:00 PM"


class RecordingStore(MemoryDocumentStore):
    """Memory store that logs every write and can fail or hang on demand."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: list[tuple[str, str, dict[str, Any]]] = []
        self.failing_paths: set[str] = set()
        self.hang_reads = False

    def _check(self, path: str) -> None:
        if path in self.failing_paths:
            raise BinStoreError(f"write to {path} refused", path=path)

    async def get(self, path: str) -> dict[str, Any] | None:
        if self.hang_reads:
            await asyncio.Event().wait()
        return await super().get(path)

    async def set(self, path: str, document: Mapping[str, Any]) -> None:
        self._check(path)
        self.writes.append(("set", path, dict(document)))
        await super().set(path, document)

    async def update(self, path: str, fields: Mapping[str, Any]) -> None:
        self._check(path)
        self.writes.append(("update", path, dict(fields)))
        await super().update(path, fields)

    def drop(self, path: str) -> None:
        self._documents.pop(path, None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def config() -> BinwatchConfig:
    return BinwatchConfig(offline_threshold=20.0, sweep_interval=10.0, cleanup_interval=3600.0, store_timeout=0.2)


@pytest.fixture
def service(store: RecordingStore, clock: FakeClock, config: BinwatchConfig) -> BinService:
    return BinService(store, config=config, clock=clock)
