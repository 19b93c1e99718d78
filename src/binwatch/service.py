"""Bin ingestion service.

Ties the record merge rules, the document store and the liveness
tracker together behind the operations the ingestion endpoints call.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from pydantic import ValidationError

from binwatch.clock import Clock, SystemClock
from binwatch.config import BinwatchConfig
from binwatch.exceptions import BinNotFoundError, BinStoreError
from binwatch.liveness import Channel, LivenessTracker
from binwatch.merge import heartbeat_patch, merge_record, offline_patch, register_record
from binwatch.models import BinIdentity, BinMetadata, BinRecord, HeartbeatUpdate, TelemetryUpdate
from binwatch.scheduler import SweepScheduler
from binwatch.store.base import DocumentStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def _invalid_record(identity: BinIdentity, exc: ValidationError) -> BinStoreError:
    return BinStoreError(f"Stored record at {identity.path} is invalid: {exc}", path=identity.path)


class BinService:
    """Register bins, merge their updates and track their liveness.

    Usage::

        async with BinService(store, config=config) as service:
            await service.register_device(metadata)
            await service.apply_telemetry(update)

    Entering the context starts the offline and cleanup sweeps; leaving
    it stops them.
    """

    def __init__(
        self,
        store: DocumentStore,
        *,
        config: BinwatchConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config or BinwatchConfig()
        self._store = store
        self._clock = clock or SystemClock()
        self._tracker = LivenessTracker(
            clock=self._clock,
            offline_threshold=self._config.offline_threshold,
            cleanup_threshold=self._config.cleanup_interval,
            on_offline=self._mark_offline,
        )
        self._scheduler = SweepScheduler(
            self._tracker,
            sweep_interval=self._config.sweep_interval,
            cleanup_interval=self._config.cleanup_interval,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BinService:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    def start(self) -> None:
        self._scheduler.start()

    async def stop(self) -> None:
        await self._scheduler.stop()

    @property
    def tracker(self) -> LivenessTracker:
        return self._tracker

    @property
    def scheduler(self) -> SweepScheduler:
        return self._scheduler

    # ------------------------------------------------------------------
    # Store access
    # ------------------------------------------------------------------

    async def _store_call(self, call: Awaitable[T], path: str) -> T:
        """Await a store call, bounded by ``store_timeout`` when set."""
        timeout = self._config.store_timeout
        if timeout <= 0:
            return await call
        try:
            async with asyncio.timeout(timeout):
                return await call
        except TimeoutError as exc:
            raise BinStoreError(f"Store call for {path} timed out after {timeout}s", path=path) from exc

    async def _fetch(self, identity: BinIdentity) -> dict[str, Any] | None:
        return await self._store_call(self._store.get(identity.path), identity.path)

    async def _load(self, identity: BinIdentity) -> BinRecord | None:
        document = await self._fetch(identity)
        if document is None:
            return None
        try:
            return BinRecord.from_document(document)
        except ValidationError as exc:
            raise _invalid_record(identity, exc) from exc

    async def _require(self, identity: BinIdentity) -> BinRecord:
        existing = await self._load(identity)
        if existing is None:
            raise BinNotFoundError(identity)
        return existing

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def register_device(self, metadata: BinMetadata) -> BinRecord:
        """Create the bin's record, or merge new metadata into an existing one."""
        identity = metadata.identity
        existing = await self._fetch(identity)
        try:
            record = register_record(existing, metadata, display_now=self._clock.human_readable())
        except ValidationError as exc:
            raise _invalid_record(identity, exc) from exc
        await self._store_call(self._store.set(identity.path, record.to_document()), identity.path)
        if existing is None:
            _logger.info("Registered bin %s (%s)", identity, record.bin_type)
        else:
            _logger.info("Updated metadata for bin %s", identity)
        return record

    async def apply_telemetry(self, update: TelemetryUpdate) -> BinRecord:
        """Merge a telemetry reading into a registered bin's record.

        Raises :class:`BinNotFoundError` (without writing) when the bin was
        never registered.
        """
        identity = update.identity
        existing = await self._require(identity)
        record = merge_record(existing, update.patch(), display_now=self._clock.human_readable())
        await self._store_call(self._store.set(identity.path, record.to_document()), identity.path)
        _logger.debug("Telemetry for %s: %s", identity, update.patch())
        await self.record_sighting(identity, Channel.TELEMETRY)
        return record

    async def apply_heartbeat(self, update: HeartbeatUpdate) -> None:
        """Merge-patch a heartbeat's status fields into a registered bin's record."""
        identity = update.identity
        await self._require(identity)
        patch = heartbeat_patch(update, display_now=self._clock.human_readable())
        await self._store_call(self._store.update(identity.path, patch), identity.path)
        _logger.debug("Heartbeat for %s: %s", identity, patch)
        await self.record_sighting(identity, Channel.HEARTBEAT)

    async def record_sighting(self, identity: BinIdentity, channel: Channel) -> None:
        await self._tracker.record_sighting(identity, channel)

    async def get_record(self, identity: BinIdentity) -> BinRecord | None:
        return await self._load(identity)

    async def _mark_offline(self, identity: BinIdentity) -> None:
        # PATCH would recreate a record deleted since the bin's last report.
        if await self._fetch(identity) is None:
            _logger.debug("Record for %s is gone, skipping offline patch", identity)
            return
        patch = offline_patch(display_now=self._clock.human_readable())
        await self._store_call(self._store.update(identity.path, patch), identity.path)
