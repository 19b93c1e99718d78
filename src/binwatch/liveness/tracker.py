"""In-memory liveness tracker.

Infers whether a bin is reachable purely from when its heartbeat and
telemetry channels last reported. The table is a disposable cache of
recency: the persisted record stays the durable source of truth, and
the tracker only asks for it to be patched when a bin goes silent.

Per-bin state machine::

    UNSEEN --sighting--> ONLINE --sweep (silent > threshold)--> OFFLINE
                           ^                                       |
                           +---------------sighting----------------+

Any entry silent for longer than the cleanup threshold is evicted, which
returns it to UNSEEN without touching the store.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from binwatch.clock import Clock, SystemClock
from binwatch.liveness.events import Channel, LivenessEntry, LivenessState
from binwatch.liveness.policy import should_evict, should_mark_offline, silent_for
from binwatch.models.identity import BinIdentity

_logger = logging.getLogger(__name__)

OfflineHandler = Callable[[BinIdentity], Awaitable[None]]


class LivenessTracker:
    """Table of :class:`LivenessEntry` keyed by ``BinIdentity.key``.

    All mutation happens under one ``asyncio.Lock``. Sweeps hold the lock
    only while selecting and flipping entries; the offline handler (store
    I/O) runs after the lock is released so sightings are never blocked
    behind a slow write.
    """

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        offline_threshold: float = 20.0,
        cleanup_threshold: float = 3600.0,
        on_offline: OfflineHandler | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._offline_threshold = offline_threshold
        self._cleanup_threshold = cleanup_threshold
        self._on_offline = on_offline
        self._entries: dict[str, LivenessEntry] = {}
        self._lock = asyncio.Lock()

    @property
    def offline_threshold(self) -> float:
        return self._offline_threshold

    @property
    def cleanup_threshold(self) -> float:
        return self._cleanup_threshold

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        return isinstance(identity, BinIdentity) and identity.key in self._entries

    async def record_sighting(
        self,
        identity: BinIdentity,
        channel: Channel,
        now: float | None = None,
    ) -> None:
        """Refresh *channel*'s timestamp for *identity* and mark it online."""
        instant = self._clock.now() if now is None else now
        async with self._lock:
            entry = self._entries.get(identity.key)
            if entry is None:
                entry = LivenessEntry(identity=identity)
                self._entries[identity.key] = entry
                _logger.debug("Tracking %s (first %s sighting)", identity, channel)
            elif not entry.is_online:
                _logger.info("Bin %s is back online via %s", identity, channel)
            entry.touch(channel, instant)

    def state(self, identity: BinIdentity) -> LivenessState:
        entry = self._entries.get(identity.key)
        if entry is None:
            return LivenessState.UNSEEN
        return entry.state

    def get(self, identity: BinIdentity) -> LivenessEntry | None:
        """Copy of the entry for *identity*, if tracked."""
        entry = self._entries.get(identity.key)
        return entry.model_copy(deep=True) if entry is not None else None

    def snapshot(self) -> dict[str, LivenessEntry]:
        """Copies of all entries."""
        return {key: entry.model_copy(deep=True) for key, entry in self._entries.items()}

    async def check_offline(self, now: float | None = None) -> list[BinIdentity]:
        """Offline sweep.

        Flags every online entry silent for longer than the offline
        threshold and calls the offline handler once per flagged bin. A
        handler failure is logged and does not stop the sweep.
        """
        instant = self._clock.now() if now is None else now
        async with self._lock:
            flagged: list[BinIdentity] = []
            for entry in list(self._entries.values()):
                if should_mark_offline(instant, entry, self._offline_threshold):
                    entry.is_online = False
                    flagged.append(entry.identity)
                    _logger.info(
                        "Bin %s offline: silent for %.1fs (threshold %.1fs)",
                        entry.identity,
                        silent_for(instant, entry),
                        self._offline_threshold,
                    )

        if self._on_offline is not None:
            for identity in flagged:
                try:
                    await self._on_offline(identity)
                except Exception:
                    _logger.warning("Failed to persist offline status for %s", identity, exc_info=True)
        return flagged

    async def cleanup(self, now: float | None = None) -> list[BinIdentity]:
        """Cleanup sweep: drop entries silent longer than the cleanup threshold."""
        instant = self._clock.now() if now is None else now
        async with self._lock:
            stale = [
                key
                for key, entry in self._entries.items()
                if should_evict(instant, entry, self._cleanup_threshold)
            ]
            evicted = [self._entries.pop(key).identity for key in stale]
        for identity in evicted:
            _logger.info("Evicted %s from liveness tracking", identity)
        return evicted
