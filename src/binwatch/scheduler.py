"""Periodic sweep scheduling."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from binwatch.liveness.tracker import LivenessTracker

_logger = logging.getLogger(__name__)


async def run_periodic(name: str, interval: float, sweep: Callable[[], Awaitable[Any]]) -> None:
    """Call *sweep* every *interval* seconds until cancelled.

    The first run happens one interval after start. A failing run is
    logged and the loop carries on with the next interval.
    """
    while True:
        await asyncio.sleep(interval)
        try:
            await sweep()
        except Exception:
            _logger.warning("%s sweep failed", name, exc_info=True)


class SweepScheduler:
    """Owns the offline and cleanup sweep tasks for a tracker."""

    def __init__(
        self,
        tracker: LivenessTracker,
        *,
        sweep_interval: float = 10.0,
        cleanup_interval: float = 3600.0,
    ) -> None:
        self._tracker = tracker
        self._sweep_interval = sweep_interval
        self._cleanup_interval = cleanup_interval
        self._tasks: list[asyncio.Task[None]] = []

    @property
    def is_running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def start(self) -> None:
        """Schedule both sweeps on the running loop. No-op when already running."""
        if self.is_running:
            return
        self._tasks = [
            asyncio.create_task(
                run_periodic("offline", self._sweep_interval, self._tracker.check_offline),
                name="binwatch-offline-sweep",
            ),
            asyncio.create_task(
                run_periodic("cleanup", self._cleanup_interval, self._tracker.cleanup),
                name="binwatch-cleanup-sweep",
            ),
        ]
        _logger.debug(
            "Sweeps started offline_every=%ss cleanup_every=%ss",
            self._sweep_interval,
            self._cleanup_interval,
        )

    async def stop(self) -> None:
        """Cancel both sweeps and wait for them to finish."""
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        if tasks:
            _logger.debug("Sweeps stopped")
