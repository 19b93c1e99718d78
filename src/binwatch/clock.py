"""Clocks used by the tracker and the record merger.

Two time sources are kept apart on purpose:

* :meth:`Clock.now` is a monotonic instant used only for interval
  arithmetic (``now - last_seen > threshold``). It never jumps backwards
  when the wall clock is adjusted.
* :meth:`Clock.human_readable` is the local wall-clock time rendered for
  display in ``lastUpdated`` / ``createdAt``. It carries no ordering
  guarantee.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Protocol


def format_display_timestamp(moment: datetime) -> str:
    """Render *moment* as ``M/D/YYYY, h:mm:ss AM``.

    This is the locale-style string bins have always been stamped with,
    e.g. ``"3/7/2026, 4:05:09 PM"``.
    """
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


class Clock(Protocol):
    """Time source injected into the tracker and the service."""

    def now(self) -> float: ...

    def human_readable(self) -> str: ...


class SystemClock:
    """Production clock: ``time.monotonic`` plus local wall-clock display."""

    def now(self) -> float:
        return time.monotonic()

    def human_readable(self) -> str:
        return format_display_timestamp(datetime.now().astimezone())
