from __future__ import annotations

from datetime import datetime

import pytest

from binwatch.clock import SystemClock, format_display_timestamp


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (datetime(2026, 3, 7, 16, 5, 9), "3/7/2026, 4:05:09 PM"),
        (datetime(2026, 3, 7, 0, 0, 0), "3/7/2026, 12:00:00 AM"),
        (datetime(2026, 12, 31, 12, 30, 1), "12/31/2026, 12:30:01 PM"),
        (datetime(2026, 1, 1, 9, 9, 59), "1/1/2026, 9:09:59 AM"),
    ],
)
def test_format_display_timestamp(moment: datetime, expected: str) -> None:
    assert format_display_timestamp(moment) == expected


def test_system_clock_now_never_goes_backwards() -> None:
    clock = SystemClock()
    readings = [clock.now() for _ in range(50)]
    assert readings == sorted(readings)


def test_system_clock_human_readable_shape() -> None:
    text = SystemClock().human_readable()
    date_part, time_part = text.split(", ")
    assert len(date_part.split("/")) == 3
    assert time_part.endswith(("AM", "PM"))
