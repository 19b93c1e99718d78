"""Silence policy shared by the offline and cleanup sweeps."""

from __future__ import annotations

from binwatch.liveness.events import LivenessEntry


def silent_for(now: float, entry: LivenessEntry) -> float | None:
    """Seconds since the most recent sighting on either channel."""
    last_seen = entry.last_seen
    if last_seen is None:
        return None
    return now - last_seen


def is_silent(now: float, entry: LivenessEntry, threshold: float) -> bool:
    """Strictly longer than *threshold* without a sighting."""
    silence = silent_for(now, entry)
    return silence is not None and silence > threshold


def should_mark_offline(now: float, entry: LivenessEntry, offline_threshold: float) -> bool:
    # Only an online entry can transition; offline entries are not re-patched.
    return entry.is_online and is_silent(now, entry, offline_threshold)


def should_evict(now: float, entry: LivenessEntry, cleanup_threshold: float) -> bool:
    return is_silent(now, entry, cleanup_threshold)
