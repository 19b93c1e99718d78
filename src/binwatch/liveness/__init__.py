"""Liveness layer.

Tracks when each bin was last sighted on its heartbeat and telemetry
channels and decides, on a periodic sweep, which bins have gone silent.
"""

from binwatch.liveness.events import Channel, LivenessEntry, LivenessState
from binwatch.liveness.tracker import LivenessTracker, OfflineHandler

__all__ = [
    "Channel",
    "LivenessEntry",
    "LivenessState",
    "LivenessTracker",
    "OfflineHandler",
]
