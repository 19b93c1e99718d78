"""Liveness vocabulary: channels, states and the per-bin entry."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from binwatch.models.identity import BinIdentity


class Channel(StrEnum):
    """Independent update channels a bin can be sighted on."""

    HEARTBEAT = "heartbeat"
    TELEMETRY = "telemetry"


class LivenessState(StrEnum):
    UNSEEN = "unseen"
    ONLINE = "online"
    OFFLINE = "offline"


class LivenessEntry(BaseModel):
    """Recency of one bin, per channel.

    Timestamps are clock instants from :meth:`binwatch.clock.Clock.now`;
    ``None`` means the channel has never reported.
    """

    model_config = ConfigDict(extra="forbid")

    identity: BinIdentity
    last_heartbeat_at: float | None = None
    last_telemetry_at: float | None = None
    is_online: bool = False

    @property
    def last_seen(self) -> float | None:
        seen = [ts for ts in (self.last_heartbeat_at, self.last_telemetry_at) if ts is not None]
        return max(seen) if seen else None

    @property
    def state(self) -> LivenessState:
        return LivenessState.ONLINE if self.is_online else LivenessState.OFFLINE

    def touch(self, channel: Channel, now: float) -> None:
        if channel == Channel.HEARTBEAT:
            self.last_heartbeat_at = now
        else:
            self.last_telemetry_at = now
        self.is_online = True
