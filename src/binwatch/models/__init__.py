"""Data models for bin records and ingestion bodies."""

from binwatch.models._base import BinBaseModel, BinEnum, BinStatus, LidState, SwitchState
from binwatch.models.identity import BinIdentity, clean_location, normalize_location
from binwatch.models.record import BinRecord
from binwatch.models.updates import BinMetadata, HeartbeatUpdate, TelemetryUpdate

__all__ = [
    "BinBaseModel",
    "BinEnum",
    "BinIdentity",
    "BinMetadata",
    "BinRecord",
    "BinStatus",
    "HeartbeatUpdate",
    "LidState",
    "SwitchState",
    "TelemetryUpdate",
    "clean_location",
    "normalize_location",
]
