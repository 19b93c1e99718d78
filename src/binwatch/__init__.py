"""binwatch - bin telemetry ingestion with device liveness tracking."""

from importlib.metadata import PackageNotFoundError, version

from binwatch.clock import Clock, SystemClock, format_display_timestamp
from binwatch.config import BinwatchConfig
from binwatch.exceptions import (
    BinNotFoundError,
    BinStoreError,
    BinValidationError,
    BinwatchConfigError,
    BinwatchError,
)
from binwatch.liveness import Channel, LivenessEntry, LivenessState, LivenessTracker
from binwatch.models import (
    BinIdentity,
    BinMetadata,
    BinRecord,
    BinStatus,
    HeartbeatUpdate,
    LidState,
    SwitchState,
    TelemetryUpdate,
)
from binwatch.service import BinService
from binwatch.store import DocumentStore, FirebaseDocumentStore, MemoryDocumentStore

try:
    __version__ = version("binwatch")
except PackageNotFoundError:
    __version__ = "0+local"

__all__ = [
    "__version__",
    "BinIdentity",
    "BinMetadata",
    "BinNotFoundError",
    "BinRecord",
    "BinService",
    "BinStatus",
    "BinStoreError",
    "BinValidationError",
    "BinwatchConfig",
    "BinwatchConfigError",
    "BinwatchError",
    "Channel",
    "Clock",
    "DocumentStore",
    "FirebaseDocumentStore",
    "HeartbeatUpdate",
    "LidState",
    "LivenessEntry",
    "LivenessState",
    "LivenessTracker",
    "MemoryDocumentStore",
    "SwitchState",
    "SystemClock",
    "TelemetryUpdate",
    "format_display_timestamp",
]
