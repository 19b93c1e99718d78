"""Custom exception hierarchy for binwatch."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from binwatch.models.identity import BinIdentity


class BinwatchError(Exception):
    """Base exception for all binwatch errors."""


class BinwatchConfigError(BinwatchError):
    """Invalid or missing configuration."""


class BinValidationError(BinwatchError):
    """Ingestion body is malformed or missing required fields.

    Raised by the HTTP layer before anything reaches the service.
    """


class BinNotFoundError(BinwatchError):
    """Telemetry or heartbeat for a bin that was never registered."""

    def __init__(self, identity: BinIdentity) -> None:
        self.identity = identity
        super().__init__(f"Bin {identity.path!r} is not registered")


class BinStoreError(BinwatchError):
    """Persistent store failure (network, non-2xx, invalid JSON, timeout)."""

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        status_code: int | None = None,
    ) -> None:
        self.path = path
        self.status_code = status_code
        super().__init__(message)
