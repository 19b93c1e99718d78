"""Service configuration for binwatch."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from binwatch.exceptions import BinwatchConfigError


def _env_float(value: str | None, name: str) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise BinwatchConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class BinwatchConfig:
    """Service configuration.

    Parameters
    ----------
    database_url : str or None
        Firebase Realtime Database URL
        (e.g. ``"https://project-default-rtdb.firebaseio.com"``).
        When ``None`` the service runs against an in-memory store.
    database_auth : str or None
        Token sent as the ``auth`` query parameter on every RTDB request.
    root_path : str
        Node under which bin records live.
    offline_threshold : float
        Seconds of silence (across both channels) after which a bin is
        flagged offline. Must exceed the device send interval.
    sweep_interval : float
        Seconds between offline sweeps.
    cleanup_interval : float
        Seconds between cleanup sweeps. Also the silence after which a
        tracker entry is evicted.
    store_timeout : float
        Upper bound in seconds for a single store call. ``0`` disables
        the bound.
    host : str
        HTTP listen address.
    port : int
        HTTP listen port.
    log_level : str
        Root log level for the CLI.
    """

    database_url: str | None = None
    database_auth: str | None = None
    root_path: str = "Trash-Bins"
    offline_threshold: float = 20.0
    sweep_interval: float = 10.0
    cleanup_interval: float = 3600.0
    store_timeout: float = 10.0
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    def validate(self) -> BinwatchConfig:
        """Check interval invariants and return ``self``."""
        for name in ("offline_threshold", "sweep_interval", "cleanup_interval"):
            if getattr(self, name) <= 0:
                raise BinwatchConfigError(f"{name} must be positive")
        if self.store_timeout < 0:
            raise BinwatchConfigError("store_timeout must not be negative")
        if self.cleanup_interval <= self.offline_threshold:
            raise BinwatchConfigError("cleanup_interval must be greater than offline_threshold")
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> BinwatchConfig:
        """Create configuration from environment variables.

        Reads ``BINWATCH_*`` variables. ``FIREBASE_DATABASE_URL`` and
        ``PORT`` are honoured as fallbacks so existing deployments keep
        working. Explicit keyword arguments override environment values.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}

        database_url = env.get("BINWATCH_DATABASE_URL") or env.get("FIREBASE_DATABASE_URL")
        if database_url:
            config_kwargs["database_url"] = database_url

        _ENV_STR_MAP = {
            "BINWATCH_DATABASE_AUTH": "database_auth",
            "BINWATCH_ROOT_PATH": "root_path",
            "BINWATCH_HOST": "host",
            "BINWATCH_LOG_LEVEL": "log_level",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_FLOAT_MAP = {
            "BINWATCH_OFFLINE_THRESHOLD": "offline_threshold",
            "BINWATCH_SWEEP_INTERVAL": "sweep_interval",
            "BINWATCH_CLEANUP_INTERVAL": "cleanup_interval",
            "BINWATCH_STORE_TIMEOUT": "store_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            if field_name in overrides:
                continue
            parsed = _env_float(env.get(env_key), env_key)
            if parsed is not None:
                config_kwargs[field_name] = parsed

        port_env = env.get("BINWATCH_PORT") or env.get("PORT")
        if port_env is not None and "port" not in overrides:
            try:
                config_kwargs["port"] = int(port_env)
            except ValueError as exc:
                raise BinwatchConfigError(f"port must be an integer, got {port_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs).validate()
