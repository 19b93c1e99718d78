from __future__ import annotations

import pytest

from binwatch.config import BinwatchConfig
from binwatch.exceptions import BinwatchConfigError

_ENV_KEYS = (
    "BINWATCH_DATABASE_URL",
    "FIREBASE_DATABASE_URL",
    "BINWATCH_DATABASE_AUTH",
    "BINWATCH_ROOT_PATH",
    "BINWATCH_HOST",
    "BINWATCH_LOG_LEVEL",
    "BINWATCH_OFFLINE_THRESHOLD",
    "BINWATCH_SWEEP_INTERVAL",
    "BINWATCH_CLEANUP_INTERVAL",
    "BINWATCH_STORE_TIMEOUT",
    "BINWATCH_PORT",
    "PORT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = BinwatchConfig.from_env()
    assert config.database_url is None
    assert config.root_path == "Trash-Bins"
    assert config.offline_threshold == 20.0
    assert config.sweep_interval == 10.0
    assert config.cleanup_interval == 3600.0
    assert config.port == 3000


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FIREBASE_DATABASE_URL", "https://bins.firebaseio.com")
    monkeypatch.setenv("BINWATCH_OFFLINE_THRESHOLD", "45")
    monkeypatch.setenv("BINWATCH_SWEEP_INTERVAL", "15")
    monkeypatch.setenv("PORT", "8080")

    config = BinwatchConfig.from_env()

    assert config.database_url == "https://bins.firebaseio.com"
    assert config.offline_threshold == 45.0
    assert config.sweep_interval == 15.0
    assert config.port == 8080


def test_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BINWATCH_OFFLINE_THRESHOLD", "45")
    monkeypatch.setenv("BINWATCH_HOST", "127.0.0.1")

    config = BinwatchConfig.from_env(offline_threshold=30.0, host="localhost")

    assert config.offline_threshold == 30.0
    assert config.host == "localhost"


def test_non_numeric_interval_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BINWATCH_SWEEP_INTERVAL", "often")
    with pytest.raises(BinwatchConfigError, match="BINWATCH_SWEEP_INTERVAL"):
        BinwatchConfig.from_env()


@pytest.mark.parametrize(
    "overrides",
    [
        {"offline_threshold": 0},
        {"sweep_interval": -1},
        {"cleanup_interval": 10.0, "offline_threshold": 20.0},
        {"store_timeout": -0.5},
    ],
)
def test_validate_rejects_bad_intervals(overrides: dict[str, float]) -> None:
    with pytest.raises(BinwatchConfigError):
        BinwatchConfig(**overrides).validate()
