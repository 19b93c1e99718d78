from __future__ import annotations

import logging

import pytest

from binwatch import cli


def test_serve_passes_config_to_run_app(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: dict[str, object] = {}

    def _fake_run_app(app: object, *, host: str, port: int, print: object) -> None:  # noqa: A002
        calls.update(app=app, host=host, port=port)

    monkeypatch.delenv("BINWATCH_DATABASE_URL", raising=False)
    monkeypatch.delenv("FIREBASE_DATABASE_URL", raising=False)
    monkeypatch.setattr(cli.web, "run_app", _fake_run_app)

    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        assert cli.main(["serve", "--host", "127.0.0.1", "--port", "8081", "--log-level", "debug"]) == 0
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, cli.DisplayTimeFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 8081


def test_bad_config_exits_with_2(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("BINWATCH_OFFLINE_THRESHOLD", "soon")
    assert cli.main(["serve"]) == 2
    assert "BINWATCH_OFFLINE_THRESHOLD" in capsys.readouterr().err


def test_formatter_uses_display_timestamp() -> None:
    formatter = cli.DisplayTimeFormatter("%(asctime)s %(message)s")
    record = logging.LogRecord("binwatch", logging.INFO, __file__, 1, "hello", None, None)
    line = formatter.format(record)
    assert line.endswith(" hello")
    assert (" AM " in line) or (" PM " in line)
