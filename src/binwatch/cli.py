"""Command-line entry point: ``binwatch serve``."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime

from aiohttp import web

from binwatch.clock import format_display_timestamp
from binwatch.config import BinwatchConfig
from binwatch.exceptions import BinwatchConfigError
from binwatch.server import build_app

_LOG = logging.getLogger("binwatch")


class DisplayTimeFormatter(logging.Formatter):
    """Stamp log lines with the same local timestamp format bins are stamped with."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        return format_display_timestamp(datetime.fromtimestamp(record.created).astimezone())


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(DisplayTimeFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="binwatch", description="Bin telemetry ingestion service")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP ingestion service")
    serve.add_argument("--host", help="Listen address (default: BINWATCH_HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, help="Listen port (default: BINWATCH_PORT/PORT or 3000)")
    serve.add_argument("--log-level", help="Log level (default: BINWATCH_LOG_LEVEL or INFO)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    overrides = {
        name: value
        for name, value in (("host", args.host), ("port", args.port), ("log_level", args.log_level))
        if value is not None
    }
    try:
        config = BinwatchConfig.from_env(**overrides)
    except BinwatchConfigError as exc:
        print(f"binwatch: {exc}", file=sys.stderr)
        return 2

    configure_logging(config.log_level)
    _LOG.info("Starting binwatch on %s:%s", config.host, config.port)
    web.run_app(build_app(config), host=config.host, port=config.port, print=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
