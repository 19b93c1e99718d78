"""HTTP ingestion endpoints (aiohttp.web).

Thin glue: parse the JSON body into a model, call the service, map
binwatch errors to status codes.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

from aiohttp import web
from pydantic import BaseModel, ValidationError

from binwatch import __version__
from binwatch.config import BinwatchConfig
from binwatch.exceptions import BinNotFoundError, BinStoreError, BinValidationError
from binwatch.models import BinMetadata, HeartbeatUpdate, TelemetryUpdate
from binwatch.service import BinService
from binwatch.store import open_store

_logger = logging.getLogger(__name__)

SERVICE_KEY = web.AppKey("binwatch_service", BinService)

M = TypeVar("M", bound=BaseModel)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


async def _parse_body(request: web.Request, model: type[M]) -> M:
    try:
        body = await request.json()
    except ValueError as exc:
        raise BinValidationError("Request body is not valid JSON") from exc
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        _logger.debug("Rejected %s body: %s", request.path, exc)
        raise BinValidationError("Invalid data format or missing required fields") from exc


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    try:
        return await handler(request)
    except BinValidationError as exc:
        return web.json_response({"error": str(exc)}, status=400)
    except BinNotFoundError as exc:
        return web.json_response({"error": str(exc)}, status=404)
    except BinStoreError as exc:
        _logger.error("Store failure on %s %s: %s", request.method, request.path, exc)
        return web.json_response({"error": "Failed to save data"}, status=502)


async def handle_health(_request: web.Request) -> web.Response:
    return web.json_response({"status": "ok", "version": __version__})


async def handle_metadata(request: web.Request) -> web.Response:
    metadata = await _parse_body(request, BinMetadata)
    record = await request.app[SERVICE_KEY].register_device(metadata)
    return web.json_response({"message": "Bin metadata saved", "record": record.to_document()})


async def handle_distance(request: web.Request) -> web.Response:
    update = await _parse_body(request, TelemetryUpdate)
    record = await request.app[SERVICE_KEY].apply_telemetry(update)
    return web.json_response({"message": "Distance data saved", "record": record.to_document()})


async def handle_heartbeat(request: web.Request) -> web.Response:
    update = await _parse_body(request, HeartbeatUpdate)
    await request.app[SERVICE_KEY].apply_heartbeat(update)
    return web.json_response({"message": "Heartbeat received"})


def create_app(service: BinService) -> web.Application:
    """Application serving *service*. The caller owns the service lifecycle."""
    app = web.Application(middlewares=[error_middleware])
    app[SERVICE_KEY] = service
    app.router.add_get("/", handle_health)
    app.router.add_post("/bin-metadata", handle_metadata)
    app.router.add_post("/sensor-distance", handle_distance)
    app.router.add_post("/heartbeat", handle_heartbeat)
    return app


def build_app(config: BinwatchConfig) -> web.Application:
    """Application that owns its store and runs the sweeps while serving."""
    store = open_store(config)
    service = BinService(store, config=config)
    app = create_app(service)

    async def _lifecycle(_app: web.Application) -> AsyncIterator[None]:
        try:
            async with service:
                _logger.info(
                    "binwatch ready (store=%s offline_threshold=%ss)",
                    type(store).__name__,
                    config.offline_threshold,
                )
                yield
        finally:
            await store.close()

    app.cleanup_ctx.append(_lifecycle)
    return app
