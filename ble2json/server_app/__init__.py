from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ble2json.parsing.ruuvi import dump_reading, dump_readings
from ble2json.radio import BleakRadio, RadioStack
from ble2json.server_app.aggregator import ReadingAggregator
from ble2json.server_app.config import DeviceConfig, ServerSettings, get_settings, load_device_config
from ble2json.server_app.logging import create_logger, ring_buffer

JSON_MEDIA_TYPE = "application/json"

__all__ = ["create_app", "ServerSettings", "DeviceConfig", "ReadingAggregator"]


def create_app(
    settings: Optional[ServerSettings] = None,
    device_config: Optional[DeviceConfig] = None,
    radio: Optional[RadioStack] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logger = create_logger("ble2json.server", settings.log_ring_size)
    device_config = device_config or load_device_config(settings.config_path, logger=logger)
    radio = radio or BleakRadio(
        device_config.devices.values(),
        adapter=settings.bluetooth_adapter,
        scanning_mode=settings.scanning_mode,
        max_age=settings.reading_max_age,
        logger=logger,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await radio.start()
        logger.info(
            "server_started",
            extra={"details": {"devices": sorted(device_config.devices)}},
        )
        try:
            yield
        finally:
            await radio.stop()

    app = FastAPI(title="ble2json", lifespan=lifespan, redirect_slashes=False)
    app.state.settings = settings
    app.state.device_config = device_config
    app.state.radio = radio
    app.state.aggregator = ReadingAggregator(radio, logger)
    app.state.logger = logger

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.error(
            "request_failed",
            extra={"details": {"path": request.url.path, "error": f"{type(exc).__name__}: {exc}"}},
        )
        return PlainTextResponse("Internal Server Error", status_code=500)

    @app.get("/debug/logs")
    async def get_logs(device: Optional[str] = None, level: Optional[str] = None):
        handler = ring_buffer(logger)
        return JSONResponse({"events": handler.get_events(device=device, level=level) if handler else []})

    @app.get("/")
    async def get_all_readings(request: Request):
        config: DeviceConfig = request.app.state.device_config
        readings = request.app.state.aggregator.read_all(config.devices)
        return Response(content=dump_readings(readings), media_type=JSON_MEDIA_TYPE)

    # Labels are matched with surrounding slashes stripped, so "/sauna/" serves "sauna".
    @app.get("/{path:path}")
    async def get_reading(path: str, request: Request):
        label = path.strip("/")
        config: DeviceConfig = request.app.state.device_config
        address = config.devices.get(label)
        if address is None:
            raise HTTPException(status_code=404, detail="Not Found")
        reading = request.app.state.aggregator.read(label, address)
        return Response(content=dump_reading(reading), media_type=JSON_MEDIA_TYPE)

    return app
