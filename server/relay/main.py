from __future__ import annotations

import logging
from pathlib import Path

import socketio
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from relay.config import Settings, settings
from relay.presence.handlers import EventRouter
from relay.presence.registry import Registry
from relay.realtime import SocketIOChannel, bind_events, create_sio
from relay.routers import monitoring

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_api(registry: Registry, config: Settings = settings) -> FastAPI:
    api = FastAPI(
        title="Location Relay",
        description="Real-time presence and location relay.",
        version="0.1.0",
    )
    api.state.registry = registry

    # CORS: allow all origins unless configured otherwise
    api.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @api.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Server error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @api.on_event("startup")
    async def on_startup() -> None:
        logger.info("Server running on port %d", config.PORT)
        logger.info("Location broadcasting service is active")
        logger.info("Environment: %s", config.ENVIRONMENT)

    api.include_router(monitoring.router)

    # Static client last so API routes win
    static_dir = Path(config.STATIC_DIR)
    if static_dir.is_dir():
        api.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.debug("Static directory %s not found, web client not served", static_dir)

    return api


def create_app(config: Settings = settings) -> socketio.ASGIApp:
    registry = Registry()
    sio = create_sio(config)
    bind_events(sio, EventRouter(registry, SocketIOChannel(sio)))
    return socketio.ASGIApp(
        sio,
        other_asgi_app=build_api(registry, config),
        socketio_path=config.SOCKETIO_PATH,
    )


app = create_app()


def run() -> None:
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
