"""Socket.IO transport for the presence relay.

Browser clients connect with the stock socket.io client at ``/socket.io``.
The Socket.IO session id is used as the participant's connection id.
"""

from __future__ import annotations

import logging
from typing import Any

import socketio

from relay import protocol
from relay.config import Settings
from relay.presence.handlers import EventRouter

logger = logging.getLogger(__name__)


def create_sio(settings: Settings) -> socketio.AsyncServer:
    origins = settings.CORS_ORIGINS
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins="*" if origins == ["*"] else origins,
        logger=False,
        engineio_logger=False,
    )


class SocketIOChannel:
    def __init__(self, sio: socketio.AsyncServer) -> None:
        self._sio = sio

    async def send_to(self, connection_id: str, event: str, payload: Any) -> None:
        await self._sio.emit(event, payload, to=connection_id)

    async def send_to_all_except(self, connection_id: str, event: str, payload: Any) -> None:
        await self._sio.emit(event, payload, skip_sid=connection_id)


def _forward(router: EventRouter, event: str):
    async def handler(sid: str, data: Any = None) -> None:
        await router.dispatch(sid, event, data)

    handler.__name__ = f"on_{event.replace('-', '_')}"
    return handler


def bind_events(sio: socketio.AsyncServer, router: EventRouter) -> None:
    """Route connection lifecycle and inbound events from ``sio`` to ``router``."""

    @sio.event
    async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
        await router.connect(sid)

    @sio.event
    async def disconnect(sid: str, reason: Any = None):
        if reason is not None:
            logger.debug("Socket %s closed: %s", sid, reason)
        await router.disconnect(sid)

    for event in protocol.INBOUND_EVENTS:
        sio.on(event, handler=_forward(router, event))
