from __future__ import annotations

from unittest import mock

import pytest
import socketio

from relay import protocol
from relay.config import Settings
from relay.presence.handlers import EventRouter
from relay.realtime import SocketIOChannel, bind_events, create_sio


@pytest.fixture
def sio():
    return create_sio(Settings())


@pytest.fixture
def bound(sio, registry, channel):
    router = EventRouter(registry, channel)
    bind_events(sio, router)
    return sio.handlers["/"]


def test_bind_events_registers_every_inbound_event(bound):
    for event in ("connect", "disconnect", *protocol.INBOUND_EVENTS):
        assert event in bound


async def test_socket_lifecycle_drives_registry(bound, registry, channel):
    await bound["connect"]("a1", {})
    await bound["connect"]("b2", {}, None)
    assert len(registry) == 2

    await bound["set-nickname"]("a1", "Alice")
    await bound["location-update"]("a1", {"lat": 1, "lng": 2, "accuracy": 3})
    assert channel.received("b2", "user-location")[0]["nickname"] == "Alice"

    await bound["stop-sharing"]("a1")
    assert "a1" not in registry

    await bound["disconnect"]("b2", "client disconnect")
    assert len(registry) == 0


async def test_handler_errors_do_not_escape(bound, registry):
    await bound["connect"]("a1", {})
    await bound["update-nickname"]("a1", None)
    await bound["location-update"]("a1")
    assert (await registry.get("a1")).nickname == protocol.ANONYMOUS


async def test_channel_targets_single_connection():
    sio = mock.AsyncMock(spec=socketio.AsyncServer)
    await SocketIOChannel(sio).send_to("a1", "active-users", [])
    sio.emit.assert_awaited_once_with("active-users", [], to="a1")


async def test_channel_broadcast_skips_sender():
    sio = mock.AsyncMock(spec=socketio.AsyncServer)
    await SocketIOChannel(sio).send_to_all_except("a1", "user-left", {"userId": "a1"})
    sio.emit.assert_awaited_once_with("user-left", {"userId": "a1"}, skip_sid="a1")


def test_create_sio_uses_configured_origins():
    sio = create_sio(Settings(CORS_ORIGINS=["https://map.example.com"]))
    assert sio.eio.cors_allowed_origins == ["https://map.example.com"]
