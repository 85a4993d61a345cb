from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from relay.presence.handlers import EventRouter
from relay.presence.registry import Registry


@dataclass
class Delivery:
    to: str | None
    skip: str | None
    event: str
    payload: Any


@dataclass
class RecordingChannel:
    """Captures sends and resolves broadcasts against a fixed set of open connections."""

    connections: set[str] = field(default_factory=set)
    log: list[Delivery] = field(default_factory=list)

    async def send_to(self, connection_id: str, event: str, payload: Any) -> None:
        self.log.append(Delivery(to=connection_id, skip=None, event=event, payload=payload))

    async def send_to_all_except(self, connection_id: str, event: str, payload: Any) -> None:
        self.log.append(Delivery(to=None, skip=connection_id, event=event, payload=payload))

    def received(self, connection_id: str, event: str | None = None) -> list[Any]:
        """Payloads that would reach ``connection_id``, optionally filtered by event."""
        out = []
        for d in self.log:
            reaches = d.to == connection_id if d.to is not None else d.skip != connection_id
            if reaches and (event is None or d.event == event):
                out.append(d.payload)
        return out

    def events(self, event: str) -> list[Delivery]:
        return [d for d in self.log if d.event == event]


@pytest.fixture
def registry() -> Registry:
    return Registry()


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def router(registry: Registry, channel: RecordingChannel) -> EventRouter:
    return EventRouter(registry, channel)


@pytest.fixture
def join(router: EventRouter, channel: RecordingChannel):
    async def _join(connection_id: str, nickname: str | None = None) -> None:
        channel.connections.add(connection_id)
        await router.connect(connection_id)
        if nickname is not None:
            await router.dispatch(connection_id, "set-nickname", nickname)
    return _join
