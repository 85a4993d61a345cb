from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from relay import protocol
from relay.models.participant import Location, Participant, now_ms
from relay.presence.channel import Channel
from relay.presence.registry import Registry
from relay.schemas.events import (
    LocationPayload,
    NicknameUpdated,
    OutboundEvent,
    ParticipantState,
    RenamePayload,
    UserJoined,
    UserLeft,
    UserLocation,
)

logger = logging.getLogger(__name__)


class EventRouter:
    """Turns inbound events of one connection into registry changes and broadcasts.

    Each event is handled on its own against the current registry state; the
    transport delivers events serially per connection.
    """

    def __init__(self, registry: Registry, channel: Channel) -> None:
        self.registry = registry
        self.channel = channel
        self._handlers = {
            protocol.SET_NICKNAME: self.set_identity,
            protocol.UPDATE_NICKNAME: self.rename,
            protocol.LOCATION_UPDATE: self.location_update,
            protocol.STOP_SHARING: self.stop_sharing,
        }

    async def dispatch(self, connection_id: str, event: str, payload: Any = None) -> None:
        """Entry point for the transport; never raises."""
        handler = self._handlers.get(event)
        if handler is None:
            logger.warning("Ignoring unknown event %r from %s", event, connection_id)
            return
        try:
            await handler(connection_id, payload)
        except ValidationError as exc:
            logger.warning("Rejected %s payload from %s: %s", event, connection_id, exc)
        except Exception:
            logger.exception("Error handling %s from %s", event, connection_id)

    async def connect(self, connection_id: str) -> None:
        await self.registry.upsert(connection_id)
        logger.info("New user connected: %s", connection_id)

    async def set_identity(self, connection_id: str, nickname: Any = None) -> None:
        name = protocol.normalize_nickname(nickname)

        def apply(p: Participant) -> None:
            p.nickname = name

        participant = await self.registry.upsert(connection_id, apply)

        others = await self.registry.snapshot_others(connection_id)
        await self._send(
            connection_id,
            protocol.ACTIVE_USERS,
            [ParticipantState.from_participant(p).to_wire() for p in others],
        )
        await self._broadcast(
            connection_id,
            protocol.USER_JOINED,
            UserJoined(user_id=connection_id, nickname=participant.nickname, timestamp=now_ms()),
        )
        logger.info("User %s set nickname: %s", connection_id, participant.nickname)

    async def rename(self, connection_id: str, payload: Any) -> None:
        data = RenamePayload.model_validate(payload)
        name = protocol.normalize_nickname(data.new_nickname)
        previous: list[str] = []

        def apply(p: Participant) -> None:
            previous.append(p.nickname)
            p.nickname = name

        participant = await self.registry.upsert(connection_id, apply)
        await self._broadcast(
            connection_id,
            protocol.NICKNAME_UPDATED,
            NicknameUpdated(user_id=connection_id, old_nickname=previous[0], nickname=participant.nickname),
        )
        logger.info("User %s changed nickname: %s -> %s", connection_id, previous[0], participant.nickname)

    async def location_update(self, connection_id: str, payload: Any) -> None:
        data = LocationPayload.model_validate(payload)
        override = (data.nickname or "").strip() or None

        def apply(p: Participant) -> None:
            p.location = Location(lat=data.lat, lng=data.lng, accuracy=data.accuracy)
            if override is not None:
                p.nickname = override

        participant = await self.registry.upsert(connection_id, apply)
        await self._broadcast(
            connection_id,
            protocol.USER_LOCATION,
            UserLocation(
                user_id=connection_id,
                lat=data.lat,
                lng=data.lng,
                accuracy=data.accuracy,
                nickname=participant.nickname,
                timestamp=participant.last_update,
            ),
        )
        logger.debug(
            "Location update from %s (%s): lat=%.6f lng=%.6f activeUsers=%d",
            participant.nickname, connection_id, data.lat, data.lng, len(self.registry),
        )

    async def stop_sharing(self, connection_id: str, payload: Any = None) -> None:
        nickname = await self._leave(connection_id)
        logger.info("User %s (%s) stopped sharing", nickname, connection_id)

    async def disconnect(self, connection_id: str) -> None:
        try:
            nickname = await self._leave(connection_id)
        except Exception:
            logger.exception("Error cleaning up %s", connection_id)
            return
        logger.info(
            "User %s (%s) disconnected, Active users: %d",
            nickname, connection_id, len(self.registry),
        )

    async def _leave(self, connection_id: str) -> str:
        removed = await self.registry.remove(connection_id)
        nickname = removed.nickname if removed else protocol.ANONYMOUS
        await self._broadcast(connection_id, protocol.USER_LEFT, UserLeft(user_id=connection_id, nickname=nickname))
        return nickname

    async def _send(self, connection_id: str, event: str, payload: Any) -> None:
        try:
            await self.channel.send_to(connection_id, event, payload)
        except Exception as exc:
            logger.warning("Failed to deliver %s to %s: %s", event, connection_id, exc)

    async def _broadcast(self, sender_id: str, event: str, message: OutboundEvent) -> None:
        try:
            await self.channel.send_to_all_except(sender_id, event, message.to_wire())
        except Exception as exc:
            logger.warning("Failed to broadcast %s from %s: %s", event, sender_id, exc)
