from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from relay.models.participant import Participant


# ── Inbound ───────────────────────────────────────────────────────────────────

class RenamePayload(BaseModel):
    new_nickname: str = Field(..., alias="newNickname")


class LocationPayload(BaseModel):
    # Coordinates are relayed as given: real numbers only, no coercion, no NaN/Infinity
    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    lat: float
    lng: float
    accuracy: float
    nickname: str | None = None

    @field_validator("nickname", mode="before")
    @classmethod
    def ignore_bad_nickname(cls, v: object) -> object:
        # A malformed override never costs the location itself
        return v if isinstance(v, str) else None


# ── Outbound ──────────────────────────────────────────────────────────────────

class OutboundEvent(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class ParticipantState(OutboundEvent):
    user_id: str
    nickname: str
    lat: float | None
    lng: float | None
    accuracy: float | None
    timestamp: int

    @classmethod
    def from_participant(cls, participant: Participant) -> "ParticipantState":
        loc = participant.location
        return cls(
            user_id=participant.connection_id,
            nickname=participant.nickname,
            lat=loc.lat if loc else None,
            lng=loc.lng if loc else None,
            accuracy=loc.accuracy if loc else None,
            timestamp=participant.last_update,
        )


class UserJoined(OutboundEvent):
    user_id: str
    nickname: str
    timestamp: int


class NicknameUpdated(OutboundEvent):
    user_id: str
    old_nickname: str
    nickname: str


class UserLocation(OutboundEvent):
    user_id: str
    lat: float
    lng: float
    accuracy: float
    nickname: str
    timestamp: int


class UserLeft(OutboundEvent):
    user_id: str
    nickname: str
