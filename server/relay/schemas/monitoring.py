from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class HealthOut(BaseModel):
    status: str
    timestamp: str


class ParticipantSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    nickname: str
    has_location: bool
    last_update: int


class UsersOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_users: int
    users: list[ParticipantSummary]
