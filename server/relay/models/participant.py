from __future__ import annotations

import time
from dataclasses import dataclass, field

from relay.protocol import ANONYMOUS


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float
    accuracy: float


@dataclass
class Participant:
    """Last known state of one connection."""

    connection_id: str
    nickname: str = ANONYMOUS
    location: Location | None = None
    last_update: int = field(default_factory=now_ms)

    @property
    def has_location(self) -> bool:
        return self.location is not None

    def touch(self) -> None:
        # Never move backwards if the wall clock steps back
        self.last_update = max(self.last_update, now_ms())

    def __repr__(self) -> str:
        return f"<Participant id={self.connection_id!r} nickname={self.nickname!r} location={self.location}>"
