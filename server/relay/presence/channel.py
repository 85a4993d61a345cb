from __future__ import annotations

from typing import Any, Protocol


class Channel(Protocol):
    """Delivery side of the bidirectional transport.

    Implementations may raise on a failed send; callers treat delivery as
    best-effort and never let a failure escape.
    """

    async def send_to(self, connection_id: str, event: str, payload: Any) -> None: ...

    async def send_to_all_except(self, connection_id: str, event: str, payload: Any) -> None: ...
