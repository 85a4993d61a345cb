from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from relay.presence.registry import Registry
from relay.schemas.monitoring import HealthOut, ParticipantSummary, UsersOut

router = APIRouter(tags=["monitoring"])


def get_registry(request: Request) -> Registry:
    return request.app.state.registry


@router.get("/health", response_model=HealthOut)
async def health():
    return HealthOut(status="healthy", timestamp=datetime.now(timezone.utc).isoformat())


@router.get("/api/users", response_model=UsersOut)
async def list_users(registry: Registry = Depends(get_registry)):
    """Read-only view of who is connected, for monitoring."""
    summaries = [
        ParticipantSummary(nickname=p.nickname, has_location=p.has_location, last_update=p.last_update)
        for p in await registry.list_summaries()
    ]
    return UsersOut(total_users=len(summaries), users=summaries)
