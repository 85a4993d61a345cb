"""
In-memory registry of connected participants.

One Registry instance is owned by the application and handed to the event
router; every mutation runs under a single asyncio lock so concurrent
connection handlers never interleave inside an operation.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Callable

from relay.models.participant import Participant

logger = logging.getLogger(__name__)

Mutator = Callable[[Participant], None]


class Registry:
    def __init__(self) -> None:
        self._participants: dict[str, Participant] = {}
        self._lock = asyncio.Lock()

    async def upsert(self, connection_id: str, mutator: Mutator | None = None) -> Participant:
        """Insert the participant if absent, apply ``mutator`` and refresh its timestamp.

        Returns a copy of the stored record as it stands after the mutation.
        """
        async with self._lock:
            participant = self._participants.get(connection_id)
            if participant is None:
                participant = Participant(connection_id=connection_id)
                self._participants[connection_id] = participant
                logger.debug("Registry: inserted %s (total=%d)", connection_id, len(self._participants))
            if mutator is not None:
                mutator(participant)
            participant.touch()
            return dataclasses.replace(participant)

    async def remove(self, connection_id: str) -> Participant | None:
        """Delete the participant; removing an unknown id is a no-op."""
        async with self._lock:
            participant = self._participants.pop(connection_id, None)
        if participant is not None:
            logger.debug("Registry: removed %s (total=%d)", connection_id, len(self._participants))
        return participant

    async def get(self, connection_id: str) -> Participant | None:
        async with self._lock:
            participant = self._participants.get(connection_id)
            return dataclasses.replace(participant) if participant else None

    async def snapshot_others(self, exclude_id: str) -> list[Participant]:
        """Copies of every record except ``exclude_id``. Order carries no meaning."""
        async with self._lock:
            return [
                dataclasses.replace(p)
                for cid, p in self._participants.items()
                if cid != exclude_id
            ]

    async def list_summaries(self) -> list[Participant]:
        """Copies of every record, for read-only monitoring views."""
        async with self._lock:
            return [dataclasses.replace(p) for p in self._participants.values()]

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._participants

    def __len__(self) -> int:
        return len(self._participants)
