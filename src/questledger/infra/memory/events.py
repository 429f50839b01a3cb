from __future__ import annotations

from typing import List

from questledger.domain.models.EventModel import LedgerEvent


class EventLogMemory:
    """Append-only event list."""

    def __init__(self) -> None:
        self.events: List[LedgerEvent] = []

    async def append(self, event: LedgerEvent) -> None:
        self.events.append(event)

    async def recent(self, limit: int) -> List[LedgerEvent]:
        return list(self.events[-limit:])
