from __future__ import annotations

from dataclasses import dataclass
from typing import List

from questledger.domain.models.EventModel import LedgerEvent
from questledger.domain.usecase.ports import EventSink

MAX_EVENTS_PAGE = 500


@dataclass(slots=True)
class ListEvents:
    events: EventSink

    async def execute(self, limit: int = 100) -> List[LedgerEvent]:
        bounded = max(1, min(limit, MAX_EVENTS_PAGE))
        return await self.events.recent(bounded)
