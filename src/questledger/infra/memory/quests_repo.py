from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Dict, List, Optional

from questledger.domain.models.QuestModel import Quest


class QuestsRepoMemory:
    def __init__(self) -> None:
        self._quests: Dict[int, Quest] = {}
        self._seq = 0
        self._lock = asyncio.Lock()

    async def next_id(self) -> int:
        async with self._lock:
            self._seq += 1
            return self._seq

    async def last_id(self) -> int:
        return self._seq

    async def insert(self, quest: Quest) -> None:
        async with self._lock:
            if quest.quest_id in self._quests:
                raise ValueError(f"Quest ID already exists: {quest.quest_id}")
            self._quests[quest.quest_id] = replace(quest)

    async def get(self, quest_id: int) -> Optional[Quest]:
        quest = self._quests.get(quest_id)
        return replace(quest) if quest else None

    async def list_all(self) -> List[Quest]:
        return [replace(self._quests[key]) for key in sorted(self._quests)]

    async def set_active(self, quest_id: int, active: bool) -> bool:
        async with self._lock:
            quest = self._quests.get(quest_id)
            if quest is None:
                return False
            quest.is_active = active
            return True
