from __future__ import annotations

from dataclasses import dataclass
from typing import List

from questledger.domain.models.QuestModel import Quest
from questledger.domain.usecase._shared import ensure_quest
from questledger.domain.usecase.ports import QuestsRepo


@dataclass(slots=True)
class GetQuest:
    quests_repo: QuestsRepo

    async def execute(self, quest_id: int | str) -> Quest:
        return await ensure_quest(self.quests_repo, quest_id)


@dataclass(slots=True)
class GetAllQuests:
    quests_repo: QuestsRepo

    async def execute(self) -> List[Quest]:
        quests = await self.quests_repo.list_all()
        return sorted(quests, key=lambda quest: quest.quest_id)
