from __future__ import annotations

import logging
from dataclasses import dataclass

from questledger.domain.models.EventModel import quest_deactivated
from questledger.domain.models.QuestModel import Quest
from questledger.domain.models.RoleModel import Role
from questledger.domain.models.WalletModel import WalletAddress
from questledger.domain.usecase._shared import ensure_quest, require_role
from questledger.domain.usecase.ports import (
    AuthorityGateway,
    Clock,
    EventSink,
    QuestsRepo,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DeactivateQuest:
    quests_repo: QuestsRepo
    authority: AuthorityGateway
    events: EventSink
    clock: Clock

    async def execute(self, caller: WalletAddress | str, quest_id: int | str) -> Quest:
        await require_role(self.authority, caller, Role.OWNER)
        quest = await ensure_quest(self.quests_repo, quest_id)
        if not quest.is_active:
            return quest

        quest.deactivate()
        await self.quests_repo.set_active(quest.quest_id, False)
        await self.events.append(quest_deactivated(quest.quest_id, self.clock.now()))
        logger.info("Deactivated quest %s", quest.quest_id)
        return quest
