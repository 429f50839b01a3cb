from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from questledger.domain.models.EventModel import quest_created
from questledger.domain.models.QuestModel import Quest
from questledger.domain.models.RoleModel import Role
from questledger.domain.models.WalletModel import WalletAddress
from questledger.domain.usecase._shared import require_role
from questledger.domain.usecase.ports import (
    AuthorityGateway,
    Clock,
    EventSink,
    QuestsRepo,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateQuest:
    quests_repo: QuestsRepo
    authority: AuthorityGateway
    events: EventSink
    clock: Clock

    async def execute(
        self,
        caller: WalletAddress | str,
        *,
        title: str,
        description: str,
        reward: int,
        requirements: Sequence[str],
        estimated_time_minutes: int,
        end_date: int,
    ) -> Quest:
        await require_role(self.authority, caller, Role.OWNER)

        draft = Quest(
            quest_id=0,
            title=title,
            description=description,
            reward=reward,
            requirements=list(requirements),
            estimated_time_minutes=estimated_time_minutes,
            created_at=self.clock.now(),
            end_date=end_date,
        )
        draft.validate_quest()

        # ids are allocated only after validation so rejected drafts leave no gaps
        quest = replace(draft, quest_id=await self.quests_repo.next_id())
        await self.quests_repo.insert(quest)
        await self.events.append(quest_created(quest))

        logger.info(
            "Created quest %s %r reward=%s end_date=%s",
            quest.quest_id,
            quest.title,
            quest.reward,
            quest.end_date,
        )
        return quest
