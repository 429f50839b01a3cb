from __future__ import annotations

import logging
from dataclasses import dataclass

from questledger.domain.errors import AlreadyCompleted
from questledger.domain.models.EventModel import quest_completed
from questledger.domain.models.ProgressModel import QuestCompletion
from questledger.domain.models.RoleModel import RECORDING_ROLES
from questledger.domain.models.WalletModel import WalletAddress
from questledger.domain.usecase._shared import ensure_quest, parse_wallet, require_role
from questledger.domain.usecase.ports import (
    AuthorityGateway,
    Clock,
    EventSink,
    QuestsRepo,
    UserLedgerRepo,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CompleteQuestForUser:
    quests_repo: QuestsRepo
    users_repo: UserLedgerRepo
    authority: AuthorityGateway
    events: EventSink
    clock: Clock

    async def execute(
        self,
        caller: WalletAddress | str,
        user: WalletAddress | str,
        quest_id: int | str,
    ) -> QuestCompletion:
        await require_role(self.authority, caller, *RECORDING_ROLES)

        quest = await ensure_quest(self.quests_repo, quest_id)
        now = self.clock.now()
        quest.ensure_available(now)

        wallet = parse_wallet(user)

        if not await self.users_repo.mark_completed(wallet, quest.quest_id, now):
            logger.info("Quest %s already completed by %s", quest.quest_id, wallet.short)
            raise AlreadyCompleted(
                f"Quest {quest.quest_id} already completed by {wallet}",
                quest_id=quest.quest_id,
                user=str(wallet),
            )

        await self.events.append(quest_completed(wallet, quest.quest_id, now))
        logger.info("Quest %s completed for %s", quest.quest_id, wallet.short)
        return QuestCompletion(user=wallet, quest=quest, completed_at=now)
