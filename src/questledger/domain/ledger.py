"""The quest and daily-claim ledger aggregate.

``QuestLedger`` bundles the stores and collaborators every ledger operation
needs and is passed explicitly to whoever drives it (the API dependencies,
the reward orchestration, tests). Each method delegates to its use case.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from questledger.domain.models.EventModel import LedgerEvent
from questledger.domain.models.ProgressModel import (
    DEFAULT_COOLDOWN_SECONDS,
    MIN_COOLDOWN_SECONDS,
    DailyClaimReceipt,
    QuestCompletion,
)
from questledger.domain.models.QuestModel import Quest
from questledger.domain.models.RewardModel import TOKEN_DECIMALS
from questledger.domain.models.UserDetailsModel import UserDetails
from questledger.domain.models.WalletModel import WalletAddress
from questledger.domain.usecase import admin, daily, quests, users
from questledger.domain.usecase.ports import (
    Clock,
    EventSink,
    QuestsRepo,
    RoleRegistry,
    UserLedgerRepo,
)

DEFAULT_DAILY_REWARD_UNITS = 10**TOKEN_DECIMALS


@dataclass(slots=True)
class QuestLedger:
    quests_repo: QuestsRepo
    users_repo: UserLedgerRepo
    authority: RoleRegistry
    events: EventSink
    clock: Clock
    cooldown_seconds: int = DEFAULT_COOLDOWN_SECONDS
    daily_reward_units: int = DEFAULT_DAILY_REWARD_UNITS

    def __post_init__(self) -> None:
        if self.cooldown_seconds < MIN_COOLDOWN_SECONDS:
            raise ValueError(
                f"Cooldown must be at least {MIN_COOLDOWN_SECONDS} seconds, "
                f"got {self.cooldown_seconds}"
            )
        if self.daily_reward_units < 0:
            raise ValueError("Daily reward cannot be negative")

    # ------- Mutations -------

    async def create_quest(
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
        usecase = quests.CreateQuest(
            quests_repo=self.quests_repo,
            authority=self.authority,
            events=self.events,
            clock=self.clock,
        )
        return await usecase.execute(
            caller,
            title=title,
            description=description,
            reward=reward,
            requirements=requirements,
            estimated_time_minutes=estimated_time_minutes,
            end_date=end_date,
        )

    async def complete_quest_for_user(
        self,
        caller: WalletAddress | str,
        user: WalletAddress | str,
        quest_id: int | str,
    ) -> QuestCompletion:
        usecase = quests.CompleteQuestForUser(
            quests_repo=self.quests_repo,
            users_repo=self.users_repo,
            authority=self.authority,
            events=self.events,
            clock=self.clock,
        )
        return await usecase.execute(caller, user, quest_id)

    async def set_daily_claimed(
        self, caller: WalletAddress | str, user: WalletAddress | str
    ) -> DailyClaimReceipt:
        usecase = daily.SetDailyClaimed(
            users_repo=self.users_repo,
            authority=self.authority,
            events=self.events,
            clock=self.clock,
            cooldown_seconds=self.cooldown_seconds,
            daily_reward_units=self.daily_reward_units,
        )
        return await usecase.execute(caller, user)

    async def deactivate_quest(
        self, caller: WalletAddress | str, quest_id: int | str
    ) -> Quest:
        usecase = quests.DeactivateQuest(
            quests_repo=self.quests_repo,
            authority=self.authority,
            events=self.events,
            clock=self.clock,
        )
        return await usecase.execute(caller, quest_id)

    async def transfer_ownership(
        self, caller: WalletAddress | str, new_owner: WalletAddress | str
    ) -> WalletAddress:
        usecase = admin.TransferOwnership(
            registry=self.authority, events=self.events, clock=self.clock
        )
        return await usecase.execute(caller, new_owner)

    # ------- Reads -------

    async def get_user_details(self, user: WalletAddress | str) -> UserDetails:
        usecase = users.GetUserDetails(
            quests_repo=self.quests_repo,
            users_repo=self.users_repo,
            clock=self.clock,
            cooldown_seconds=self.cooldown_seconds,
        )
        return await usecase.execute(user)

    async def get_quest(self, quest_id: int | str) -> Quest:
        return await quests.GetQuest(quests_repo=self.quests_repo).execute(quest_id)

    async def get_all_quests(self) -> List[Quest]:
        return await quests.GetAllQuests(quests_repo=self.quests_repo).execute()

    async def list_events(self, limit: int = 100) -> List[LedgerEvent]:
        return await admin.ListEvents(events=self.events).execute(limit)
