from __future__ import annotations

from dataclasses import dataclass

from questledger.domain.models.UserDetailsModel import UserDetails
from questledger.domain.models.WalletModel import WalletAddress
from questledger.domain.usecase._shared import parse_wallet
from questledger.domain.usecase.ports import Clock, QuestsRepo, UserLedgerRepo


@dataclass(slots=True)
class GetUserDetails:
    quests_repo: QuestsRepo
    users_repo: UserLedgerRepo
    clock: Clock
    cooldown_seconds: int

    async def execute(self, user: WalletAddress | str) -> UserDetails:
        wallet = parse_wallet(user)
        record = await self.users_repo.get_record(wallet)
        return UserDetails.build(
            record,
            last_quest_id=await self.quests_repo.last_id(),
            now=self.clock.now(),
            cooldown_seconds=self.cooldown_seconds,
        )
