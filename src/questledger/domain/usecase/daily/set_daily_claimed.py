from __future__ import annotations

import logging
from dataclasses import dataclass

from questledger.domain.errors import CooldownActive
from questledger.domain.models.EventModel import daily_claimed
from questledger.domain.models.ProgressModel import DailyClaimReceipt
from questledger.domain.models.RoleModel import RECORDING_ROLES
from questledger.domain.models.WalletModel import WalletAddress
from questledger.domain.usecase._shared import parse_wallet, require_role
from questledger.domain.usecase.ports import (
    AuthorityGateway,
    Clock,
    EventSink,
    UserLedgerRepo,
)

logger = logging.getLogger(__name__)

# a lost compare-and-set means another claim landed; re-reading then reports the cooldown
MAX_CLAIM_ATTEMPTS = 3


@dataclass(slots=True)
class SetDailyClaimed:
    users_repo: UserLedgerRepo
    authority: AuthorityGateway
    events: EventSink
    clock: Clock
    cooldown_seconds: int
    daily_reward_units: int

    async def execute(
        self, caller: WalletAddress | str, user: WalletAddress | str
    ) -> DailyClaimReceipt:
        await require_role(self.authority, caller, *RECORDING_ROLES)
        wallet = parse_wallet(user)

        for _ in range(MAX_CLAIM_ATTEMPTS):
            record = await self.users_repo.get_record(wallet)
            now = self.clock.now()
            remaining = record.daily_claim.time_until_next_claim(
                now, self.cooldown_seconds
            )
            if remaining > 0:
                logger.info(
                    "Daily claim for %s rejected, %ss remaining", wallet.short, remaining
                )
                raise CooldownActive(remaining)

            expected = record.daily_claim.last_claimed_at
            if await self.users_repo.compare_and_set_claim(wallet, expected, now):
                await self.events.append(
                    daily_claimed(wallet, self.daily_reward_units, now)
                )
                logger.info("Daily claim recorded for %s at %s", wallet.short, now)
                return DailyClaimReceipt(
                    user=wallet, claimed_at=now, amount=self.daily_reward_units
                )

        record = await self.users_repo.get_record(wallet)
        remaining = record.daily_claim.time_until_next_claim(
            self.clock.now(), self.cooldown_seconds
        )
        logger.warning(
            "Daily claim for %s lost every compare-and-set, %ss remaining",
            wallet.short,
            remaining,
        )
        raise CooldownActive(remaining)
