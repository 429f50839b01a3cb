from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from questledger.domain.models.ProgressModel import UserDailyClaim, UserLedgerRecord
from questledger.domain.models.WalletModel import WalletAddress


@dataclass(frozen=True)
class UserDetails:
    """Read-only view of a wallet's quest and daily-claim state."""

    user: WalletAddress
    completed_quest_ids: Tuple[int, ...]
    total_quests_completed: int
    daily_claim: UserDailyClaim
    can_claim_daily: bool
    time_until_next_claim: int

    @classmethod
    def build(
        cls,
        record: UserLedgerRecord,
        *,
        last_quest_id: int,
        now: int,
        cooldown_seconds: int,
    ) -> "UserDetails":
        completed = tuple(record.completed_quest_ids(last_quest_id))
        claim = UserDailyClaim(
            last_claim_time=record.daily_claim.last_claim_time,
            claimed=record.daily_claim.claimed,
        )
        remaining = claim.time_until_next_claim(now, cooldown_seconds)
        return cls(
            user=record.user,
            completed_quest_ids=completed,
            total_quests_completed=len(completed),
            daily_claim=claim,
            can_claim_daily=remaining == 0,
            time_until_next_claim=remaining,
        )
