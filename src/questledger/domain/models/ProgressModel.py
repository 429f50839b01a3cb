from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from questledger.domain.errors import AlreadyCompleted
from questledger.domain.models.QuestModel import Quest
from questledger.domain.models.WalletModel import WalletAddress

MIN_COOLDOWN_SECONDS = 60 * 60
DEFAULT_COOLDOWN_SECONDS = 24 * 60 * 60


@dataclass
class UserQuestProgress:
    quest_id: int
    completed: bool = False
    completed_at: int = 0

    def mark_completed(self, at: int) -> None:
        if self.completed:
            raise AlreadyCompleted(
                f"Quest {self.quest_id} already completed", quest_id=self.quest_id
            )
        self.completed = True
        self.completed_at = at


@dataclass
class UserDailyClaim:
    last_claim_time: int = 0
    claimed: bool = False

    @property
    def last_claimed_at(self) -> Optional[int]:
        """``None`` until the first claim; a claim at time 0 still counts."""
        return self.last_claim_time if self.claimed else None

    def time_until_next_claim(self, now: int, cooldown_seconds: int) -> int:
        if not self.claimed:
            return 0
        elapsed = now - self.last_claim_time
        if elapsed >= cooldown_seconds:
            return 0
        return cooldown_seconds - elapsed

    def record_claim(self, at: int) -> None:
        self.last_claim_time = at
        self.claimed = True


@dataclass
class UserLedgerRecord:
    """Everything the ledger stores for one wallet."""

    user: WalletAddress
    progress: Dict[int, UserQuestProgress] = field(default_factory=lambda: {})
    total_quests_completed: int = 0
    daily_claim: UserDailyClaim = field(default_factory=UserDailyClaim)

    def progress_for(self, quest_id: int) -> UserQuestProgress:
        existing = self.progress.get(quest_id)
        if existing is None:
            return UserQuestProgress(quest_id=quest_id)
        return existing

    def complete(self, quest_id: int, at: int) -> UserQuestProgress:
        progress = self.progress_for(quest_id)
        progress.mark_completed(at)
        self.progress[quest_id] = progress
        self.total_quests_completed += 1
        return progress

    def completed_quest_ids(self, last_quest_id: int) -> List[int]:
        """Scan quest ids 1..last_quest_id for completed entries."""
        return [
            quest_id
            for quest_id in range(1, last_quest_id + 1)
            if self.progress_for(quest_id).completed
        ]


@dataclass(frozen=True)
class QuestCompletion:
    user: WalletAddress
    quest: Quest
    completed_at: int


@dataclass(frozen=True)
class DailyClaimReceipt:
    user: WalletAddress
    claimed_at: int
    amount: int
