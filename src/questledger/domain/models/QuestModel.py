from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from questledger.domain.errors import InvalidQuest, InvalidSchedule, QuestUnavailable


@dataclass
class Quest:
    # Identity
    quest_id: int

    # Metadata
    title: str
    description: str = ""
    reward: int = 0  # smallest reward unit
    requirements: List[str] = field(default_factory=lambda: [])
    estimated_time_minutes: int = 0

    # Lifecycle (unix seconds)
    created_at: int = 0
    end_date: int = 0
    is_active: bool = True

    def __post_init__(self) -> None:
        self.requirements = [str(item) for item in self.requirements]

    # ------- Status Helpers -------
    def deactivate(self) -> None:
        self.is_active = False

    # ------- Property Helpers -------

    def is_expired(self, now: int) -> bool:
        return now > self.end_date

    def is_available(self, now: int) -> bool:
        return self.is_active and not self.is_expired(now)

    def ensure_available(self, now: int) -> None:
        if not self.is_active:
            raise QuestUnavailable(
                f"Quest {self.quest_id} is no longer active", quest_id=self.quest_id
            )
        if self.is_expired(now):
            raise QuestUnavailable(
                f"Quest {self.quest_id} ended at {self.end_date}",
                quest_id=self.quest_id,
            )

    # ---------- Helpers ----------

    def validate_quest(self) -> None:
        """Check creation parameters; ``created_at`` must already be set to now."""

        if self.end_date <= self.created_at:
            raise InvalidSchedule(
                "End date must be in the future.",
                end_date=self.end_date,
                now=self.created_at,
            )

        if not self.requirements:
            raise InvalidQuest("Quest needs at least one requirement.")

        if self.reward < 0:
            raise InvalidQuest("Reward cannot be negative.")

        if self.estimated_time_minutes < 0:
            raise InvalidQuest("Estimated time cannot be negative.")
