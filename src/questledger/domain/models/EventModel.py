from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from questledger.domain.models.QuestModel import Quest
from questledger.domain.models.WalletModel import WalletAddress


class EventKind(Enum):
    QUEST_CREATED = "QuestCreated"
    QUEST_COMPLETED = "QuestCompleted"
    QUEST_DEACTIVATED = "QuestDeactivated"
    DAILY_CLAIMED = "DailyClaimed"
    OWNERSHIP_TRANSFERRED = "OwnershipTransferred"


@dataclass(frozen=True)
class LedgerEvent:
    kind: EventKind
    at: int
    data: Dict[str, Any] = field(default_factory=lambda: {})


def quest_created(quest: Quest) -> LedgerEvent:
    return LedgerEvent(
        kind=EventKind.QUEST_CREATED,
        at=quest.created_at,
        data={
            "quest_id": quest.quest_id,
            "title": quest.title,
            "reward": quest.reward,
            "end_date": quest.end_date,
        },
    )


def quest_completed(user: WalletAddress, quest_id: int, at: int) -> LedgerEvent:
    return LedgerEvent(
        kind=EventKind.QUEST_COMPLETED,
        at=at,
        data={"user": str(user), "quest_id": quest_id},
    )


def quest_deactivated(quest_id: int, at: int) -> LedgerEvent:
    return LedgerEvent(
        kind=EventKind.QUEST_DEACTIVATED, at=at, data={"quest_id": quest_id}
    )


def daily_claimed(user: WalletAddress, amount: int, at: int) -> LedgerEvent:
    return LedgerEvent(
        kind=EventKind.DAILY_CLAIMED,
        at=at,
        data={"user": str(user), "amount": amount},
    )


def ownership_transferred(
    previous: WalletAddress, new_owner: WalletAddress, at: int
) -> LedgerEvent:
    return LedgerEvent(
        kind=EventKind.OWNERSHIP_TRANSFERRED,
        at=at,
        data={"previous_owner": str(previous), "new_owner": str(new_owner)},
    )
