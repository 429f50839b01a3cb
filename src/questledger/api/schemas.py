from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

# --- Shared Types ---


class RewardAction(str, Enum):
    QUEST = "QUEST"
    DAILY = "DAILY"


class MintStatus(str, Enum):
    MINTED = "MINTED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


# --- Helpers ---


def _empty_requirements() -> List[str]:
    return []


# --- Quests ---


class QuestCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    reward: int = Field(description="Reward in smallest token units")
    requirements: List[str] = Field(default_factory=_empty_requirements)
    estimated_time_minutes: int = 0
    end_date: int = Field(description="Unix seconds after which completions stop")


class Quest(BaseModel):
    quest_id: int
    title: str
    description: str
    reward: int
    reward_tokens: str
    requirements: List[str]
    estimated_time_minutes: int
    created_at: int
    end_date: int
    is_active: bool
    is_available: bool


class CompletionRequest(BaseModel):
    user: str
    evidence: Dict[str, Any] = Field(default_factory=dict)


# --- Users ---


class DailyClaim(BaseModel):
    last_claim_time: int = 0
    claimed: bool = False


class UserDetails(BaseModel):
    user: str
    completed_quest_ids: List[int]
    total_quests_completed: int
    daily_claim: DailyClaim
    can_claim_daily: bool
    time_until_next_claim: int


# --- Rewards ---


class RewardOutcome(BaseModel):
    action: RewardAction
    user: str
    amount: int
    amount_tokens: str
    status: MintStatus
    quest_id: Optional[int] = None
    transaction_id: Optional[str] = None
    failure_id: Optional[str] = None
    error: Optional[str] = None


class MintFailure(BaseModel):
    failure_id: str
    action: RewardAction
    user: str
    amount: int
    reason: str
    created_at: int
    quest_id: Optional[int] = None
    attempts: int = 1


class RetryReport(BaseModel):
    attempted: int
    resolved: int
    still_pending: int


# --- Admin ---


class OwnershipTransfer(BaseModel):
    new_owner: str


class Ownership(BaseModel):
    owner: str


class LedgerEvent(BaseModel):
    kind: str
    at: int
    data: Dict[str, Any] = Field(default_factory=dict)
