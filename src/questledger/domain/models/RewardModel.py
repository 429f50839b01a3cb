from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from questledger.domain.models.WalletModel import WalletAddress

TOKEN_DECIMALS = 18


def tokens_to_units(amount: Decimal | int | str, decimals: int = TOKEN_DECIMALS) -> int:
    """Convert a human-readable token amount into smallest reward units."""
    value = Decimal(str(amount)) * (Decimal(10) ** decimals)
    if value != value.to_integral_value():
        raise ValueError(f"{amount} has more precision than {decimals} decimals")
    if value < 0:
        raise ValueError("Token amount cannot be negative")
    return int(value)


def units_to_tokens(units: int, decimals: int = TOKEN_DECIMALS) -> Decimal:
    return Decimal(units) / (Decimal(10) ** decimals)


class RewardAction(Enum):
    QUEST = "QUEST"
    DAILY = "DAILY"


class MintStatus(Enum):
    MINTED = "MINTED"
    SKIPPED = "SKIPPED"  # nothing to mint
    FAILED = "FAILED"  # ledger committed, mint pending reconciliation


@dataclass
class MintFailure:
    """A reward the ledger approved but the minter did not credit."""

    failure_id: str
    action: RewardAction
    user: WalletAddress
    amount: int
    reason: str
    created_at: int
    quest_id: Optional[int] = None
    attempts: int = 1
    resolved_at: Optional[int] = None
    transaction_id: Optional[str] = None
    in_flight: bool = False  # held by a retry pass

    @property
    def is_resolved(self) -> bool:
        return self.resolved_at is not None

    def record_attempt(self, reason: str) -> None:
        self.attempts += 1
        self.reason = reason
        self.in_flight = False

    def resolve(self, at: int, transaction_id: str) -> None:
        self.attempts += 1
        self.resolved_at = at
        self.transaction_id = transaction_id
        self.in_flight = False


@dataclass(frozen=True)
class RewardOutcome:
    action: RewardAction
    user: WalletAddress
    amount: int
    status: MintStatus
    quest_id: Optional[int] = None
    transaction_id: Optional[str] = None
    failure_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_partial(self) -> bool:
        return self.status is MintStatus.FAILED


@dataclass(frozen=True)
class RetryReport:
    attempted: int
    resolved: int
    still_pending: int
