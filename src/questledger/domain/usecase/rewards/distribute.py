"""Reward minting sequenced after ledger commits.

The ledger records completions and claims; tokens move only afterwards,
through the injected ``RewardMinter``. A failed mint never rolls the ledger
back. It is stored as a ``MintFailure`` and reported as a partial success so
the caller can tell the user the action counted but the payout is pending.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import uuid4

from questledger.domain.ledger import QuestLedger
from questledger.domain.models.RewardModel import (
    MintFailure,
    MintStatus,
    RetryReport,
    RewardAction,
    RewardOutcome,
)
from questledger.domain.models.QuestModel import Quest
from questledger.domain.models.RoleModel import RECORDING_ROLES
from questledger.domain.models.WalletModel import WalletAddress
from questledger.domain.usecase._shared import parse_wallet, require_role
from questledger.domain.usecase.ports import (
    Clock,
    MintFailuresRepo,
    QuestVerifier,
    RewardMinter,
)

logger = logging.getLogger(__name__)


class AcceptAllVerifier:
    """Trusts the recording caller to have checked the requirements."""

    async def verify(
        self, user: WalletAddress, quest: Quest, evidence: Dict[str, Any]
    ) -> None:
        return None


async def mint_after_commit(
    minter: RewardMinter,
    failures: MintFailuresRepo,
    *,
    action: RewardAction,
    user: WalletAddress,
    amount: int,
    at: int,
    quest_id: Optional[int] = None,
) -> RewardOutcome:
    if amount <= 0:
        return RewardOutcome(
            action=action,
            user=user,
            amount=amount,
            status=MintStatus.SKIPPED,
            quest_id=quest_id,
        )

    try:
        transaction_id = await minter.mint(user, amount)
    except Exception as err:
        # ledger state is already committed; keep the debt for reconciliation
        logger.exception(
            "Mint of %s units to %s failed after %s was recorded",
            amount,
            user,
            action.value,
        )
        failure = MintFailure(
            failure_id=uuid4().hex,
            action=action,
            user=user,
            amount=amount,
            reason=str(err) or type(err).__name__,
            created_at=at,
            quest_id=quest_id,
        )
        await failures.record(failure)
        return RewardOutcome(
            action=action,
            user=user,
            amount=amount,
            status=MintStatus.FAILED,
            quest_id=quest_id,
            failure_id=failure.failure_id,
            error=failure.reason,
        )

    logger.info("Minted %s units to %s (%s)", amount, user.short, transaction_id)
    return RewardOutcome(
        action=action,
        user=user,
        amount=amount,
        status=MintStatus.MINTED,
        quest_id=quest_id,
        transaction_id=transaction_id,
    )


@dataclass(slots=True)
class CompleteQuestAndReward:
    ledger: QuestLedger
    minter: RewardMinter
    failures: MintFailuresRepo
    verifier: QuestVerifier = field(default_factory=AcceptAllVerifier)

    async def execute(
        self,
        caller: WalletAddress | str,
        user: WalletAddress | str,
        quest_id: int | str,
        evidence: Optional[Dict[str, Any]] = None,
    ) -> RewardOutcome:
        await require_role(self.ledger.authority, caller, *RECORDING_ROLES)
        wallet = parse_wallet(user)
        quest = await self.ledger.get_quest(quest_id)
        # requirements are checked here; the ledger only records the result
        await self.verifier.verify(wallet, quest, evidence or {})

        completion = await self.ledger.complete_quest_for_user(caller, wallet, quest_id)
        return await mint_after_commit(
            self.minter,
            self.failures,
            action=RewardAction.QUEST,
            user=completion.user,
            amount=completion.quest.reward,
            at=completion.completed_at,
            quest_id=completion.quest.quest_id,
        )


@dataclass(slots=True)
class ClaimDailyAndReward:
    ledger: QuestLedger
    minter: RewardMinter
    failures: MintFailuresRepo

    async def execute(
        self, caller: WalletAddress | str, user: WalletAddress | str
    ) -> RewardOutcome:
        receipt = await self.ledger.set_daily_claimed(caller, user)
        return await mint_after_commit(
            self.minter,
            self.failures,
            action=RewardAction.DAILY,
            user=receipt.user,
            amount=receipt.amount,
            at=receipt.claimed_at,
        )


@dataclass(slots=True)
class RetryFailedMints:
    ledger: QuestLedger
    minter: RewardMinter
    failures: MintFailuresRepo
    clock: Clock

    async def execute(self, caller: WalletAddress | str) -> RetryReport:
        await require_role(self.ledger.authority, caller, *RECORDING_ROLES)

        attempted = 0
        resolved = 0
        for candidate in await self.failures.pending():
            # only the pass that claims a failure may mint it
            failure = await self.failures.claim(candidate.failure_id)
            if failure is None:
                continue
            attempted += 1
            try:
                transaction_id = await self.minter.mint(failure.user, failure.amount)
            except Exception as err:
                logger.warning(
                    "Retry of mint %s for %s failed: %s",
                    failure.failure_id,
                    failure.user.short,
                    err,
                )
                failure.record_attempt(str(err) or type(err).__name__)
            else:
                failure.resolve(self.clock.now(), transaction_id)
                resolved += 1
            await self.failures.save(failure)

        report = RetryReport(
            attempted=attempted,
            resolved=resolved,
            still_pending=attempted - resolved,
        )
        logger.info(
            "Mint retry pass: %s attempted, %s resolved", report.attempted, resolved
        )
        return report


@dataclass(slots=True)
class ListPendingMints:
    ledger: QuestLedger
    failures: MintFailuresRepo

    async def execute(self, caller: WalletAddress | str) -> List[MintFailure]:
        await require_role(self.ledger.authority, caller, *RECORDING_ROLES)
        return await self.failures.pending()
