from questledger.domain.usecase.rewards.distribute import (
    AcceptAllVerifier,
    ClaimDailyAndReward,
    CompleteQuestAndReward,
    ListPendingMints,
    RetryFailedMints,
    mint_after_commit,
)

__all__ = [
    "AcceptAllVerifier",
    "CompleteQuestAndReward",
    "ClaimDailyAndReward",
    "ListPendingMints",
    "RetryFailedMints",
    "mint_after_commit",
]
