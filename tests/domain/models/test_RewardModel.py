from decimal import Decimal

import pytest

from questledger.domain.models.RewardModel import (
    MintFailure,
    MintStatus,
    RewardAction,
    RewardOutcome,
    tokens_to_units,
    units_to_tokens,
)
from questledger.domain.models.WalletModel import WalletAddress

USER = WalletAddress("0x" + "ab" * 20)


@pytest.mark.parametrize(
    "tokens, units",
    [("1", 10**18), (50, 50 * 10**18), ("0.5", 5 * 10**17), ("0", 0)],
)
def test_tokens_to_units(tokens, units):
    assert tokens_to_units(tokens) == units


def test_units_to_tokens_is_exact():
    assert units_to_tokens(15 * 10**17) == Decimal("1.5")


def test_excess_precision_is_rejected():
    with pytest.raises(ValueError):
        tokens_to_units("0.0000000000000000001")


def test_negative_amount_is_rejected():
    with pytest.raises(ValueError):
        tokens_to_units("-1")


def test_custom_decimals():
    assert tokens_to_units("2.5", decimals=2) == 250


def test_mint_failure_lifecycle():
    failure = MintFailure(
        failure_id="f1",
        action=RewardAction.DAILY,
        user=USER,
        amount=1,
        reason="timeout",
        created_at=10,
    )
    assert failure.is_resolved is False

    failure.record_attempt("still down")
    assert failure.attempts == 2 and failure.reason == "still down"

    failure.resolve(20, "tx-9")
    assert failure.is_resolved is True
    assert failure.attempts == 3
    assert failure.transaction_id == "tx-9"


def test_only_failed_outcomes_are_partial():
    failed = RewardOutcome(RewardAction.QUEST, USER, 1, MintStatus.FAILED)
    minted = RewardOutcome(RewardAction.QUEST, USER, 1, MintStatus.MINTED)
    assert failed.is_partial is True
    assert minted.is_partial is False
