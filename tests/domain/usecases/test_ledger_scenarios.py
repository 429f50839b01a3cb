"""End-to-end walkthroughs of the ledger's two headline flows."""

import pytest

from ledger_support import ALICE, BACKEND, BOB, DAY, OWNER, FakeClock, quest_fields
from questledger.domain.errors import AlreadyCompleted, CooldownActive, QuestUnavailable
from questledger.domain.ledger import QuestLedger
from questledger.infra.memory.authority import StaticAuthorityGateway
from questledger.infra.memory.events import EventLogMemory
from questledger.infra.memory.quests_repo import QuestsRepoMemory
from questledger.infra.memory.user_ledger_repo import UserLedgerRepoMemory

pytestmark = pytest.mark.asyncio


async def test_quest_lifecycle(ledger, clock):
    quest = await ledger.create_quest(
        OWNER, **quest_fields(reward=50, end_date=clock.now() + DAY)
    )

    await ledger.complete_quest_for_user(BACKEND, ALICE, quest.quest_id)
    details = await ledger.get_user_details(ALICE)
    assert details.completed_quest_ids == (quest.quest_id,)

    with pytest.raises(AlreadyCompleted):
        await ledger.complete_quest_for_user(BACKEND, ALICE, quest.quest_id)

    clock.advance(DAY + 1)
    with pytest.raises(QuestUnavailable):
        await ledger.complete_quest_for_user(BACKEND, BOB, quest.quest_id)

    assert (await ledger.get_user_details(BOB)).completed_quest_ids == ()


async def test_hourly_cooldown():
    clock = FakeClock(now=0)
    ledger = QuestLedger(
        quests_repo=QuestsRepoMemory(),
        users_repo=UserLedgerRepoMemory(),
        authority=StaticAuthorityGateway(owner=OWNER, backend_authority=BACKEND),
        events=EventLogMemory(),
        clock=clock,
        cooldown_seconds=3_600,
    )

    await ledger.set_daily_claimed(BACKEND, ALICE)
    details = await ledger.get_user_details(ALICE)
    assert details.can_claim_daily is False
    assert details.time_until_next_claim == 3_600

    clock.advance(1_800)
    with pytest.raises(CooldownActive):
        await ledger.set_daily_claimed(BACKEND, ALICE)
    assert (await ledger.get_user_details(ALICE)).time_until_next_claim == 1_800

    clock.advance(1_800)
    await ledger.set_daily_claimed(BACKEND, ALICE)
    assert (await ledger.get_user_details(ALICE)).daily_claim.last_claim_time == 3_600
