import pytest

from ledger_support import BACKEND, DAY, OWNER, START, STRANGER, quest_fields
from questledger.domain.errors import InvalidQuest, InvalidSchedule, Unauthorized
from questledger.domain.models.EventModel import EventKind

pytestmark = pytest.mark.asyncio


async def test_owner_creates_quest_with_sequential_ids(ledger, events):
    first = await ledger.create_quest(OWNER, **quest_fields())
    second = await ledger.create_quest(OWNER, **quest_fields(title="Join Discord"))

    assert (first.quest_id, second.quest_id) == (1, 2)
    assert first.created_at == START
    assert first.is_active is True
    assert [e.kind for e in events.events] == [EventKind.QUEST_CREATED] * 2
    assert events.events[1].data["quest_id"] == 2


async def test_created_quest_is_readable(ledger):
    created = await ledger.create_quest(OWNER, **quest_fields())
    fetched = await ledger.get_quest(created.quest_id)
    assert fetched == created


@pytest.mark.parametrize("caller", [BACKEND, STRANGER, "not-a-wallet"])
async def test_only_owner_may_create(ledger, events, caller):
    with pytest.raises(Unauthorized):
        await ledger.create_quest(caller, **quest_fields())

    assert await ledger.get_all_quests() == []
    assert await ledger.quests_repo.last_id() == 0
    assert events.events == []


async def test_end_date_must_be_in_the_future(ledger):
    with pytest.raises(InvalidSchedule):
        await ledger.create_quest(OWNER, **quest_fields(end_date=START))


async def test_rejected_quest_consumes_no_id(ledger):
    with pytest.raises(InvalidQuest):
        await ledger.create_quest(OWNER, **quest_fields(requirements=[]))

    quest = await ledger.create_quest(OWNER, **quest_fields())
    assert quest.quest_id == 1


async def test_create_accepts_any_future_end_date(ledger):
    quest = await ledger.create_quest(OWNER, **quest_fields(end_date=START + 1))
    assert quest.end_date == START + 1
    quest = await ledger.create_quest(OWNER, **quest_fields(end_date=START + 365 * DAY))
    assert quest.quest_id == 2
