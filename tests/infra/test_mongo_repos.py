from __future__ import annotations

import types
from typing import Any, Dict, List, Optional

import pytest
from pymongo.errors import DuplicateKeyError

from ledger_support import ALICE, BOB
from questledger.domain.models.EventModel import EventKind, LedgerEvent
from questledger.domain.models.QuestModel import Quest
from questledger.domain.models.RewardModel import MintFailure, RewardAction
from questledger.domain.models.RoleModel import Role
from questledger.infra.mongo.authority import MongoAuthorityGateway
from questledger.infra.mongo.events_repo import EventLogMongo
from questledger.infra.mongo.mint_failures_repo import MintFailuresRepoMongo
from questledger.infra.mongo.quests_repo import QuestsRepoMongo
from questledger.infra.mongo.user_ledger_repo import UserLedgerRepoMongo

pytestmark = pytest.mark.asyncio


class _FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = list(docs)
        self.sorted_by: Any = None
        self.limited_to: Optional[int] = None

    def sort(self, key, direction=None):
        self.sorted_by = key if direction is None else (key, direction)
        return self

    def limit(self, n):
        self.limited_to = n
        return self

    def __aiter__(self):
        self._iter = iter(self._docs)
        return self

    async def __anext__(self):
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration


class _FakeCollection:
    def __init__(self, *, find_one_result=None, docs=None, matched_count=1):
        self.find_one_result = find_one_result
        self.docs = docs or []
        self.matched_count = matched_count
        self.calls: List[tuple] = []
        self.raise_on_upsert: Optional[Exception] = None

    async def find_one(self, filt):
        self.calls.append(("find_one", filt))
        return self.find_one_result

    async def find_one_and_update(self, filt, update, upsert=False, return_document=None):
        self.calls.append(("find_one_and_update", filt, update, upsert))
        return self.find_one_result

    def find(self, filt):
        self.calls.append(("find", filt))
        self.cursor = _FakeCursor(self.docs)
        return self.cursor

    async def insert_one(self, doc):
        self.calls.append(("insert_one", doc))
        return types.SimpleNamespace(inserted_id=doc.get("_id"))

    async def replace_one(self, filt, doc, upsert=False):
        self.calls.append(("replace_one", filt, doc, upsert))
        return types.SimpleNamespace(matched_count=1)

    async def update_one(self, filt, update, upsert=False):
        self.calls.append(("update_one", filt, update, upsert))
        if upsert and self.raise_on_upsert is not None:
            raise self.raise_on_upsert
        return types.SimpleNamespace(
            matched_count=self.matched_count, modified_count=self.matched_count
        )

    async def create_index(self, keys, name=None):
        self.calls.append(("create_index", keys, name))
        return name


class _FakeDb(dict):
    def __missing__(self, name):
        collection = _FakeCollection()
        self[name] = collection
        return collection


# ---------- quests ----------


async def test_next_id_increments_quest_counter():
    db = _FakeDb(counters=_FakeCollection(find_one_result={"_id": "QUEST", "seq": 4}))
    repo = QuestsRepoMongo(db)

    assert await repo.next_id() == 4

    _, filt, update, upsert = db["counters"].calls[0]
    assert filt == {"_id": "QUEST"}
    assert update == {"$inc": {"seq": 1}}
    assert upsert is True


async def test_last_id_defaults_to_zero():
    repo = QuestsRepoMongo(_FakeDb())
    assert await repo.last_id() == 0


async def test_insert_keys_quest_by_id():
    db = _FakeDb()
    repo = QuestsRepoMongo(db)

    await repo.insert(Quest(quest_id=7, title="A", requirements=["x"], end_date=5))

    _, doc = db["quests"].calls[0]
    assert doc["_id"] == 7
    assert doc["title"] == "A"


async def test_get_decodes_document():
    doc = {"_id": 2, "quest_id": 2, "title": "B", "requirements": ["y"], "is_active": False}
    repo = QuestsRepoMongo(_FakeDb(quests=_FakeCollection(find_one_result=doc)))

    quest = await repo.get(2)

    assert quest.quest_id == 2
    assert quest.is_active is False


async def test_set_active_uses_matched_count():
    db = _FakeDb(quests=_FakeCollection(matched_count=0))
    assert await QuestsRepoMongo(db).set_active(9, False) is False


# ---------- user ledger ----------


async def test_mark_completed_is_a_conditional_update():
    db = _FakeDb()
    repo = UserLedgerRepoMongo(db)

    assert await repo.mark_completed(ALICE, 3, 100) is True

    calls = db["ledger_users"].calls
    assert calls[0][0] == "update_one" and calls[0][3] is True  # ensure document
    _, filt, update, upsert = calls[1]
    assert filt == {"_id": ALICE.value, "quests.3.completed": {"$ne": True}}
    assert update["$set"]["quests.3"] == {
        "quest_id": 3,
        "completed": True,
        "completed_at": 100,
    }
    assert update["$inc"] == {"total_quests_completed": 1}
    assert upsert is False


async def test_mark_completed_reports_lost_race():
    db = _FakeDb(ledger_users=_FakeCollection(matched_count=0))
    assert await UserLedgerRepoMongo(db).mark_completed(ALICE, 3, 100) is False


async def test_ensure_document_tolerates_concurrent_upsert():
    collection = _FakeCollection()
    collection.raise_on_upsert = DuplicateKeyError("dup")
    repo = UserLedgerRepoMongo(_FakeDb(ledger_users=collection))

    assert await repo.compare_and_set_claim(ALICE, None, 50) is True

    _, filt, update, _ = collection.calls[-1]
    assert filt == {"_id": ALICE.value, "daily_claim.claimed": {"$ne": True}}
    assert update == {
        "$set": {"daily_claim.last_claim_time": 50, "daily_claim.claimed": True}
    }


async def test_repeat_claim_matches_previous_claim_time():
    db = _FakeDb()
    repo = UserLedgerRepoMongo(db)

    assert await repo.compare_and_set_claim(ALICE, 0, 3_600) is True

    _, filt, _, _ = db["ledger_users"].calls[-1]
    assert filt == {
        "_id": ALICE.value,
        "daily_claim.claimed": True,
        "daily_claim.last_claim_time": 0,
    }


async def test_get_record_decodes_progress():
    doc = {
        "_id": ALICE.value,
        "quests": {"2": {"quest_id": 2, "completed": True, "completed_at": 9}},
        "total_quests_completed": 1,
        "daily_claim": {"last_claim_time": 77, "claimed": True},
    }
    repo = UserLedgerRepoMongo(_FakeDb(ledger_users=_FakeCollection(find_one_result=doc)))

    record = await repo.get_record(ALICE)

    assert record.user == ALICE
    assert record.progress[2].completed is True
    assert record.total_quests_completed == 1
    assert record.daily_claim.last_claim_time == 77


async def test_get_record_for_unknown_user():
    record = await UserLedgerRepoMongo(_FakeDb()).get_record(BOB)
    assert record.user == BOB
    assert record.progress == {}
    assert record.daily_claim.claimed is False


# ---------- events / mint failures ----------


async def test_recent_events_are_returned_oldest_first():
    newest_first = [
        {"_id": "b", "kind": "DailyClaimed", "at": 2, "data": {}},
        {"_id": "a", "kind": "QuestCreated", "at": 1, "data": {"quest_id": 1}},
    ]
    db = _FakeDb(ledger_events=_FakeCollection(docs=newest_first))

    events = await EventLogMongo(db).recent(2)

    assert [e.kind for e in events] == [EventKind.QUEST_CREATED, EventKind.DAILY_CLAIMED]
    assert db["ledger_events"].cursor.limited_to == 2


async def test_append_event_inserts_document():
    db = _FakeDb()
    await EventLogMongo(db).append(LedgerEvent(kind=EventKind.QUEST_DEACTIVATED, at=3))
    _, doc = db["ledger_events"].calls[0]
    assert doc == {"kind": "QuestDeactivated", "at": 3, "data": {}}


async def test_mint_failures_are_upserted_by_id():
    db = _FakeDb()
    failure = MintFailure(
        failure_id="f1",
        action=RewardAction.DAILY,
        user=ALICE,
        amount=1,
        reason="down",
        created_at=5,
    )

    await MintFailuresRepoMongo(db).record(failure)

    _, filt, doc, upsert = db["mint_failures"].calls[0]
    assert filt == {"_id": "f1"}
    assert doc["user"] == ALICE.value
    assert upsert is True


async def test_pending_mint_failures_filter_unresolved():
    doc = {
        "_id": "f1",
        "failure_id": "f1",
        "action": "QUEST",
        "user": ALICE.value,
        "amount": 3,
        "reason": "down",
        "created_at": 5,
        "quest_id": 1,
        "attempts": 1,
        "resolved_at": None,
        "transaction_id": None,
    }
    db = _FakeDb(mint_failures=_FakeCollection(docs=[doc]))

    [failure] = await MintFailuresRepoMongo(db).pending()

    assert db["mint_failures"].calls[0] == ("find", {"resolved_at": None})
    assert failure.action is RewardAction.QUEST
    assert failure.user == ALICE


async def test_claim_mint_failure_is_conditional():
    db = _FakeDb(mint_failures=_FakeCollection(find_one_result=None))

    assert await MintFailuresRepoMongo(db).claim("f1") is None

    _, filt, update, upsert = db["mint_failures"].calls[0]
    assert filt == {"_id": "f1", "resolved_at": None, "in_flight": {"$ne": True}}
    assert update == {"$set": {"in_flight": True}}
    assert upsert is False


async def test_claim_mint_failure_returns_held_record():
    doc = {
        "_id": "f1",
        "failure_id": "f1",
        "action": "DAILY",
        "user": ALICE.value,
        "amount": 3,
        "reason": "down",
        "created_at": 5,
        "in_flight": True,
    }
    db = _FakeDb(mint_failures=_FakeCollection(find_one_result=doc))

    failure = await MintFailuresRepoMongo(db).claim("f1")

    assert failure.in_flight is True
    assert failure.user == ALICE


# ---------- roles ----------


async def test_owner_defaults_to_configured_wallet():
    gateway = MongoAuthorityGateway(_FakeDb(), initial_owner=ALICE, backend_authority=BOB)
    assert await gateway.holder(Role.OWNER) == ALICE
    assert await gateway.has_role(BOB, Role.BACKEND_AUTHORITY)


async def test_persisted_owner_wins():
    db = _FakeDb(ledger_roles=_FakeCollection(find_one_result={"_id": "OWNER", "holder": BOB.value}))
    gateway = MongoAuthorityGateway(db, initial_owner=ALICE, backend_authority=BOB)
    assert await gateway.has_role(BOB, Role.OWNER)
    assert not await gateway.has_role(ALICE, Role.OWNER)


async def test_assign_owner_persists():
    db = _FakeDb()
    gateway = MongoAuthorityGateway(db, initial_owner=ALICE, backend_authority=BOB)

    await gateway.assign(Role.OWNER, BOB)

    _, filt, update, upsert = db["ledger_roles"].calls[0]
    assert filt == {"_id": "OWNER"}
    assert update == {"$set": {"holder": BOB.value}}
    assert upsert is True
