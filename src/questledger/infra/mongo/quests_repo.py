from __future__ import annotations

from typing import Any, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument

from questledger.domain.models.QuestModel import Quest
from questledger.infra.serialization import from_bson, to_bson

MongoCollection = AsyncIOMotorCollection[Any]
MongoDatabase = AsyncIOMotorDatabase[Any]

QUEST_COUNTER = "QUEST"


class QuestsRepoMongo:
    def __init__(self, db: MongoDatabase) -> None:
        self._quests: MongoCollection = db["quests"]
        self._counters: MongoCollection = db["counters"]

    async def ensure_indexes(self) -> None:
        await self._quests.create_index(
            [("is_active", ASCENDING), ("end_date", ASCENDING)],
            name="ix_quests_availability",
        )

    async def next_id(self) -> int:
        doc = await self._counters.find_one_and_update(
            {"_id": QUEST_COUNTER},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        assert doc is not None
        seq_value = doc.get("seq", 0)
        if not isinstance(seq_value, int):
            raise TypeError(
                f"Counter for {QUEST_COUNTER} returned non-int value: {seq_value!r}"
            )
        return seq_value

    async def last_id(self) -> int:
        doc = await self._counters.find_one({"_id": QUEST_COUNTER})
        if not doc:
            return 0
        return int(doc.get("seq", 0))

    async def insert(self, quest: Quest) -> None:
        doc = to_bson(quest)
        doc["_id"] = quest.quest_id
        await self._quests.insert_one(doc)

    async def get(self, quest_id: int) -> Optional[Quest]:
        doc = await self._quests.find_one({"_id": quest_id})
        return from_bson(Quest, doc) if doc else None

    async def list_all(self) -> List[Quest]:
        cursor = self._quests.find({}).sort("_id", ASCENDING)
        return [from_bson(Quest, doc) async for doc in cursor]

    async def set_active(self, quest_id: int, active: bool) -> bool:
        res = await self._quests.update_one(
            {"_id": quest_id}, {"$set": {"is_active": active}}
        )
        return res.matched_count == 1
