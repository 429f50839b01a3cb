from __future__ import annotations

from typing import Any, List

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from questledger.domain.models.EventModel import LedgerEvent
from questledger.infra.serialization import from_bson, to_bson

MongoCollection = AsyncIOMotorCollection[Any]
MongoDatabase = AsyncIOMotorDatabase[Any]


class EventLogMongo:
    """Append-only ledger event log."""

    def __init__(self, db: MongoDatabase) -> None:
        self._collection: MongoCollection = db["ledger_events"]

    async def ensure_indexes(self) -> None:
        await self._collection.create_index(
            [("kind", ASCENDING), ("at", ASCENDING)], name="ix_events_kind_at"
        )

    async def append(self, event: LedgerEvent) -> None:
        await self._collection.insert_one(to_bson(event))

    async def recent(self, limit: int) -> List[LedgerEvent]:
        cursor = (
            self._collection.find({})
            .sort([("at", DESCENDING), ("_id", DESCENDING)])
            .limit(limit)
        )
        newest_first = [from_bson(LedgerEvent, doc) async for doc in cursor]
        return list(reversed(newest_first))
