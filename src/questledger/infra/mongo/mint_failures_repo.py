from __future__ import annotations

from typing import Any, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument

from questledger.domain.models.RewardModel import MintFailure
from questledger.infra.serialization import from_bson, to_bson

MongoCollection = AsyncIOMotorCollection[Any]
MongoDatabase = AsyncIOMotorDatabase[Any]


class MintFailuresRepoMongo:
    """Persists rewards the ledger approved but the minter did not credit."""

    def __init__(self, db: MongoDatabase) -> None:
        self._collection: MongoCollection = db["mint_failures"]

    async def ensure_indexes(self) -> None:
        await self._collection.create_index(
            [("resolved_at", ASCENDING), ("created_at", ASCENDING)],
            name="ix_mint_failures_pending",
        )

    async def record(self, failure: MintFailure) -> None:
        await self.save(failure)

    async def save(self, failure: MintFailure) -> None:
        doc = to_bson(failure)
        doc["_id"] = failure.failure_id
        await self._collection.replace_one({"_id": failure.failure_id}, doc, upsert=True)

    async def claim(self, failure_id: str) -> Optional[MintFailure]:
        doc = await self._collection.find_one_and_update(
            {"_id": failure_id, "resolved_at": None, "in_flight": {"$ne": True}},
            {"$set": {"in_flight": True}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            return None
        return from_bson(MintFailure, doc)

    async def pending(self) -> List[MintFailure]:
        cursor = self._collection.find({"resolved_at": None}).sort(
            "created_at", ASCENDING
        )
        return [from_bson(MintFailure, doc) async for doc in cursor]
