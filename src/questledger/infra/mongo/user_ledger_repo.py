from __future__ import annotations

from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from questledger.domain.models.ProgressModel import UserLedgerRecord
from questledger.domain.models.WalletModel import WalletAddress
from questledger.infra.serialization import from_bson

MongoCollection = AsyncIOMotorCollection[Any]
MongoDatabase = AsyncIOMotorDatabase[Any]


class UserLedgerRepoMongo:
    """One document per wallet; every transition is a single conditional update.

    Document shape::

        {
            "_id": "0xabc...",
            "quests": {"<quest_id>": {"quest_id", "completed", "completed_at"}},
            "total_quests_completed": int,
            "daily_claim": {"last_claim_time": int, "claimed": bool},
        }
    """

    def __init__(self, db: MongoDatabase) -> None:
        self._collection: MongoCollection = db["ledger_users"]

    async def _ensure_document(self, user: WalletAddress) -> None:
        try:
            await self._collection.update_one(
                {"_id": user.value},
                {
                    "$setOnInsert": {
                        "quests": {},
                        "total_quests_completed": 0,
                        "daily_claim": {"last_claim_time": 0, "claimed": False},
                    }
                },
                upsert=True,
            )
        except DuplicateKeyError:
            # a concurrent upsert created it first
            return

    async def get_record(self, user: WalletAddress) -> UserLedgerRecord:
        doc = await self._collection.find_one({"_id": user.value})
        if not doc:
            return UserLedgerRecord(user=user)
        return from_bson(
            UserLedgerRecord,
            {
                "user": doc["_id"],
                "progress": doc.get("quests") or {},
                "total_quests_completed": doc.get("total_quests_completed", 0),
                "daily_claim": doc.get("daily_claim")
                or {"last_claim_time": 0, "claimed": False},
            },
        )

    async def mark_completed(self, user: WalletAddress, quest_id: int, at: int) -> bool:
        await self._ensure_document(user)
        key = f"quests.{quest_id}"
        res = await self._collection.update_one(
            {"_id": user.value, f"{key}.completed": {"$ne": True}},
            {
                "$set": {
                    key: {"quest_id": quest_id, "completed": True, "completed_at": at}
                },
                "$inc": {"total_quests_completed": 1},
            },
        )
        return res.matched_count == 1

    async def compare_and_set_claim(
        self, user: WalletAddress, expected_last_claim: Optional[int], at: int
    ) -> bool:
        await self._ensure_document(user)
        filt: Dict[str, Any] = {"_id": user.value}
        if expected_last_claim is None:
            filt["daily_claim.claimed"] = {"$ne": True}
        else:
            filt["daily_claim.claimed"] = True
            filt["daily_claim.last_claim_time"] = expected_last_claim
        res = await self._collection.update_one(
            filt,
            {
                "$set": {
                    "daily_claim.last_claim_time": at,
                    "daily_claim.claimed": True,
                }
            },
        )
        return res.matched_count == 1
