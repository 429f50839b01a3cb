from __future__ import annotations

from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

from questledger.domain.models.RoleModel import Role
from questledger.domain.models.WalletModel import WalletAddress

MongoCollection = AsyncIOMotorCollection[Any]
MongoDatabase = AsyncIOMotorDatabase[Any]


class MongoAuthorityGateway:
    """Owner persisted in ``ledger_roles`` so transfers survive restarts.

    The backend authority is fixed by configuration and never stored.
    """

    def __init__(
        self,
        db: MongoDatabase,
        *,
        initial_owner: WalletAddress,
        backend_authority: WalletAddress,
    ) -> None:
        self._collection: MongoCollection = db["ledger_roles"]
        self._initial_owner = initial_owner
        self._backend_authority = backend_authority

    async def holder(self, role: Role) -> WalletAddress:
        if role is Role.BACKEND_AUTHORITY:
            return self._backend_authority
        doc = await self._collection.find_one({"_id": role.value})
        if not doc:
            return self._initial_owner
        return WalletAddress.parse(doc["holder"])

    async def has_role(self, caller: WalletAddress, role: Role) -> bool:
        return await self.holder(role) == caller

    async def assign(self, role: Role, identity: WalletAddress) -> None:
        if role is not Role.OWNER:
            raise ValueError(f"{role.value} is fixed at construction")
        await self._collection.update_one(
            {"_id": role.value}, {"$set": {"holder": identity.value}}, upsert=True
        )
