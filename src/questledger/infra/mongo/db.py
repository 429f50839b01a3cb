# questledger/infra/mongo/db.py
from __future__ import annotations

import logging
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from questledger.core.settings import Settings

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient[Any]] = None


def get_client(settings: Settings) -> AsyncIOMotorClient[Any]:
    """Return a cached AsyncIOMotorClient (lazy init)."""
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(
            settings.mongodb_uri,
            appname="questledger",
            serverSelectionTimeoutMS=5000,
            socketTimeoutMS=5000,
            connectTimeoutMS=5000,
            uuidRepresentation="standard",
        )
    return _client


def get_db(settings: Settings) -> AsyncIOMotorDatabase[Any]:
    return get_client(settings)[settings.db_name]


async def ping(settings: Settings) -> bool:
    try:
        await get_client(settings).admin.command("ping")
        return True
    except PyMongoError as exc:
        logger.warning("Mongo ping failed: %s", exc)
        return False


async def close_client() -> None:
    """Close the cached client (useful for app shutdown / tests)."""
    global _client
    if _client is not None:
        _client.close()
        _client = None
