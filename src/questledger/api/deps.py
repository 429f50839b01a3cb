"""Shared dependency providers for FastAPI routers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from fastapi import Depends

from questledger.core.settings import Settings, load_settings
from questledger.domain.ledger import QuestLedger
from questledger.domain.usecase.ports import (
    Clock,
    MintFailuresRepo,
    QuestVerifier,
    RewardMinter,
)
from questledger.domain.usecase.rewards import AcceptAllVerifier
from questledger.infra.clock import SystemClock
from questledger.infra.memory.authority import StaticAuthorityGateway
from questledger.infra.memory.events import EventLogMemory
from questledger.infra.memory.mint_failures_repo import MintFailuresRepoMemory
from questledger.infra.memory.quests_repo import QuestsRepoMemory
from questledger.infra.memory.user_ledger_repo import UserLedgerRepoMemory
from questledger.infra.thirdweb.minter import LoggingRewardMinter, ThirdwebRewardMinter

logger = logging.getLogger(__name__)


@dataclass
class Services:
    settings: Settings
    ledger: QuestLedger
    minter: RewardMinter
    mint_failures: MintFailuresRepo
    clock: Clock
    verifier: QuestVerifier = field(default_factory=AcceptAllVerifier)


_services: Optional[Services] = None


def build_minter(settings: Settings) -> RewardMinter:
    if not settings.thirdweb_configured:
        logger.warning("Thirdweb is not configured; rewards are minted in dry-run mode")
        return LoggingRewardMinter()
    assert settings.thirdweb_secret_key is not None
    assert settings.token_contract_address is not None
    assert settings.admin_address is not None
    return ThirdwebRewardMinter(
        base_url=settings.thirdweb_base_url,
        secret_key=settings.thirdweb_secret_key,
        token_contract=settings.token_contract_address,
        chain_id=settings.chain_id,
        admin_address=settings.admin_address,
    )


def build_services(settings: Settings, *, clock: Optional[Clock] = None) -> Services:
    """Wire the ledger against the configured store."""
    clock = clock or SystemClock()

    if settings.uses_mongo:
        from questledger.infra.mongo.authority import MongoAuthorityGateway
        from questledger.infra.mongo.db import get_db
        from questledger.infra.mongo.events_repo import EventLogMongo
        from questledger.infra.mongo.mint_failures_repo import MintFailuresRepoMongo
        from questledger.infra.mongo.quests_repo import QuestsRepoMongo
        from questledger.infra.mongo.user_ledger_repo import UserLedgerRepoMongo

        db = get_db(settings)
        ledger = QuestLedger(
            quests_repo=QuestsRepoMongo(db),
            users_repo=UserLedgerRepoMongo(db),
            authority=MongoAuthorityGateway(
                db,
                initial_owner=settings.owner_address,
                backend_authority=settings.backend_authority_address,
            ),
            events=EventLogMongo(db),
            clock=clock,
            cooldown_seconds=settings.daily_cooldown_seconds,
            daily_reward_units=settings.daily_reward_units,
        )
        mint_failures: MintFailuresRepo = MintFailuresRepoMongo(db)
    else:
        ledger = QuestLedger(
            quests_repo=QuestsRepoMemory(),
            users_repo=UserLedgerRepoMemory(),
            authority=StaticAuthorityGateway(
                owner=settings.owner_address,
                backend_authority=settings.backend_authority_address,
            ),
            events=EventLogMemory(),
            clock=clock,
            cooldown_seconds=settings.daily_cooldown_seconds,
            daily_reward_units=settings.daily_reward_units,
        )
        mint_failures = MintFailuresRepoMemory()

    logger.info(
        "Ledger wired with %s store (cooldown %ss)",
        settings.store,
        settings.daily_cooldown_seconds,
    )
    return Services(
        settings=settings,
        ledger=ledger,
        minter=build_minter(settings),
        mint_failures=mint_failures,
        clock=clock,
    )


def set_services(services: Optional[Services]) -> None:
    global _services
    _services = services


def get_services() -> Services:
    """Expose the process-wide services, building them on first use."""
    global _services
    if _services is None:
        _services = build_services(load_settings())
    return _services


def get_settings(services: Services = Depends(get_services)) -> Settings:
    return services.settings


def get_ledger(services: Services = Depends(get_services)) -> QuestLedger:
    return services.ledger


async def startup(services: Services) -> None:
    if not services.settings.uses_mongo:
        return
    for component in (
        services.ledger.quests_repo,
        services.ledger.events,
        services.mint_failures,
    ):
        ensure_indexes = getattr(component, "ensure_indexes", None)
        if ensure_indexes is not None:
            await ensure_indexes()


async def shutdown(services: Optional[Services]) -> None:
    if services is None or not services.settings.uses_mongo:
        return
    from questledger.infra.mongo.db import close_client

    await close_client()
