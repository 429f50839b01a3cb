from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from fastapi import Depends, FastAPI
from starlette.middleware.cors import CORSMiddleware

import questledger.api.deps as deps
from questledger.api.routers.admin import router as admin_router
from questledger.api.routers.quests import router as quests_router
from questledger.api.routers.users import router as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    services = deps.get_services()
    await deps.startup(services)
    logger.info("Quest ledger API started (%s store)", services.settings.store)
    try:
        yield
    finally:
        await deps.shutdown(services)


def create_app() -> FastAPI:
    app = FastAPI(title="Quest Ledger API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(quests_router)
    app.include_router(users_router)
    app.include_router(admin_router)

    @app.get("/healthz")
    async def healthz(
        services: deps.Services = Depends(deps.get_services),
    ) -> Dict[str, Any]:
        ok = True
        if services.settings.uses_mongo:
            from questledger.infra.mongo.db import ping

            ok = await ping(services.settings)
        return {"ok": ok, "store": services.settings.store}

    return app


app = create_app()
