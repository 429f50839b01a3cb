from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterator
from typing import Any

import pytest
import pytest_asyncio

from ledger_support import BACKEND, OWNER, FakeClock, RecordingMinter
from questledger.api import deps
from questledger.api.main import app
from questledger.api.security import create_access_token
from questledger.core.settings import Settings
from questledger.domain.models.WalletModel import WalletAddress

TEST_JWT_SECRET = "test-secret"


@pytest.fixture()
def api_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def services(api_clock: FakeClock) -> Iterator[deps.Services]:
    settings = Settings(
        owner_address=OWNER,
        backend_authority_address=BACKEND,
        jwt_secret=TEST_JWT_SECRET,
    )
    built = deps.build_services(settings, clock=api_clock)
    built.minter = RecordingMinter()
    deps.set_services(built)
    try:
        yield built
    finally:
        deps.set_services(None)


@pytest_asyncio.fixture()
async def api_client(services: deps.Services) -> AsyncIterator[Any]:
    from httpx import ASGITransport, AsyncClient

    transport: Any = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture()
def auth_headers() -> Callable[[WalletAddress | str], dict[str, str]]:
    def _headers(wallet: WalletAddress | str) -> dict[str, str]:
        token = create_access_token(sub=str(wallet), secret=TEST_JWT_SECRET)
        return {"Authorization": f"Bearer {token}"}

    return _headers
