"""Owner and backend-authority maintenance endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Query

import questledger.api.deps as deps
from questledger.api.errors import to_http
from questledger.api.mappers import (
    event_to_api,
    mint_failure_to_api,
    retry_report_to_api,
)
from questledger.api.schemas import (
    LedgerEvent,
    MintFailure,
    Ownership,
    OwnershipTransfer,
    RetryReport,
)
from questledger.api.security import get_caller
from questledger.domain.errors import LedgerError
from questledger.domain.models.WalletModel import WalletAddress
from questledger.domain.usecase import rewards as reward_usecases

router = APIRouter(prefix="/v1/admin", tags=["Admin"])


@router.post("/ownership", response_model=Ownership)
async def transfer_ownership(
    body: OwnershipTransfer,
    caller: WalletAddress = Depends(get_caller),
    services: deps.Services = Depends(deps.get_services),
) -> Ownership:
    try:
        owner = await services.ledger.transfer_ownership(caller, body.new_owner)
    except LedgerError as err:
        raise to_http(err) from err
    return Ownership(owner=str(owner))


@router.get("/events", response_model=List[LedgerEvent])
async def list_events(
    limit: int = Query(default=100, ge=1, le=500),
    _caller: WalletAddress = Depends(get_caller),
    services: deps.Services = Depends(deps.get_services),
) -> List[LedgerEvent]:
    events = await services.ledger.list_events(limit)
    return [event_to_api(event) for event in events]


@router.get("/mint-failures", response_model=List[MintFailure])
async def list_mint_failures(
    caller: WalletAddress = Depends(get_caller),
    services: deps.Services = Depends(deps.get_services),
) -> List[MintFailure]:
    try:
        usecase = reward_usecases.ListPendingMints(
            ledger=services.ledger, failures=services.mint_failures
        )
        failures = await usecase.execute(caller)
    except LedgerError as err:
        raise to_http(err) from err
    return [mint_failure_to_api(failure) for failure in failures]


@router.post("/mint-failures:retry", response_model=RetryReport)
async def retry_mint_failures(
    caller: WalletAddress = Depends(get_caller),
    services: deps.Services = Depends(deps.get_services),
) -> RetryReport:
    """Re-attempt every pending reward mint once."""
    try:
        usecase = reward_usecases.RetryFailedMints(
            ledger=services.ledger,
            minter=services.minter,
            failures=services.mint_failures,
            clock=services.clock,
        )
        report = await usecase.execute(caller)
    except LedgerError as err:
        raise to_http(err) from err
    return retry_report_to_api(report)
