"""REST endpoints for per-wallet ledger state and daily claims."""

from fastapi import APIRouter, Depends, Response, status

import questledger.api.deps as deps
from questledger.api.errors import to_http
from questledger.api.mappers import outcome_to_api, user_details_to_api
from questledger.api.schemas import RewardOutcome, UserDetails
from questledger.api.security import get_caller
from questledger.domain.errors import LedgerError
from questledger.domain.models.WalletModel import WalletAddress
from questledger.domain.usecase import rewards as reward_usecases

router = APIRouter(prefix="/v1/users", tags=["Users"])


@router.get("/{address}", response_model=UserDetails)
async def get_user_details(
    address: str, services: deps.Services = Depends(deps.get_services)
) -> UserDetails:
    try:
        details = await services.ledger.get_user_details(address)
    except LedgerError as err:
        raise to_http(err) from err
    return user_details_to_api(details)


@router.post(
    "/{address}:claimDaily",
    response_model=RewardOutcome,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={202: {"description": "Claim recorded, reward mint pending"}},
)
async def claim_daily(
    address: str,
    response: Response,
    caller: WalletAddress = Depends(get_caller),
    services: deps.Services = Depends(deps.get_services),
) -> RewardOutcome:
    """Record the daily claim for a wallet and mint the daily reward."""
    try:
        usecase = reward_usecases.ClaimDailyAndReward(
            ledger=services.ledger,
            minter=services.minter,
            failures=services.mint_failures,
        )
        outcome = await usecase.execute(caller, address)
    except LedgerError as err:
        raise to_http(err) from err

    if outcome.is_partial:
        response.status_code = status.HTTP_202_ACCEPTED
    return outcome_to_api(outcome)
