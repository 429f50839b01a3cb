"""REST endpoints for the quest catalog and completions."""

from typing import List

from fastapi import APIRouter, Depends, Response, status

import questledger.api.deps as deps
from questledger.api.errors import to_http
from questledger.api.mappers import outcome_to_api, quest_to_api
from questledger.api.schemas import CompletionRequest, Quest, QuestCreate, RewardOutcome
from questledger.api.security import get_caller
from questledger.domain.errors import LedgerError
from questledger.domain.models.WalletModel import WalletAddress
from questledger.domain.usecase import rewards as reward_usecases

router = APIRouter(prefix="/v1/quests", tags=["Quests"])


@router.post("", response_model=Quest, status_code=status.HTTP_201_CREATED)
async def create_quest(
    body: QuestCreate,
    caller: WalletAddress = Depends(get_caller),
    services: deps.Services = Depends(deps.get_services),
) -> Quest:
    """Publish a new quest. Owner only."""
    try:
        quest = await services.ledger.create_quest(
            caller,
            title=body.title,
            description=body.description,
            reward=body.reward,
            requirements=body.requirements,
            estimated_time_minutes=body.estimated_time_minutes,
            end_date=body.end_date,
        )
    except LedgerError as err:
        raise to_http(err) from err
    return quest_to_api(quest, services.clock.now())


@router.get("", response_model=List[Quest])
async def list_quests(services: deps.Services = Depends(deps.get_services)) -> List[Quest]:
    quests = await services.ledger.get_all_quests()
    now = services.clock.now()
    return [quest_to_api(quest, now) for quest in quests]


@router.get("/{quest_id}", response_model=Quest)
async def get_quest(
    quest_id: str, services: deps.Services = Depends(deps.get_services)
) -> Quest:
    """Fetch a quest by its identifier."""
    try:
        quest = await services.ledger.get_quest(quest_id)
    except LedgerError as err:
        raise to_http(err) from err
    return quest_to_api(quest, services.clock.now())


@router.post("/{quest_id}:deactivate", response_model=Quest)
async def deactivate_quest(
    quest_id: str,
    caller: WalletAddress = Depends(get_caller),
    services: deps.Services = Depends(deps.get_services),
) -> Quest:
    """Stop accepting completions for a quest. Owner only."""
    try:
        quest = await services.ledger.deactivate_quest(caller, quest_id)
    except LedgerError as err:
        raise to_http(err) from err
    return quest_to_api(quest, services.clock.now())


@router.post(
    "/{quest_id}/completions",
    response_model=RewardOutcome,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={202: {"description": "Completion recorded, reward mint pending"}},
)
async def complete_quest(
    quest_id: str,
    body: CompletionRequest,
    response: Response,
    caller: WalletAddress = Depends(get_caller),
    services: deps.Services = Depends(deps.get_services),
) -> RewardOutcome:
    """Record a verified completion for a user and mint the quest reward."""
    try:
        usecase = reward_usecases.CompleteQuestAndReward(
            ledger=services.ledger,
            minter=services.minter,
            failures=services.mint_failures,
            verifier=services.verifier,
        )
        outcome = await usecase.execute(caller, body.user, quest_id, body.evidence)
    except LedgerError as err:
        raise to_http(err) from err

    if outcome.is_partial:
        response.status_code = status.HTTP_202_ACCEPTED
    return outcome_to_api(outcome)
