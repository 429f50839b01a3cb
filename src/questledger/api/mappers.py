from __future__ import annotations

from questledger.api.schemas import DailyClaim as APIDailyClaim
from questledger.api.schemas import LedgerEvent as APILedgerEvent
from questledger.api.schemas import MintFailure as APIMintFailure
from questledger.api.schemas import MintStatus as APIMintStatus
from questledger.api.schemas import Quest as APIQuest
from questledger.api.schemas import RetryReport as APIRetryReport
from questledger.api.schemas import RewardAction as APIRewardAction
from questledger.api.schemas import RewardOutcome as APIRewardOutcome
from questledger.api.schemas import UserDetails as APIUserDetails
from questledger.domain.models.EventModel import LedgerEvent as DLedgerEvent
from questledger.domain.models.QuestModel import Quest as DQuest
from questledger.domain.models.RewardModel import MintFailure as DMintFailure
from questledger.domain.models.RewardModel import RetryReport as DRetryReport
from questledger.domain.models.RewardModel import RewardOutcome as DRewardOutcome
from questledger.domain.models.RewardModel import units_to_tokens
from questledger.domain.models.UserDetailsModel import UserDetails as DUserDetails


def _tokens(units: int) -> str:
    return format(units_to_tokens(units).normalize(), "f")


def quest_to_api(quest: DQuest, now: int) -> APIQuest:
    return APIQuest(
        quest_id=quest.quest_id,
        title=quest.title,
        description=quest.description,
        reward=quest.reward,
        reward_tokens=_tokens(quest.reward),
        requirements=list(quest.requirements),
        estimated_time_minutes=quest.estimated_time_minutes,
        created_at=quest.created_at,
        end_date=quest.end_date,
        is_active=quest.is_active,
        is_available=quest.is_available(now),
    )


def user_details_to_api(details: DUserDetails) -> APIUserDetails:
    return APIUserDetails(
        user=str(details.user),
        completed_quest_ids=list(details.completed_quest_ids),
        total_quests_completed=details.total_quests_completed,
        daily_claim=APIDailyClaim(
            last_claim_time=details.daily_claim.last_claim_time,
            claimed=details.daily_claim.claimed,
        ),
        can_claim_daily=details.can_claim_daily,
        time_until_next_claim=details.time_until_next_claim,
    )


def outcome_to_api(outcome: DRewardOutcome) -> APIRewardOutcome:
    return APIRewardOutcome(
        action=APIRewardAction(outcome.action.value),
        user=str(outcome.user),
        amount=outcome.amount,
        amount_tokens=_tokens(outcome.amount),
        status=APIMintStatus(outcome.status.value),
        quest_id=outcome.quest_id,
        transaction_id=outcome.transaction_id,
        failure_id=outcome.failure_id,
        error=outcome.error,
    )


def mint_failure_to_api(failure: DMintFailure) -> APIMintFailure:
    return APIMintFailure(
        failure_id=failure.failure_id,
        action=APIRewardAction(failure.action.value),
        user=str(failure.user),
        amount=failure.amount,
        reason=failure.reason,
        created_at=failure.created_at,
        quest_id=failure.quest_id,
        attempts=failure.attempts,
    )


def retry_report_to_api(report: DRetryReport) -> APIRetryReport:
    return APIRetryReport(
        attempted=report.attempted,
        resolved=report.resolved,
        still_pending=report.still_pending,
    )


def event_to_api(event: DLedgerEvent) -> APILedgerEvent:
    return APILedgerEvent(kind=event.kind.value, at=event.at, data=dict(event.data))
