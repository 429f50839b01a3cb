"""Failure kinds surfaced by the quest ledger.

Every ledger rejection is terminal and synchronous: the ledger never retries.
Callers either fix the input (wait out a cooldown, pick an existing quest) or
treat the condition as steady state (``AlreadyCompleted``).
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict


class LedgerError(Exception):
    """Base class for every rejection raised by a ledger operation."""

    code: ClassVar[str] = "ledger_error"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, **self.details}


class Unauthorized(LedgerError):
    code = "unauthorized"


class NotFound(LedgerError):
    code = "not_found"


class QuestUnavailable(LedgerError):
    """Quest is deactivated or past its end date; both share this kind."""

    code = "quest_unavailable"


class InvalidUser(LedgerError):
    code = "invalid_user"


class InvalidQuest(LedgerError):
    code = "invalid_quest"


class InvalidSchedule(LedgerError):
    code = "invalid_schedule"


class AlreadyCompleted(LedgerError):
    code = "already_completed"


class RequirementsNotMet(LedgerError):
    """The user has not done what the quest asks; raised before anything is recorded."""

    code = "requirements_not_met"


class CooldownActive(LedgerError):
    code = "cooldown_active"

    def __init__(self, remaining_seconds: int) -> None:
        super().__init__(
            f"Daily claim available again in {remaining_seconds} seconds",
            time_until_next_claim=remaining_seconds,
        )
        self.remaining_seconds = remaining_seconds


class MintError(Exception):
    """Raised by a reward minter when the balance credit did not happen."""


__all__ = [
    "LedgerError",
    "Unauthorized",
    "NotFound",
    "QuestUnavailable",
    "InvalidUser",
    "InvalidQuest",
    "InvalidSchedule",
    "AlreadyCompleted",
    "CooldownActive",
    "MintError",
]
