"""Translate ledger rejections into HTTP errors."""

from __future__ import annotations

from typing import Dict, Type

from fastapi import HTTPException, status

from questledger.domain.errors import (
    AlreadyCompleted,
    CooldownActive,
    InvalidQuest,
    InvalidSchedule,
    InvalidUser,
    LedgerError,
    NotFound,
    QuestUnavailable,
    RequirementsNotMet,
    Unauthorized,
)

STATUS_BY_ERROR: Dict[Type[LedgerError], int] = {
    Unauthorized: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidUser: status.HTTP_400_BAD_REQUEST,
    InvalidQuest: status.HTTP_400_BAD_REQUEST,
    InvalidSchedule: status.HTTP_400_BAD_REQUEST,
    QuestUnavailable: status.HTTP_410_GONE,
    AlreadyCompleted: status.HTTP_409_CONFLICT,
    RequirementsNotMet: 422,  # unprocessable content
    CooldownActive: status.HTTP_429_TOO_MANY_REQUESTS,
}


def to_http(err: LedgerError) -> HTTPException:
    status_code = STATUS_BY_ERROR.get(type(err), status.HTTP_400_BAD_REQUEST)
    headers = None
    if isinstance(err, CooldownActive):
        headers = {"Retry-After": str(err.remaining_seconds)}
    return HTTPException(status_code=status_code, detail=err.to_dict(), headers=headers)
