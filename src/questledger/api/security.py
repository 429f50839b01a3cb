from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from questledger.api.deps import get_settings
from questledger.core.settings import Settings
from questledger.domain.errors import InvalidUser
from questledger.domain.models.WalletModel import WalletAddress

bearer = HTTPBearer(auto_error=False)


def create_access_token(
    *,
    sub: str,
    secret: str,
    algorithm: str = "HS256",
    expires_minutes: int = 60,
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": sub,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=expires_minutes)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    settings: Settings = Depends(get_settings),
) -> WalletAddress:
    """Resolve the wallet that signed the bearer token."""
    if credentials is None or not credentials.credentials:
        raise _unauthenticated("Missing bearer token")

    try:
        payload = jwt.decode(
            credentials.credentials, settings.jwt_secret, algorithms=[settings.jwt_alg]
        )
        sub = payload.get("sub")
        if not sub:
            raise JWTError("Missing subject")
    except JWTError as err:
        raise _unauthenticated("Invalid token") from err

    try:
        return WalletAddress.parse(sub)
    except InvalidUser as err:
        raise _unauthenticated("Token subject is not a wallet address") from err
