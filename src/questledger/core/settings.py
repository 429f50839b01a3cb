from __future__ import annotations

import logging
import os
import secrets
from dataclasses import dataclass
from typing import Optional

from questledger.domain.errors import InvalidUser
from questledger.domain.models.ProgressModel import (
    DEFAULT_COOLDOWN_SECONDS,
    MIN_COOLDOWN_SECONDS,
)
from questledger.domain.models.RewardModel import tokens_to_units
from questledger.domain.models.WalletModel import WalletAddress

logger = logging.getLogger(__name__)

STORES = ("memory", "mongo")


class ConfigurationError(RuntimeError):
    """Raised when the environment cannot produce a usable configuration."""


def _env_str(name: str, default: str = "") -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as err:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from err


def _env_wallet(name: str, *, required: bool) -> Optional[WalletAddress]:
    raw = _env_str(name)
    if not raw:
        if required:
            raise ConfigurationError(f"{name} is not set")
        return None
    try:
        return WalletAddress.parse(raw)
    except InvalidUser as err:
        raise ConfigurationError(f"{name} is not a valid wallet address") from err


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the quest ledger service."""

    owner_address: WalletAddress
    backend_authority_address: WalletAddress
    store: str = "memory"
    mongodb_uri: str = "mongodb://localhost:27017"
    db_name: str = "questledger"
    daily_cooldown_seconds: int = DEFAULT_COOLDOWN_SECONDS
    daily_reward_units: int = 10**18
    jwt_secret: str = ""
    jwt_alg: str = "HS256"
    thirdweb_base_url: str = "https://api.thirdweb.com"
    thirdweb_secret_key: Optional[str] = None
    token_contract_address: Optional[WalletAddress] = None
    chain_id: int = 84532
    admin_address: Optional[WalletAddress] = None

    @property
    def uses_mongo(self) -> bool:
        return self.store == "mongo"

    @property
    def thirdweb_configured(self) -> bool:
        return bool(
            self.thirdweb_secret_key
            and self.token_contract_address is not None
            and self.admin_address is not None
        )


def load_settings() -> Settings:
    """Construct Settings from environment variables."""
    owner = _env_wallet("OWNER_ADDRESS", required=True)
    backend = _env_wallet("BACKEND_AUTHORITY_ADDRESS", required=True)
    assert owner is not None and backend is not None

    store = _env_str("QUESTLEDGER_STORE", "memory").lower()
    if store not in STORES:
        raise ConfigurationError(
            f"QUESTLEDGER_STORE must be one of {', '.join(STORES)}, got {store!r}"
        )

    cooldown = _env_int("DAILY_COOLDOWN_SECONDS", DEFAULT_COOLDOWN_SECONDS)
    if cooldown < MIN_COOLDOWN_SECONDS:
        raise ConfigurationError(
            f"DAILY_COOLDOWN_SECONDS must be at least {MIN_COOLDOWN_SECONDS}, "
            f"got {cooldown}"
        )

    try:
        reward_units = tokens_to_units(_env_str("DAILY_REWARD_TOKENS", "1") or "1")
    except (ArithmeticError, ValueError) as err:
        raise ConfigurationError(f"DAILY_REWARD_TOKENS is invalid: {err}") from err

    jwt_secret = _env_str("JWT_SECRET")
    if not jwt_secret:
        jwt_secret = secrets.token_hex(32)
        logger.warning(
            "JWT_SECRET is not set; generated an ephemeral secret, "
            "issued tokens will not survive a restart"
        )

    return Settings(
        owner_address=owner,
        backend_authority_address=backend,
        store=store,
        mongodb_uri=_env_str("MONGODB_URI", "mongodb://localhost:27017"),
        db_name=_env_str("DB_NAME", "questledger"),
        daily_cooldown_seconds=cooldown,
        daily_reward_units=reward_units,
        jwt_secret=jwt_secret,
        jwt_alg=_env_str("JWT_ALG", "HS256") or "HS256",
        thirdweb_base_url=_env_str(
            "THIRDWEB_BASE_URL", "https://api.thirdweb.com"
        ).rstrip("/"),
        thirdweb_secret_key=_env_str("THIRDWEB_SECRET_KEY") or None,
        token_contract_address=_env_wallet("TOKEN_CONTRACT_ADDRESS", required=False),
        chain_id=_env_int("CHAIN_ID", 84532),
        admin_address=_env_wallet("ADMIN_ADDRESS", required=False),
    )


__all__ = ["ConfigurationError", "Settings", "load_settings"]
