import pytest

from ledger_support import BACKEND, OWNER
from questledger.core.settings import ConfigurationError, load_settings

ENV_KEYS = (
    "OWNER_ADDRESS",
    "BACKEND_AUTHORITY_ADDRESS",
    "QUESTLEDGER_STORE",
    "DAILY_COOLDOWN_SECONDS",
    "DAILY_REWARD_TOKENS",
    "JWT_SECRET",
    "THIRDWEB_SECRET_KEY",
    "TOKEN_CONTRACT_ADDRESS",
    "ADMIN_ADDRESS",
    "CHAIN_ID",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("OWNER_ADDRESS", OWNER.value.upper().replace("0X", "0x"))
    monkeypatch.setenv("BACKEND_AUTHORITY_ADDRESS", BACKEND.value)


def test_defaults(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s")
    settings = load_settings()

    assert settings.owner_address == OWNER
    assert settings.backend_authority_address == BACKEND
    assert settings.store == "memory"
    assert settings.daily_cooldown_seconds == 86_400
    assert settings.daily_reward_units == 10**18
    assert settings.jwt_secret == "s"
    assert settings.thirdweb_configured is False


def test_missing_owner_is_fatal(monkeypatch):
    monkeypatch.delenv("OWNER_ADDRESS")
    with pytest.raises(ConfigurationError):
        load_settings()


def test_malformed_backend_is_fatal(monkeypatch):
    monkeypatch.setenv("BACKEND_AUTHORITY_ADDRESS", "0x1234")
    with pytest.raises(ConfigurationError):
        load_settings()


@pytest.mark.parametrize("value", ["60", "3599", "soon"])
def test_bad_cooldown_is_fatal(monkeypatch, value):
    monkeypatch.setenv("DAILY_COOLDOWN_SECONDS", value)
    with pytest.raises(ConfigurationError):
        load_settings()


def test_daily_reward_tokens_are_converted(monkeypatch):
    monkeypatch.setenv("DAILY_REWARD_TOKENS", "2.5")
    assert load_settings().daily_reward_units == 25 * 10**17


def test_unknown_store_is_fatal(monkeypatch):
    monkeypatch.setenv("QUESTLEDGER_STORE", "sqlite")
    with pytest.raises(ConfigurationError):
        load_settings()


def test_missing_jwt_secret_generates_one():
    settings = load_settings()
    assert len(settings.jwt_secret) == 64


def test_thirdweb_configured_needs_all_parts(monkeypatch):
    monkeypatch.setenv("THIRDWEB_SECRET_KEY", "key")
    monkeypatch.setenv("TOKEN_CONTRACT_ADDRESS", OWNER.value)
    assert load_settings().thirdweb_configured is False

    monkeypatch.setenv("ADMIN_ADDRESS", BACKEND.value)
    monkeypatch.setenv("CHAIN_ID", "137")
    settings = load_settings()
    assert settings.thirdweb_configured is True
    assert settings.chain_id == 137
