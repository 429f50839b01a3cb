from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from questledger.domain.errors import InvalidUser

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-f]{40}$")
ZERO_ADDRESS = "0x" + "0" * 40


@dataclass(frozen=True, slots=True)
class WalletAddress:
    """An EVM wallet address, normalized to lower case."""

    value: str

    def __post_init__(self) -> None:
        normalized = self._normalize(self.value)
        object.__setattr__(self, "value", normalized)

    @classmethod
    def _normalize(cls, raw: Any) -> str:
        if raw is None:
            raise InvalidUser("Wallet address is required")
        if not isinstance(raw, str):
            raise InvalidUser(f"Wallet address must be a string, got {type(raw).__name__}")

        cleaned = raw.strip().lower()
        if not cleaned:
            raise InvalidUser("Wallet address cannot be empty")

        if not ADDRESS_PATTERN.fullmatch(cleaned):
            raise InvalidUser(f"Invalid wallet address format: {raw!r}")

        # the zero address is the null identity
        if cleaned == ZERO_ADDRESS:
            raise InvalidUser("The zero address is not a valid user")
        return cleaned

    @property
    def short(self) -> str:
        return f"{self.value[:6]}...{self.value[-4:]}"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: "WalletAddress | str") -> "WalletAddress":
        if isinstance(raw, WalletAddress):
            return raw
        return cls(raw)
