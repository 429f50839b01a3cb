"""Reward minters backed by the Thirdweb contracts API."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

import aiohttp

from questledger.domain.errors import MintError
from questledger.domain.models.RewardModel import units_to_tokens
from questledger.domain.models.WalletModel import WalletAddress

logger = logging.getLogger(__name__)

MINT_METHOD = "function mintTo(address to, uint256 amount)"

SessionFactory = Callable[..., aiohttp.ClientSession]


class ThirdwebRewardMinter:
    """Mints ERC-20 rewards by calling ``mintTo`` on the token contract."""

    def __init__(
        self,
        *,
        base_url: str,
        secret_key: str,
        token_contract: WalletAddress,
        chain_id: int,
        admin_address: WalletAddress,
        timeout_seconds: float = 30,
        session_factory: Optional[SessionFactory] = None,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/v1/contracts/write"
        self._secret_key = secret_key
        self._token_contract = token_contract
        self._chain_id = chain_id
        self._admin_address = admin_address
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session_factory: SessionFactory = session_factory or aiohttp.ClientSession

    def build_payload(self, user: WalletAddress, amount: int) -> Dict[str, Any]:
        return {
            "calls": [
                {
                    "contractAddress": self._token_contract.value,
                    "method": MINT_METHOD,
                    "params": [user.value, str(amount)],
                }
            ],
            "chainId": self._chain_id,
            "from": self._admin_address.value,
        }

    async def mint(self, user: WalletAddress, amount: int) -> str:
        if amount <= 0:
            raise MintError("Reward amount must be greater than 0")

        headers = {
            "Content-Type": "application/json",
            "x-secret-key": self._secret_key,
        }
        payload = self.build_payload(user, amount)

        try:
            async with self._session_factory(timeout=self._timeout) as session:
                async with session.post(
                    self._url, json=payload, headers=headers
                ) as resp:
                    if resp.status >= 400:
                        text = await resp.text()
                        raise MintError(
                            f"Thirdweb API error: {resp.status} - {text}"
                        )
                    body = await resp.json()
        except aiohttp.ClientError as err:
            raise MintError(f"Thirdweb request failed: {err}") from err

        transaction_ids = (body.get("result") or {}).get("transactionIds") or []
        if not transaction_ids:
            raise MintError(f"Thirdweb response carried no transaction id: {body}")

        logger.info(
            "Queued mint of %s tokens to %s (tx %s)",
            units_to_tokens(amount),
            user.short,
            transaction_ids[0],
        )
        return str(transaction_ids[0])


class LoggingRewardMinter:
    """Dry-run minter used when Thirdweb credentials are not configured."""

    def __init__(self) -> None:
        self._counter = 0

    async def mint(self, user: WalletAddress, amount: int) -> str:
        self._counter += 1
        logger.info(
            "Dry-run mint of %s tokens to %s", units_to_tokens(amount), user.short
        )
        return f"dry-run-{self._counter}"
