#!/usr/bin/env python3
"""
Print a bearer token for a wallet address, signed with JWT_SECRET.

Usage:
	python scripts/issue_token.py --address 0x... [--minutes N]
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

from questledger.api.security import create_access_token
from questledger.domain.errors import InvalidUser
from questledger.domain.models.WalletModel import WalletAddress


def issue_token(address: str, minutes: int) -> str:
	secret = os.getenv("JWT_SECRET")
	if not secret:
		raise SystemExit("JWT_SECRET must be set to issue tokens the API will accept")
	wallet = WalletAddress.parse(address)
	return create_access_token(
		sub=wallet.value,
		secret=secret,
		algorithm=os.getenv("JWT_ALG", "HS256"),
		expires_minutes=minutes,
	)


def main() -> None:
	parser = argparse.ArgumentParser(description="Issue a quest ledger API token")
	parser.add_argument("--address", required=True, help="Wallet address placed in the token subject")
	parser.add_argument("--minutes", type=int, default=int(os.getenv("JWT_EXPIRE_MINUTES", "60")), help="Token lifetime in minutes (default JWT_EXPIRE_MINUTES or 60)")
	args = parser.parse_args()

	logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
	try:
		token = issue_token(args.address, args.minutes)
	except InvalidUser as err:
		logging.error("%s", err)
		sys.exit(2)
	print(token)


if __name__ == "__main__":
	main()
