from __future__ import annotations

import asyncio
import copy
from typing import Dict, Optional

from questledger.domain.errors import AlreadyCompleted
from questledger.domain.models.ProgressModel import UserLedgerRecord
from questledger.domain.models.WalletModel import WalletAddress


class UserLedgerRepoMemory:
    """Per-wallet records guarded by a single lock; reads hand out copies."""

    def __init__(self) -> None:
        self._records: Dict[WalletAddress, UserLedgerRecord] = {}
        self._lock = asyncio.Lock()

    def _record(self, user: WalletAddress) -> UserLedgerRecord:
        record = self._records.get(user)
        if record is None:
            record = UserLedgerRecord(user=user)
            self._records[user] = record
        return record

    async def get_record(self, user: WalletAddress) -> UserLedgerRecord:
        record = self._records.get(user)
        if record is None:
            return UserLedgerRecord(user=user)
        return copy.deepcopy(record)

    async def mark_completed(self, user: WalletAddress, quest_id: int, at: int) -> bool:
        async with self._lock:
            try:
                self._record(user).complete(quest_id, at)
            except AlreadyCompleted:
                return False
            return True

    async def compare_and_set_claim(
        self, user: WalletAddress, expected_last_claim: Optional[int], at: int
    ) -> bool:
        async with self._lock:
            claim = self._record(user).daily_claim
            if claim.last_claimed_at != expected_last_claim:
                return False
            claim.record_claim(at)
            return True
