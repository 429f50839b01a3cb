from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Dict, List, Optional

from questledger.domain.models.RewardModel import MintFailure


class MintFailuresRepoMemory:
    def __init__(self) -> None:
        self._failures: Dict[str, MintFailure] = {}
        self._lock = asyncio.Lock()

    async def record(self, failure: MintFailure) -> None:
        self._failures[failure.failure_id] = replace(failure)

    async def save(self, failure: MintFailure) -> None:
        self._failures[failure.failure_id] = replace(failure)

    async def claim(self, failure_id: str) -> Optional[MintFailure]:
        async with self._lock:
            failure = self._failures.get(failure_id)
            if failure is None or failure.is_resolved or failure.in_flight:
                return None
            failure.in_flight = True
            return replace(failure)

    async def pending(self) -> List[MintFailure]:
        unresolved = [f for f in self._failures.values() if not f.is_resolved]
        return [replace(f) for f in sorted(unresolved, key=lambda f: f.created_at)]
