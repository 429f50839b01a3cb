from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from questledger.domain.models.EventModel import LedgerEvent
from questledger.domain.models.ProgressModel import UserLedgerRecord
from questledger.domain.models.QuestModel import Quest
from questledger.domain.models.RewardModel import MintFailure
from questledger.domain.models.RoleModel import Role
from questledger.domain.models.WalletModel import WalletAddress


class Clock(Protocol):
    def now(self) -> int: ...


class QuestsRepo(Protocol):
    async def next_id(self) -> int: ...

    async def last_id(self) -> int: ...

    async def insert(self, quest: Quest) -> None: ...

    async def get(self, quest_id: int) -> Optional[Quest]: ...

    async def list_all(self) -> List[Quest]: ...

    async def set_active(self, quest_id: int, active: bool) -> bool: ...


class UserLedgerRepo(Protocol):
    async def get_record(self, user: WalletAddress) -> UserLedgerRecord: ...

    async def mark_completed(
        self, user: WalletAddress, quest_id: int, at: int
    ) -> bool:
        """Flip the pair to completed and bump the counter in one step.

        Returns ``False`` when the pair was already completed.
        """
        ...

    async def compare_and_set_claim(
        self, user: WalletAddress, expected_last_claim: Optional[int], at: int
    ) -> bool:
        """Record a claim only if the last claim is still the expected one.

        ``expected_last_claim`` is ``None`` for a wallet that has never claimed.
        """
        ...


class EventSink(Protocol):
    async def append(self, event: LedgerEvent) -> None: ...

    async def recent(self, limit: int) -> List[LedgerEvent]: ...


class AuthorityGateway(Protocol):
    async def has_role(self, caller: WalletAddress, role: Role) -> bool: ...


class RoleRegistry(AuthorityGateway, Protocol):
    async def holder(self, role: Role) -> WalletAddress: ...

    async def assign(self, role: Role, identity: WalletAddress) -> None: ...


class RewardMinter(Protocol):
    async def mint(self, user: WalletAddress, amount: int) -> str:
        """Credit ``amount`` smallest units to ``user``; returns a transaction id."""
        ...


class QuestVerifier(Protocol):
    async def verify(
        self, user: WalletAddress, quest: Quest, evidence: Dict[str, Any]
    ) -> None:
        """Raise ``RequirementsNotMet`` unless ``user`` has done ``quest``."""
        ...


class MintFailuresRepo(Protocol):
    async def record(self, failure: MintFailure) -> None: ...

    async def pending(self) -> List[MintFailure]: ...

    async def claim(self, failure_id: str) -> Optional[MintFailure]:
        """Mark an unresolved, idle failure as in flight.

        Returns the claimed failure, or ``None`` when it is resolved or another
        retry pass already holds it.
        """
        ...

    async def save(self, failure: MintFailure) -> None: ...
