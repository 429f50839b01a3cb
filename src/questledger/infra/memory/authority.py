from __future__ import annotations

from typing import Dict

from questledger.domain.models.RoleModel import Role
from questledger.domain.models.WalletModel import WalletAddress


class StaticAuthorityGateway:
    """Role holders fixed at construction; only ownership can be reassigned."""

    def __init__(self, *, owner: WalletAddress, backend_authority: WalletAddress) -> None:
        self._holders: Dict[Role, WalletAddress] = {
            Role.OWNER: owner,
            Role.BACKEND_AUTHORITY: backend_authority,
        }

    async def has_role(self, caller: WalletAddress, role: Role) -> bool:
        return self._holders.get(role) == caller

    async def holder(self, role: Role) -> WalletAddress:
        return self._holders[role]

    async def assign(self, role: Role, identity: WalletAddress) -> None:
        if role is not Role.OWNER:
            raise ValueError(f"{role.value} is fixed at construction")
        self._holders[role] = identity
