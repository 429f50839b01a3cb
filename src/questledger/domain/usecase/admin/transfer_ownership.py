from __future__ import annotations

import logging
from dataclasses import dataclass

from questledger.domain.models.EventModel import ownership_transferred
from questledger.domain.models.RoleModel import Role
from questledger.domain.models.WalletModel import WalletAddress
from questledger.domain.usecase._shared import parse_wallet, require_role
from questledger.domain.usecase.ports import Clock, EventSink, RoleRegistry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TransferOwnership:
    registry: RoleRegistry
    events: EventSink
    clock: Clock

    async def execute(
        self, caller: WalletAddress | str, new_owner: WalletAddress | str
    ) -> WalletAddress:
        previous = await require_role(self.registry, caller, Role.OWNER)
        successor = parse_wallet(new_owner)

        await self.registry.assign(Role.OWNER, successor)
        await self.events.append(
            ownership_transferred(previous, successor, self.clock.now())
        )
        logger.warning("Ownership transferred from %s to %s", previous, successor)
        return successor
