from __future__ import annotations

from questledger.domain.errors import InvalidUser, NotFound, Unauthorized
from questledger.domain.models.QuestModel import Quest
from questledger.domain.models.RoleModel import Role
from questledger.domain.models.WalletModel import WalletAddress
from questledger.domain.usecase.ports import AuthorityGateway, QuestsRepo


def parse_wallet(raw: WalletAddress | str) -> WalletAddress:
    """Return a strongly-typed ``WalletAddress`` from raw inputs."""

    return WalletAddress.parse(raw)


def parse_quest_id(raw: int | str) -> int:
    try:
        quest_id = int(raw)
    except (TypeError, ValueError) as err:
        raise NotFound(f"Quest ID does not exist: {raw}") from err
    if quest_id < 1:
        raise NotFound(f"Quest ID does not exist: {raw}")
    return quest_id


async def ensure_quest(quests_repo: QuestsRepo, quest_id: int | str) -> Quest:
    quest = await quests_repo.get(parse_quest_id(quest_id))
    if quest is None:
        raise NotFound(f"Quest ID does not exist: {quest_id}", quest_id=quest_id)
    return quest


async def require_role(
    authority: AuthorityGateway, caller: WalletAddress | str, *roles: Role
) -> WalletAddress:
    try:
        identity = parse_wallet(caller)
    except InvalidUser as err:
        raise Unauthorized("Caller identity is not recognised") from err

    for role in roles:
        if await authority.has_role(identity, role):
            return identity

    names = " or ".join(role.value for role in roles)
    raise Unauthorized(f"Caller {identity} must hold {names}")
