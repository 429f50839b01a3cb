from __future__ import annotations

import pytest

from ledger_support import BACKEND, OWNER, FakeClock, RecordingMinter
from questledger.domain.ledger import QuestLedger
from questledger.infra.memory.authority import StaticAuthorityGateway
from questledger.infra.memory.events import EventLogMemory
from questledger.infra.memory.mint_failures_repo import MintFailuresRepoMemory
from questledger.infra.memory.quests_repo import QuestsRepoMemory
from questledger.infra.memory.user_ledger_repo import UserLedgerRepoMemory


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def events() -> EventLogMemory:
    return EventLogMemory()


@pytest.fixture()
def ledger(clock: FakeClock, events: EventLogMemory) -> QuestLedger:
    return QuestLedger(
        quests_repo=QuestsRepoMemory(),
        users_repo=UserLedgerRepoMemory(),
        authority=StaticAuthorityGateway(owner=OWNER, backend_authority=BACKEND),
        events=events,
        clock=clock,
    )


@pytest.fixture()
def minter() -> RecordingMinter:
    return RecordingMinter()


@pytest.fixture()
def mint_failures() -> MintFailuresRepoMemory:
    return MintFailuresRepoMemory()
