from questledger.domain.usecase.admin.list_events import ListEvents
from questledger.domain.usecase.admin.transfer_ownership import TransferOwnership

__all__ = ["TransferOwnership", "ListEvents"]
