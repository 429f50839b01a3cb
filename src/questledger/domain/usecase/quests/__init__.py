from questledger.domain.usecase.quests.complete_quest import CompleteQuestForUser
from questledger.domain.usecase.quests.create_quest import CreateQuest
from questledger.domain.usecase.quests.deactivate_quest import DeactivateQuest
from questledger.domain.usecase.quests.get_quest import GetAllQuests, GetQuest

__all__ = [
    "CreateQuest",
    "GetQuest",
    "GetAllQuests",
    "DeactivateQuest",
    "CompleteQuestForUser",
]
