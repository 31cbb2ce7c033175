from enum import Enum


class EventPhase(Enum):
    COMPLETED = "COMPLETED"
