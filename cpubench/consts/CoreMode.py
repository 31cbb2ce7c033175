from enum import Enum


class CoreMode(Enum):
    SINGLE = "SINGLE"
    MULTI = "MULTI"
