from enum import Enum


class DeviceTier(Enum):
    AUTO = "auto"
    SLOW = "slow"
    MID = "mid"
    FLAGSHIP = "flagship"
