from stakesync.domain.models.account import STAKE_KEYS, AccountRecord, StakeInfo
from stakesync.domain.models.report import PhaseTiming, RunReport

__all__ = [
    "STAKE_KEYS",
    "AccountRecord",
    "PhaseTiming",
    "RunReport",
    "StakeInfo",
]
