from stakesync.domain.enums.pipeline import PipelinePhase, ReadErrorPolicy
from stakesync.domain.enums.stake import StakeAttribute, StakeSourceName

__all__ = [
    "PipelinePhase",
    "ReadErrorPolicy",
    "StakeAttribute",
    "StakeSourceName",
]
