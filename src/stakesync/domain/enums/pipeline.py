from enum import Enum


class PipelinePhase(str, Enum):
    """Phases of one reindex run, in execution order."""

    FETCH_STAKE = "fetch_stake"
    AGGREGATE = "aggregate"
    FETCH_EXISTING = "fetch_existing"
    MERGE = "merge"
    CLONE_INDEX = "clone_index"
    BULK_INDEX = "bulk_index"


class ReadErrorPolicy(str, Enum):
    """What the account reader does when one multi-get batch fails."""

    ABORT = "ABORT"
    SKIP = "SKIP"
