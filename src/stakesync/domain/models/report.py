"""Structured outcome of one reindex run."""

from pydantic import BaseModel

from stakesync.domain.enums import PipelinePhase


class PhaseTiming(BaseModel):
    phase: PipelinePhase
    seconds: float


class RunReport(BaseModel):
    source_index: str
    target_index: str
    accounts_computed: int = 0
    accounts_existing: int = 0
    accounts_indexed: int = 0
    failed_items: int = 0
    timings: list[PhaseTiming] = []

    def duration(self, phase: PipelinePhase) -> float | None:
        for timing in self.timings:
            if timing.phase == phase:
                return timing.seconds
        return None
