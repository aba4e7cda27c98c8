"""ReindexPipeline: one batch pass from upstream stake feeds to a new index generation.

Order of work:
    1. fetch every stake source concurrently
    2. aggregate into one record per address
    3. read existing documents for those addresses from the live index
    4. merge stake into the documents
    5. clone the live index into a new generation (runs alongside 1-4)
    6. bulk write the merged documents into the new generation

Promoting the generation to live is left to the caller. Any failure raises
PipelineError naming the phase, so a partial generation is never promoted.
"""

import asyncio
import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from stakesync.aggregation.aggregator import aggregate
from stakesync.domain.enums import PipelinePhase
from stakesync.domain.models import AccountRecord, PhaseTiming, RunReport, StakeInfo
from stakesync.exceptions import PipelineError
from stakesync.sources.base import StakeSource
from stakesync.store.account_reader import AccountStoreReader
from stakesync.store.bulk_indexer import BulkIndexer
from stakesync.store.cloner import IndexCloner, compute_generation_name
from stakesync.store.mapping import stake_mapping
from stakesync.store.merger import merge_records


class ReindexPipeline:
    def __init__(
        self,
        sources: list[StakeSource],
        reader: AccountStoreReader,
        cloner: IndexCloner,
        indexer: BulkIndexer,
        source_index: str,
        timeout: float | None = None,
        clock: Callable[[], datetime] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._sources = sources
        self._reader = reader
        self._cloner = cloner
        self._indexer = indexer
        self._source_index = source_index
        self._timeout = timeout
        self._clock = clock or (lambda: datetime.now(UTC))
        self._log = logger or logging.getLogger(__name__)
        self._current_phase = PipelinePhase.FETCH_STAKE

    async def run(self) -> RunReport:
        target_index = compute_generation_name(self._source_index, self._clock())
        report = RunReport(source_index=self._source_index, target_index=target_index)
        self._current_phase = PipelinePhase.FETCH_STAKE
        self._log.info("Starting reindex of %s into %s", self._source_index, target_index)

        start = time.monotonic()
        try:
            async with asyncio.timeout(self._timeout):
                await self._run(report)
        except TimeoutError as e:
            self._log.error("Reindex timed out during %s", self._current_phase.value)
            raise PipelineError(self._current_phase.value, e, report) from e

        self._log.info(
            "Reindex into %s finished in %.2fs: %d accounts indexed",
            target_index, time.monotonic() - start, report.accounts_indexed,
        )
        return report

    async def _run(self, report: RunReport) -> None:
        clone_task = asyncio.create_task(self._prepare_target(report))
        try:
            records = await self._build_records(report)
        except asyncio.CancelledError:
            clone_task.cancel()
            await asyncio.gather(clone_task, return_exceptions=True)
            raise
        except BaseException:
            # the clone must finish its read-only cleanup before the run fails
            await asyncio.gather(clone_task, return_exceptions=True)
            raise
        await clone_task

        with self._timed(report, PipelinePhase.BULK_INDEX):
            result = await self._indexer.index_accounts(records, report.target_index)
            report.accounts_indexed = result.indexed
            report.failed_items = result.failed
            result.raise_for_failures()

    async def _build_records(self, report: RunReport) -> dict[str, AccountRecord]:
        with self._timed(report, PipelinePhase.FETCH_STAKE):
            partials = await self._fetch_sources()

        with self._timed(report, PipelinePhase.AGGREGATE):
            computed = aggregate(*partials)
            report.accounts_computed = len(computed)

        with self._timed(report, PipelinePhase.FETCH_EXISTING):
            existing = await self._reader.fetch_existing(sorted(computed))
            report.accounts_existing = len(existing)

        with self._timed(report, PipelinePhase.MERGE):
            return merge_records(existing, computed)

    async def _fetch_sources(self) -> list[dict[str, StakeInfo]]:
        results = await asyncio.gather(
            *(source.fetch() for source in self._sources), return_exceptions=True
        )
        partials: list[dict[str, StakeInfo]] = []
        failure: BaseException | None = None
        for source, result in zip(self._sources, results):
            if isinstance(result, BaseException):
                self._log.error("Stake source %s failed: %s", source.name.value, result)
                result.add_note(f"stake source: {source.name.value}")
                failure = failure or result
                continue
            partials.append(result)
        if failure is not None:
            raise failure
        return partials

    async def _prepare_target(self, report: RunReport) -> None:
        with self._timed(report, PipelinePhase.CLONE_INDEX):
            await self._cloner.prepare_generation(
                self._source_index, report.target_index, stake_mapping()
            )

    @contextmanager
    def _timed(self, report: RunReport, phase: PipelinePhase) -> Iterator[None]:
        if phase != PipelinePhase.CLONE_INDEX:
            self._current_phase = phase
        start = time.monotonic()
        try:
            yield
        except PipelineError:
            raise
        except Exception as e:
            self._log.error("Phase %s failed: %s", phase.value, e)
            raise PipelineError(phase.value, e, report) from e
        elapsed = time.monotonic() - start
        report.timings.append(PhaseTiming(phase=phase, seconds=elapsed))
        self._log.info("%s finished in %.2fs", phase.value, elapsed)
