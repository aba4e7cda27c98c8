"""Write account documents into an index generation with bounded ``_bulk`` requests."""

import json
import logging

from pydantic import BaseModel

from stakesync.domain.models import AccountRecord
from stakesync.exceptions import StoreWriteError
from stakesync.ports import StoreClient
from stakesync.store.account_reader import batched

DEFAULT_BATCH_SIZE = 2000
MAX_ERROR_SAMPLES = 10


class BulkIndexResult(BaseModel):
    """Outcome of a bulk run. Item failures do not stop the remaining batches."""

    total: int = 0
    failed: int = 0
    errors: list[str] = []

    @property
    def indexed(self) -> int:
        return self.total - self.failed

    def raise_for_failures(self) -> None:
        if self.failed:
            raise StoreWriteError(self.failed, self.total, self.errors)


def serialize_bulk(records: list[AccountRecord]) -> bytes:
    """NDJSON action/document pairs, one pair per record."""
    lines: list[str] = []
    for record in records:
        lines.append(json.dumps({"index": {"_id": record.address}}))
        lines.append(json.dumps(record.to_document()))
    return ("\n".join(lines) + "\n").encode()


class BulkIndexer:
    def __init__(
        self,
        store: StoreClient,
        batch_size: int = DEFAULT_BATCH_SIZE,
        logger: logging.Logger | None = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._store = store
        self._batch_size = batch_size
        self._log = logger or logging.getLogger(__name__)

    async def index_accounts(self, records: dict[str, AccountRecord], index: str) -> BulkIndexResult:
        """Transport errors propagate; per-item rejections are counted in the result."""
        result = BulkIndexResult()
        for batch_ids in batched(list(records), self._batch_size):
            batch = [records[address] for address in batch_ids]
            response = await self._store.bulk_write(serialize_bulk(batch), index)
            result.total += len(batch)

            failures = response.failed_items()
            if not failures:
                continue
            result.failed += len(failures)
            for item in failures:
                if len(result.errors) >= MAX_ERROR_SAMPLES:
                    break
                if item.error is None:
                    continue
                result.errors.append(f"{item.id}: {item.error.type}: {item.error.reason}")
            self._log.warning(
                "Bulk batch into %s: %d of %d items failed", index, len(failures), len(batch)
            )
        return result
