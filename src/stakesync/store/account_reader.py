"""Fetch persisted account documents for a set of addresses in bounded multi-get batches."""

import json
import logging
from typing import Any

from pydantic import ValidationError

from stakesync.domain.enums import ReadErrorPolicy
from stakesync.exceptions import DecodeError, StakeSyncError, StoreReadError
from stakesync.infra.search.schemas import MultiGetResponse
from stakesync.ports import StoreClient

DEFAULT_BATCH_SIZE = 2000


def batched(items: list[str], size: int) -> list[list[str]]:
    return [items[idx:idx + size] for idx in range(0, len(items), size)]


class AccountStoreReader:
    """Reads existing accounts from the live index.

    A failed batch aborts the whole fetch unless the reader was built with
    ``ReadErrorPolicy.SKIP``, in which case the batch is logged and dropped.
    """

    def __init__(
        self,
        store: StoreClient,
        index: str,
        batch_size: int = DEFAULT_BATCH_SIZE,
        on_error: ReadErrorPolicy = ReadErrorPolicy.ABORT,
        logger: logging.Logger | None = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._store = store
        self._index = index
        self._batch_size = batch_size
        self._on_error = on_error
        self._log = logger or logging.getLogger(__name__)

    async def fetch_existing(self, addresses: list[str]) -> dict[str, dict[str, Any]]:
        existing: dict[str, dict[str, Any]] = {}
        batches = batched(addresses, self._batch_size)
        for number, batch in enumerate(batches, start=1):
            try:
                docs = await self._fetch_batch(batch)
            except StakeSyncError:
                if self._on_error == ReadErrorPolicy.ABORT:
                    raise
                self._log.exception(
                    "Skipping multi-get batch %d/%d (%d addresses)", number, len(batches), len(batch)
                )
                continue
            existing.update(docs)
        return existing

    async def _fetch_batch(self, ids: list[str]) -> dict[str, dict[str, Any]]:
        raw = await self._store.multi_get(ids, self._index)
        try:
            response = MultiGetResponse.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            raise DecodeError(f"cannot decode multi-get response from {self._index}: {e}") from e
        # per-document failures carry no found flag and must not read as missing
        failed = {doc.id: doc.error for doc in response.docs if doc.error is not None}
        if failed:
            doc_id, error = next(iter(failed.items()))
            raise StoreReadError(
                f"{len(failed)} of {len(response.docs)} documents unreadable in {self._index}, "
                f"first {doc_id}: {error.get('type', 'unknown')}"
            )
        return {doc.id: doc.source for doc in response.docs if doc.found}
