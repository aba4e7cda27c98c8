"""Produce a new account index generation by cloning the live index."""

import logging
from datetime import UTC, datetime
from typing import Any

from stakesync.exceptions import CloneProtocolError, StakeSyncError
from stakesync.ports import StoreClient


def compute_generation_name(base: str, now: datetime | None = None) -> str:
    """``<base>-<YYYYmmddHHMMSS>`` in UTC."""
    now = now or datetime.now(UTC)
    return f"{base}-{now.astimezone(UTC):%Y%m%d%H%M%S}"


class IndexCloner:
    """Runs set-read-only, clone, unset-read-only, then applies the target mapping.

    Cloning requires the source to be write-blocked. The block is always lifted
    again, even when the clone fails, so the live index stays writable.
    """

    def __init__(self, store: StoreClient, logger: logging.Logger | None = None) -> None:
        self._store = store
        self._log = logger or logging.getLogger(__name__)

    async def clone(self, source: str, target: str) -> bool:
        try:
            await self._store.put_settings(True, source)
        except StakeSyncError as e:
            raise CloneProtocolError(e) from e

        clone_error: StakeSyncError | None = None
        cloned = False
        try:
            cloned = await self._store.clone_index(source, target)
        except StakeSyncError as e:
            clone_error = e
        finally:
            cleanup_error = await self._unset_read_only(source)

        if clone_error is not None:
            raise CloneProtocolError(clone_error, cleanup_error) from clone_error
        if not cloned:
            raise CloneProtocolError(
                StakeSyncError(f"clone {source} -> {target} was not acknowledged"), cleanup_error
            )
        return cloned

    async def _unset_read_only(self, source: str) -> StakeSyncError | None:
        try:
            await self._store.put_settings(False, source)
        except StakeSyncError as e:
            self._log.error("Cannot unset read-only on %s: %s", source, e)
            return e
        return None

    async def prepare_generation(self, source: str, target: str, mapping: dict[str, Any]) -> None:
        """Clone ``source`` into ``target`` and make ``target`` ready for bulk writes."""
        await self.clone(source, target)
        await self._store.wait_for_health(target)
        await self._store.put_mapping(target, mapping)
        self._log.info("Cloned %s into %s", source, target)
