"""Abstract base for upstream stake feeds."""

import logging
import time
from abc import ABC, abstractmethod

from stakesync.domain.balance import balance_from_bytes
from stakesync.domain.enums import StakeAttribute, StakeSourceName
from stakesync.domain.models import StakeInfo
from stakesync.ports import AddressCodec


class StakeSource(ABC):
    """Strategy interface for one feed. Each fetch returns a fresh mapping address -> partial stake."""

    name: StakeSourceName

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or logging.getLogger(__name__)

    async def fetch(self) -> dict[str, StakeInfo]:
        start = time.monotonic()
        accounts = await self._fetch()
        self._log.info(
            "Fetched %d accounts from %s in %.2fs",
            len(accounts), self.name.value, time.monotonic() - start,
        )
        return accounts

    @abstractmethod
    async def _fetch(self) -> dict[str, StakeInfo]:
        """Query the feed."""


def accumulate_pairs(
    accounts: dict[str, StakeInfo],
    pairs: list[tuple[bytes, bytes]],
    attr: StakeAttribute,
    codec: AddressCodec,
) -> None:
    """Add (address bytes, big-endian balance bytes) pairs into ``accounts``, summing duplicates."""
    for address_bytes, balance_bytes in pairs:
        address = codec.encode(address_bytes)
        balance = balance_from_bytes(balance_bytes)
        accounts.setdefault(address, StakeInfo()).add(attr, balance.exact)
