"""LKMEX staking contract snapshot. Disabled when no contract address is configured."""

import logging

from stakesync.domain.enums import StakeAttribute, StakeSourceName
from stakesync.domain.models import StakeInfo
from stakesync.infra.gateway.vm_query import query_return_data, split_by_stride
from stakesync.ports import AddressCodec, RestClient
from stakesync.sources.base import StakeSource, accumulate_pairs

FUNC_SNAPSHOT = "getSnapshot"
SNAPSHOT_STRIDE = 2


class LKMexStakingSource(StakeSource):
    name = StakeSourceName.LKMEX_STAKING

    def __init__(
        self,
        rest: RestClient,
        codec: AddressCodec,
        contract_address: str = "",
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger)
        self._rest = rest
        self._codec = codec
        self._contract = contract_address

    @property
    def enabled(self) -> bool:
        return self._contract != ""

    async def fetch(self) -> dict[str, StakeInfo]:
        if not self.enabled:
            self._log.debug("LKMEX staking contract not configured, skipping")
            return {}
        return await super().fetch()

    async def _fetch(self) -> dict[str, StakeInfo]:
        items = await query_return_data(self._rest, self._contract, FUNC_SNAPSHOT)
        accounts: dict[str, StakeInfo] = {}
        accumulate_pairs(
            accounts, split_by_stride(items, SNAPSHOT_STRIDE),
            StakeAttribute.LKMEX_STAKE, self._codec,
        )
        return accounts
