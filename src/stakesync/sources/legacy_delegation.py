"""Legacy delegation contract: active and waiting lists via VM-query."""

import logging

from stakesync.domain.enums import StakeAttribute, StakeSourceName
from stakesync.domain.models import StakeInfo
from stakesync.infra.gateway.vm_query import query_return_data, split_by_stride
from stakesync.ports import AddressCodec, RestClient
from stakesync.sources.base import StakeSource, accumulate_pairs

FUNC_FULL_ACTIVE_LIST = "getFullActiveList"
FUNC_FULL_WAITING_LIST = "getFullWaitingList"

ACTIVE_STRIDE = 2
WAITING_STRIDE = 3  # third slot per waiting entry is reserved


class LegacyDelegationSource(StakeSource):
    name = StakeSourceName.LEGACY_DELEGATION

    def __init__(
        self,
        rest: RestClient,
        codec: AddressCodec,
        contract_address: str,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger)
        self._rest = rest
        self._codec = codec
        self._contract = contract_address

    async def _fetch(self) -> dict[str, StakeInfo]:
        active = await query_return_data(self._rest, self._contract, FUNC_FULL_ACTIVE_LIST)
        waiting = await query_return_data(self._rest, self._contract, FUNC_FULL_WAITING_LIST)

        accounts: dict[str, StakeInfo] = {}
        accumulate_pairs(
            accounts, split_by_stride(active, ACTIVE_STRIDE),
            StakeAttribute.DELEGATION_LEGACY_ACTIVE, self._codec,
        )
        accumulate_pairs(
            accounts, split_by_stride(waiting, WAITING_STRIDE),
            StakeAttribute.DELEGATION_LEGACY_WAITING, self._codec,
        )
        return accounts
