"""Delegation manager feed: total delegated per delegator across all staking providers."""

import logging

from stakesync.domain.enums import StakeAttribute, StakeSourceName
from stakesync.domain.models import StakeInfo
from stakesync.infra.gateway.schemas import DelegatorStake
from stakesync.ports import RestClient
from stakesync.sources.base import StakeSource
from stakesync.sources.gateway_lists import assign_balance, decode_list

PATH_DELEGATOR_STAKE = "/network/delegated-info"


class DelegationManagerSource(StakeSource):
    name = StakeSourceName.DELEGATION_MANAGER

    def __init__(
        self,
        rest: RestClient,
        auth: tuple[str, str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger)
        self._rest = rest
        self._auth = auth

    async def _fetch(self) -> dict[str, StakeInfo]:
        envelope = await self._rest.get_json(PATH_DELEGATOR_STAKE, self._auth)
        entries = decode_list(envelope, DelegatorStake, "delegators accounts")

        accounts: dict[str, StakeInfo] = {}
        for entry in entries:
            # only the per-delegator total is kept, delegatedTo is informational
            stake = StakeInfo()
            assign_balance(stake, StakeAttribute.DELEGATION, entry.total, entry.delegator_address, self._log)
            accounts[entry.delegator_address] = stake
        return accounts
