"""Validators feed: direct staked info per owner address."""

import logging

from stakesync.domain.enums import StakeAttribute, StakeSourceName
from stakesync.domain.models import StakeInfo
from stakesync.infra.gateway.schemas import ValidatorStake
from stakesync.ports import RestClient
from stakesync.sources.base import StakeSource
from stakesync.sources.gateway_lists import assign_balance, decode_list

PATH_VALIDATORS_STAKE = "/network/direct-staked-info"


class ValidatorsSource(StakeSource):
    name = StakeSourceName.VALIDATORS

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
        envelope = await self._rest.get_json(PATH_VALIDATORS_STAKE, self._auth)
        entries = decode_list(envelope, ValidatorStake, "validators accounts")

        # one entry per owner upstream; a repeated address overwrites
        accounts: dict[str, StakeInfo] = {}
        for entry in entries:
            stake = StakeInfo()
            assign_balance(stake, StakeAttribute.VALIDATORS_ACTIVE, entry.staked, entry.address, self._log)
            assign_balance(stake, StakeAttribute.VALIDATORS_TOP_UP, entry.top_up, entry.address, self._log)
            accounts[entry.address] = stake
        return accounts
