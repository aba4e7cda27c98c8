from enum import Enum


class StakeAttribute(str, Enum):
    """Stake fields of an account document. Values are the persisted key names."""

    DELEGATION_LEGACY_ACTIVE = "delegationLegacyActive"
    DELEGATION_LEGACY_WAITING = "delegationLegacyWaiting"
    VALIDATORS_ACTIVE = "validatorsActive"
    VALIDATORS_TOP_UP = "validatorsTopUp"
    DELEGATION = "delegation"
    LKMEX_STAKE = "lkMexStake"
    TOTAL_STAKE = "totalStake"
    TOTAL_BALANCE_WITH_STAKE = "totalBalanceWithStake"

    @property
    def num_key(self) -> str:
        """Key of the float companion field."""
        return f"{self.value}Num"

    @property
    def is_derived(self) -> bool:
        return self in (StakeAttribute.TOTAL_STAKE, StakeAttribute.TOTAL_BALANCE_WITH_STAKE)


class StakeSourceName(str, Enum):
    """Upstream feeds that contribute stake attributes."""

    LEGACY_DELEGATION = "legacy_delegation"
    VALIDATORS = "validators"
    DELEGATION_MANAGER = "delegation_manager"
    LKMEX_STAKING = "lkmex_staking"
