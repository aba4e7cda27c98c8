"""Tests for aggregate(): per-address merge of source mappings."""

from stakesync.aggregation.aggregator import aggregate
from stakesync.domain.enums import StakeAttribute
from stakesync.domain.models import StakeInfo

ONE = 10**18


def _stake(**values: str) -> StakeInfo:
    stake = StakeInfo()
    for name, exact in values.items():
        stake.set(StakeAttribute[name], exact)
    return stake


class TestAggregate:
    def test_disjoint_attributes_from_two_sources(self):
        validators = {"erd1a": _stake(VALIDATORS_ACTIVE=str(2500 * ONE))}
        delegators = {"erd1a": _stake(DELEGATION=str(ONE))}

        accounts = aggregate(validators, delegators)

        stake = accounts["erd1a"].stake
        assert stake.get(StakeAttribute.VALIDATORS_ACTIVE).exact == str(2500 * ONE)
        assert stake.get(StakeAttribute.DELEGATION).exact == str(ONE)

    def test_same_attribute_is_summed(self):
        first = {"erd1a": _stake(DELEGATION_LEGACY_ACTIVE=str(ONE))}
        second = {"erd1a": _stake(DELEGATION_LEGACY_ACTIVE=str(2 * ONE))}

        stake = aggregate(first, second)["erd1a"].stake

        assert stake.get(StakeAttribute.DELEGATION_LEGACY_ACTIVE).exact == str(3 * ONE)
        assert stake.get(StakeAttribute.DELEGATION_LEGACY_ACTIVE).approx == 3.0

    def test_order_independent(self):
        legacy = {"erd1a": _stake(DELEGATION_LEGACY_WAITING="7"), "erd1b": _stake(DELEGATION_LEGACY_ACTIVE="1")}
        validators = {"erd1a": _stake(VALIDATORS_ACTIVE="5", VALIDATORS_TOP_UP="2")}
        lkmex = {"erd1c": _stake(LKMEX_STAKE="9")}

        forward = aggregate(legacy, validators, lkmex)
        backward = aggregate(lkmex, validators, legacy)

        assert set(forward) == {"erd1a", "erd1b", "erd1c"}
        for address in forward:
            assert forward[address].to_document() == backward[address].to_document()

    def test_new_record_has_address_and_no_fields(self):
        record = aggregate({"erd1z": _stake(LKMEX_STAKE="1")})["erd1z"]
        assert record.address == "erd1z"
        assert record.persisted == {}

    def test_inputs_not_mutated(self):
        first = {"erd1a": _stake(DELEGATION_LEGACY_ACTIVE="1")}
        aggregate(first, {"erd1a": _stake(DELEGATION_LEGACY_ACTIVE="1")})
        assert first["erd1a"].get(StakeAttribute.DELEGATION_LEGACY_ACTIVE).exact == "1"

    def test_no_sources(self):
        assert aggregate() == {}
