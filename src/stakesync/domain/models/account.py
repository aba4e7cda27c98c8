"""Account and stake records produced by a reindex run."""

from typing import Any

from pydantic import BaseModel, Field

from stakesync.domain.balance import Balance, balance_from_int, parse_balance, sum_balances
from stakesync.domain.enums import StakeAttribute

STAKE_KEYS: frozenset[str] = frozenset(
    key for attr in StakeAttribute for key in (attr.value, attr.num_key)
)


class StakeInfo(BaseModel):
    """Stake attributes of one account. A missing attribute means no source contributed it."""

    values: dict[StakeAttribute, Balance] = Field(default_factory=dict)

    def get(self, attr: StakeAttribute) -> Balance | None:
        return self.values.get(attr)

    def set(self, attr: StakeAttribute, exact: str) -> None:
        """Assign an attribute, replacing any previous value."""
        self.values[attr] = parse_balance(exact)

    def add(self, attr: StakeAttribute, exact: str) -> None:
        """Add to an attribute; starts from the given value if it was absent."""
        current = self.values.get(attr)
        if current is None:
            self.values[attr] = parse_balance(exact)
        else:
            self.values[attr] = sum_balances(current.exact, exact)

    def merge(self, other: "StakeInfo") -> None:
        """Sum every attribute populated by ``other`` into this record."""
        for attr, balance in other.values.items():
            self.add(attr, balance.exact)

    def total_stake(self) -> int:
        return sum(b.value for attr, b in self.values.items() if not attr.is_derived)

    def with_totals(self, balance: int) -> "StakeInfo":
        """Copy with totalStake and totalBalanceWithStake derived from the source attributes."""
        values = {attr: b for attr, b in self.values.items() if not attr.is_derived}
        total = self.total_stake()
        values[StakeAttribute.TOTAL_STAKE] = balance_from_int(total)
        values[StakeAttribute.TOTAL_BALANCE_WITH_STAKE] = balance_from_int(total + balance)
        return StakeInfo(values=values)

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {}
        for attr in StakeAttribute:
            balance = self.values.get(attr)
            if balance is None:
                continue
            doc[attr.value] = balance.exact
            doc[attr.num_key] = balance.approx
        return doc


class AccountRecord(BaseModel):
    """Persisted non-stake fields (opaque) plus the stake block, keyed by address."""

    address: str
    persisted: dict[str, Any] = Field(default_factory=dict)
    stake: StakeInfo = Field(default_factory=StakeInfo)

    def to_document(self) -> dict[str, Any]:
        return {**self.persisted, **self.stake.to_document()}
