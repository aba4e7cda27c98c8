"""Combine persisted account documents with freshly computed stake."""

from typing import Any

from stakesync.domain.balance import parse_balance_or_zero
from stakesync.domain.models import STAKE_KEYS, AccountRecord

BALANCE_FIELD = "balance"


def merge_records(
    existing: dict[str, dict[str, Any]],
    computed: dict[str, AccountRecord],
) -> dict[str, AccountRecord]:
    """Build the documents to write, one per address that has stake this run.

    Non-stake fields are carried over from ``existing`` untouched; every stake key
    in the old document is dropped and replaced by the computed block plus totals.
    Addresses only present in ``existing`` are not emitted.
    """
    merged: dict[str, AccountRecord] = {}
    for address, record in computed.items():
        previous = existing.get(address, {})
        persisted = {key: value for key, value in previous.items() if key not in STAKE_KEYS}
        # balance is display input only; a missing or bad value counts as zero
        balance = parse_balance_or_zero(persisted.get(BALANCE_FIELD)).value
        merged[address] = AccountRecord(
            address=address,
            persisted=persisted,
            stake=record.stake.with_totals(balance),
        )
    return merged
