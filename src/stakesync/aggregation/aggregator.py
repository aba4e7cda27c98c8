"""Merge partial stake mappings from several feeds into one record per address."""

from stakesync.domain.models import AccountRecord, StakeInfo


def aggregate(*sources: dict[str, StakeInfo]) -> dict[str, AccountRecord]:
    """Combine source mappings. Overlapping attributes are summed, others are left untouched.

    Inputs are not mutated, so a source mapping can be reused after a failed run.
    """
    accounts: dict[str, AccountRecord] = {}
    for source in sources:
        for address, stake in source.items():
            record = accounts.get(address)
            if record is None:
                record = AccountRecord(address=address)
                accounts[address] = record
            record.stake.merge(stake)
    return accounts
