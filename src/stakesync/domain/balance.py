"""Balance codec: exact decimal strings in minimal units plus float display values.

All arithmetic is done on Python ints. The float form is always derived from the
exact integer, never accumulated, so repeated sums cannot drift.
"""

import re
import sys

from pydantic import BaseModel, ConfigDict

from stakesync.exceptions import InvalidBalanceFormat

DENOMINATION = 10**18

_INTEGER_RE = re.compile(r"[0-9]+")


class Balance(BaseModel):
    """A balance in minimal denomination units."""

    model_config = ConfigDict(frozen=True)

    exact: str  # canonical base-10 integer
    approx: float  # exact / 10**18, display only

    @property
    def value(self) -> int:
        return int(self.exact)


def balance_from_int(value: int) -> Balance:
    if value < 0:
        raise InvalidBalanceFormat("negative balance")
    try:
        exact = str(value)
    except ValueError as e:
        # beyond the interpreter's int/str conversion limit
        raise InvalidBalanceFormat(f"balance too large: {value.bit_length()} bits") from e
    try:
        approx = value / DENOMINATION
    except OverflowError:
        # saturate: inf has no JSON encoding
        approx = sys.float_info.max
    return Balance(exact=exact, approx=approx)


def parse_balance(raw: str) -> Balance:
    """Parse a base-10 non-negative integer string. Raises InvalidBalanceFormat."""
    if not isinstance(raw, str) or not _INTEGER_RE.fullmatch(raw):
        raise InvalidBalanceFormat(f"invalid balance: {raw!r}")
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidBalanceFormat(f"balance too large: {len(raw)} digits") from e
    return balance_from_int(value)


def parse_balance_or_zero(raw: str | None) -> Balance:
    """Lenient variant for display-only call sites: anything unparseable is zero."""
    try:
        return parse_balance(raw)  # type: ignore[arg-type]
    except InvalidBalanceFormat:
        return balance_from_int(0)


def balance_from_bytes(raw: bytes) -> Balance:
    """Decode a big-endian unsigned integer. Empty bytes decode to zero."""
    return balance_from_int(int.from_bytes(raw, "big"))


def sum_balances(a: str, b: str) -> Balance:
    """Add two decimal strings exactly; approx is derived from the sum."""
    return balance_from_int(parse_balance(a).value + parse_balance(b).value)
