"""Shared decoding for gateway endpoints that answer ``{data: {list: [...]}}``."""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from stakesync.domain.balance import parse_balance, parse_balance_or_zero
from stakesync.domain.enums import StakeAttribute
from stakesync.domain.models import StakeInfo
from stakesync.exceptions import DecodeError, InvalidBalanceFormat, UpstreamError
from stakesync.infra.gateway.schemas import ApiEnvelope

EntryT = TypeVar("EntryT", bound=BaseModel)


def decode_list(envelope: ApiEnvelope, entry_type: type[EntryT], what: str) -> list[EntryT]:
    """Validate the whole ``list`` field at once; any bad entry fails the fetch."""
    if envelope.error:
        raise UpstreamError(f"cannot get {what}: {envelope.error}", envelope.code)

    data: Any = envelope.data
    if not isinstance(data, dict) or "list" not in data:
        raise DecodeError(f"cannot decode {what}: response has no list field")
    raw_list = data["list"]
    if raw_list is None:
        return []
    try:
        return TypeAdapter(list[entry_type]).validate_python(raw_list)  # type: ignore[valid-type]
    except ValidationError as e:
        raise DecodeError(f"cannot decode {what}: {e}") from e


def assign_balance(
    stake: StakeInfo, attr: StakeAttribute, raw: str, address: str, logger: logging.Logger
) -> None:
    """Set ``attr`` from a gateway string. Blank means no contribution; garbage counts as zero."""
    if raw == "":
        return
    try:
        balance = parse_balance(raw)
    except InvalidBalanceFormat:
        logger.warning("Unparseable %s %r for %s, using 0", attr.value, raw, address)
        balance = parse_balance_or_zero(raw)
    stake.set(attr, balance.exact)
