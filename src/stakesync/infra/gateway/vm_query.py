"""VM-query calls: read-only contract views returning a flat list of byte items."""

import base64
import binascii

from stakesync.exceptions import DecodeError, UpstreamError
from stakesync.infra.gateway.schemas import VmQueryRequest
from stakesync.ports import RestClient

PATH_VM_VALUES = "/vm-values/query"


def decode_return_data(items: list[str | bytes] | None) -> list[bytes]:
    """Decode ``returnData`` items. Strings are base64; raw bytes pass through."""
    decoded: list[bytes] = []
    for item in items or []:
        if isinstance(item, bytes):
            decoded.append(item)
            continue
        if item is None:
            decoded.append(b"")
            continue
        try:
            decoded.append(base64.b64decode(item, validate=True))
        except (binascii.Error, ValueError, TypeError) as e:
            raise DecodeError(f"invalid returnData item {item!r}: {e}") from e
    return decoded


def split_by_stride(items: list[bytes], stride: int) -> list[tuple[bytes, bytes]]:
    """Group a flat item list into (address, balance) pairs; extra slots per entry are ignored."""
    if len(items) % stride != 0:
        raise DecodeError(f"returnData length {len(items)} is not a multiple of stride {stride}")
    return [(items[idx], items[idx + 1]) for idx in range(0, len(items), stride)]


async def query_return_data(rest: RestClient, contract: str, func_name: str) -> list[bytes]:
    """Run a view call with the contract as its own caller and return the decoded items."""
    request = VmQueryRequest(sc_address=contract, func_name=func_name, caller=contract)
    envelope = await rest.post_json(PATH_VM_VALUES, request.to_body())
    if envelope.error:
        raise UpstreamError(envelope.error, envelope.code)

    data = envelope.data
    try:
        return_data = data["data"]["returnData"]
    except (KeyError, TypeError) as e:
        raise DecodeError(f"{func_name}: unexpected VM response shape") from e
    if return_data is not None and not isinstance(return_data, list):
        raise DecodeError(f"{func_name}: returnData is not a list")
    return decode_return_data(return_data)
