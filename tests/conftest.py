import base64
import json

import pytest

from stakesync.infra.address import Bech32AddressCodec
from stakesync.infra.gateway.schemas import ApiEnvelope
from stakesync.infra.search.schemas import BulkResponse

ONE = 10**18


def pubkey(n: int) -> bytes:
    """Deterministic 32-byte public key."""
    return n.to_bytes(32, "big")


def b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode()


def amount(value: int) -> bytes:
    """Big-endian balance bytes as returned by a contract view."""
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def vm_envelope(items: list[bytes]) -> ApiEnvelope:
    return ApiEnvelope(data={"data": {"returnData": [b64(i) for i in items]}}, code="successful")


class FakeStore:
    """In-memory search store that records every call."""

    def __init__(self, docs: dict[str, dict] | None = None) -> None:
        self.docs = docs or {}
        self.calls: list[tuple] = []
        self.mget_batches: list[list[str]] = []
        self.bulk_payloads: list[bytes] = []
        self.failing_ids: set[str] = set()
        self.clone_error: Exception | None = None
        self.unset_error: Exception | None = None

    async def bulk_write(self, payload: bytes, index: str) -> BulkResponse:
        self.calls.append(("bulk_write", index))
        self.bulk_payloads.append(payload)
        lines = payload.decode().splitlines()
        items = []
        for action_line in lines[::2]:
            doc_id = json.loads(action_line)["index"]["_id"]
            if doc_id in self.failing_ids:
                error = {"type": "mapper_parsing_exception", "reason": "bad"}
                items.append({"index": {"_id": doc_id, "status": 400, "error": error}})
            else:
                items.append({"index": {"_id": doc_id, "status": 201}})
        return BulkResponse.model_validate({"errors": bool(self.failing_ids), "items": items})

    async def multi_get(self, ids: list[str], index: str) -> bytes:
        self.calls.append(("multi_get", index))
        self.mget_batches.append(list(ids))
        docs = [
            {"_id": i, "found": True, "_source": self.docs[i]} if i in self.docs else {"_id": i, "found": False}
            for i in ids
        ]
        return json.dumps({"docs": docs}).encode()

    async def clone_index(self, source: str, target: str) -> bool:
        self.calls.append(("clone_index", source, target))
        if self.clone_error is not None:
            raise self.clone_error
        return True

    async def put_settings(self, read_only: bool, index: str) -> None:
        self.calls.append(("put_settings", read_only, index))
        if not read_only and self.unset_error is not None:
            raise self.unset_error

    async def put_mapping(self, index: str, schema: dict) -> None:
        self.calls.append(("put_mapping", index))

    async def wait_for_health(self, index: str | None = None) -> None:
        self.calls.append(("wait_for_health", index))


@pytest.fixture()
def codec():
    return Bech32AddressCodec(hrp="erd", length=32)


@pytest.fixture()
def store():
    return FakeStore()
