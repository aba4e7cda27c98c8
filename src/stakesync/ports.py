"""Narrow interfaces of the external collaborators. Fakes in tests implement these directly."""

from typing import Any, Protocol

from stakesync.infra.gateway.schemas import ApiEnvelope
from stakesync.infra.search.schemas import BulkResponse


class RestClient(Protocol):
    async def get_json(self, path: str, auth: tuple[str, str] | None = None) -> ApiEnvelope: ...

    async def post_json(
        self, path: str, body: dict[str, Any], auth: tuple[str, str] | None = None
    ) -> ApiEnvelope: ...


class StoreClient(Protocol):
    async def bulk_write(self, payload: bytes, index: str) -> BulkResponse: ...

    async def multi_get(self, ids: list[str], index: str) -> bytes: ...

    async def clone_index(self, source: str, target: str) -> bool: ...

    async def put_settings(self, read_only: bool, index: str) -> None: ...

    async def put_mapping(self, index: str, schema: dict[str, Any]) -> None: ...

    async def wait_for_health(self, index: str | None = None) -> None: ...


class AddressCodec(Protocol):
    def encode(self, raw: bytes) -> str: ...
