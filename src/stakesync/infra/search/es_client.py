"""Elasticsearch REST client for the account index (bulk, mget, clone, settings, mapping)."""

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from stakesync.exceptions import DecodeError, TransportError
from stakesync.infra.http.rate_limited_client import RateLimitedClient
from stakesync.infra.search.schemas import BulkResponse


class ElasticStoreClient:
    def __init__(
        self,
        base_url: str,
        http_client: RateLimitedClient,
        auth: tuple[str, str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_client
        self._auth = auth
        self._log = logger or logging.getLogger(__name__)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self._http.request(method, self._base_url + path, auth=self._auth, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path}: {e}") from e
        if resp.is_error:
            raise TransportError(f"{method} {path} returned HTTP {resp.status_code}: {resp.text}")
        return resp

    async def bulk_write(self, payload: bytes, index: str) -> BulkResponse:
        """POST an NDJSON payload to ``/<index>/_bulk`` and return the parsed per-item results."""
        resp = await self._request(
            "POST",
            f"/{index}/_bulk",
            content=payload,
            headers={"Content-Type": "application/x-ndjson"},
        )
        try:
            return BulkResponse.model_validate(resp.json())
        except (json.JSONDecodeError, ValidationError) as e:
            raise DecodeError(f"cannot decode bulk response for {index}: {e}") from e

    async def multi_get(self, ids: list[str], index: str) -> bytes:
        resp = await self._request("POST", f"/{index}/_mget", json={"ids": ids})
        return resp.content

    async def clone_index(self, source: str, target: str) -> bool:
        resp = await self._request("PUT", f"/{source}/_clone/{target}")
        return bool(resp.json().get("acknowledged", False))

    async def put_settings(self, read_only: bool, index: str) -> None:
        await self._request(
            "PUT", f"/{index}/_settings", json={"index": {"blocks": {"write": read_only}}}
        )

    async def put_mapping(self, index: str, schema: dict[str, Any]) -> None:
        await self._request("PUT", f"/{index}/_mapping", json=schema)

    @retry(
        retry=retry_if_exception_type(TransportError),
        stop=stop_after_attempt(10),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def wait_for_health(self, index: str | None = None) -> None:
        """Block until the cluster (or ``index``) reports at least yellow health."""
        path = "/_cluster/health" + (f"/{index}" if index else "")
        resp = await self._request("GET", path, params={"wait_for_status": "yellow", "timeout": "30s"})
        status = resp.json().get("status")
        if status not in ("yellow", "green"):
            self._log.info("Cluster health is %s, waiting", status)
            raise TransportError(f"cluster health is {status}")
