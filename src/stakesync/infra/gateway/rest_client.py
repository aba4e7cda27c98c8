"""Chain gateway REST client: JSON envelopes over the shared rate-limited HTTP client."""

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from stakesync.exceptions import DecodeError, TransportError, UpstreamError
from stakesync.infra.gateway.schemas import ApiEnvelope
from stakesync.infra.http.rate_limited_client import RateLimitedClient


class GatewayRestClient:
    """Minimal client for the gateway endpoints used by the stake sources."""

    def __init__(
        self,
        base_url: str,
        http_client: RateLimitedClient,
        logger: logging.Logger | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_client
        self._log = logger or logging.getLogger(__name__)

    async def get_json(self, path: str, auth: tuple[str, str] | None = None) -> ApiEnvelope:
        try:
            resp = await self._http.get(self._base_url + path, auth=auth)
        except httpx.HTTPError as e:
            raise TransportError(f"GET {path}: {e}") from e

        envelope = self._decode_envelope(path, resp)
        if not resp.is_success:
            if envelope.error:
                raise UpstreamError(envelope.error, envelope.code)
            raise TransportError(f"GET {path} returned HTTP {resp.status_code}")
        return envelope

    async def post_json(
        self, path: str, body: dict[str, Any], auth: tuple[str, str] | None = None
    ) -> ApiEnvelope:
        try:
            resp = await self._http.post(self._base_url + path, json=body, auth=auth)
        except httpx.HTTPError as e:
            raise TransportError(f"POST {path}: {e}") from e

        envelope = self._decode_envelope(path, resp)
        if resp.status_code != 200:
            # non-200 answers still carry the envelope with the reason
            raise UpstreamError(
                envelope.error or f"POST {path} returned HTTP {resp.status_code}", envelope.code
            )
        return envelope

    def _decode_envelope(self, path: str, resp: httpx.Response) -> ApiEnvelope:
        try:
            return ApiEnvelope.model_validate(resp.json())
        except (json.JSONDecodeError, ValidationError) as e:
            self._log.warning("Undecodable response from %s (HTTP %d)", path, resp.status_code)
            if resp.status_code >= 400:
                raise TransportError(f"{path} returned HTTP {resp.status_code}") from e
            raise DecodeError(f"error unmarshaling response from {path}: {e}") from e
