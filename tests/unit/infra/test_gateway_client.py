"""Tests for GatewayRestClient over an httpx mock transport."""

import json

import httpx
import pytest

from stakesync.exceptions import DecodeError, TransportError, UpstreamError
from stakesync.infra.gateway.rest_client import GatewayRestClient
from stakesync.infra.http.rate_limited_client import RateLimitedClient
from stakesync.sources.validators import ValidatorsSource


def _client(handler) -> GatewayRestClient:
    http = RateLimitedClient(rate_per_second=1000.0, transport=httpx.MockTransport(handler))
    return GatewayRestClient(base_url="http://gateway.test/", http_client=http)


class TestGetJson:
    async def test_returns_envelope(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["accept"] = request.headers.get("Accept")
            return httpx.Response(200, json={"data": {"list": []}, "error": "", "code": "successful"})

        envelope = await _client(handler).get_json("/network/direct-staked-info", ("user", "pass"))
        assert envelope.data == {"list": []}
        assert envelope.code == "successful"
        assert seen["url"] == "http://gateway.test/network/direct-staked-info"
        assert seen["auth"].startswith("Basic ")
        assert seen["accept"] == "application/json"

    async def test_no_auth_header_without_credentials(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"data": None})

        await _client(handler).get_json("/x")
        assert seen["auth"] is None

    async def test_error_envelope_on_success_is_returned(self):
        def handler(request):
            return httpx.Response(200, json={"data": None, "error": "boom", "code": "internal_issue"})

        envelope = await _client(handler).get_json("/x")
        assert envelope.error == "boom"

    async def test_error_status_with_message_is_upstream_error(self):
        def handler(request):
            return httpx.Response(500, json={"data": None, "error": "boom", "code": "internal_issue"})

        with pytest.raises(UpstreamError, match="boom") as exc:
            await _client(handler).get_json("/x")
        assert exc.value.code == "internal_issue"

    @pytest.mark.parametrize("status", [401, 500, 503])
    async def test_error_status_with_blank_envelope_is_transport_error(self, status):
        def handler(request):
            return httpx.Response(status, json={"data": None, "error": "", "code": "internal_issue"})

        with pytest.raises(TransportError, match=f"HTTP {status}"):
            await _client(handler).get_json("/network/direct-staked-info")

    async def test_error_status_fails_validators_source(self):
        def handler(request):
            return httpx.Response(500, json={"data": None, "error": "", "code": "internal_issue"})

        with pytest.raises(TransportError):
            await ValidatorsSource(_client(handler)).fetch()

    async def test_network_failure_is_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused")

        with pytest.raises(TransportError):
            await _client(handler).get_json("/x")

    async def test_non_json_body_is_decode_error(self):
        def handler(request):
            return httpx.Response(200, text="<html>")

        with pytest.raises(DecodeError):
            await _client(handler).get_json("/x")

    async def test_non_json_error_status_is_transport_error(self):
        def handler(request):
            return httpx.Response(502, text="bad gateway")

        with pytest.raises(TransportError):
            await _client(handler).get_json("/x")


class TestPostJson:
    async def test_sends_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"data": {"data": {"returnData": []}}, "error": "", "code": "ok"})

        envelope = await _client(handler).post_json("/vm-values/query", {"scAddress": "erd1qq"})
        assert seen["body"] == {"scAddress": "erd1qq"}
        assert envelope.data == {"data": {"returnData": []}}

    async def test_non_200_raises_upstream_error_with_message(self):
        def handler(request):
            return httpx.Response(400, json={"data": None, "error": "function not found", "code": "bad_request"})

        with pytest.raises(UpstreamError, match="function not found") as exc:
            await _client(handler).post_json("/vm-values/query", {})
        assert exc.value.code == "bad_request"
