"""Unit tests for the httpx-backed transport, using httpx.MockTransport."""

import json

import httpx
import pytest

from drama_client.errors import TransportFailure
from drama_client.models.context import RequestContext
from drama_client.transport.httpx_transport import HttpxTransport


def make_transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.fixture
def context():
    return RequestContext(
        method="POST",
        url="/ai/optimize-prompt",
        base_url="http://backend.test/api/v1",
        id="1-abc",
        headers={"Content-Type": "application/json", "X-Request-Id": "1-abc"},
        params={"lang": "en"},
        body={"prompt": "a red umbrella"},
        timeout_ms=5000,
    )


class TestHttpxTransport:

    @pytest.mark.asyncio
    async def test_sends_request(self, context):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["request_id"] = request.headers["X-Request-Id"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "data": {"prompt": "better"}})

        transport = make_transport(handler)

        response = await transport.send(context)

        assert seen == {
            "method": "POST",
            "url": "http://backend.test/api/v1/ai/optimize-prompt?lang=en",
            "request_id": "1-abc",
            "body": {"prompt": "a red umbrella"},
        }
        assert response.ok
        assert response.data == {"success": True, "data": {"prompt": "better"}}
        assert response.headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_non_2xx_is_returned_not_raised(self, context):
        transport = make_transport(
            lambda request: httpx.Response(500, json={"success": False, "error": {"message": "boom"}})
        )

        response = await transport.send(context)

        assert not response.ok
        assert response.status_code == 500
        assert response.data["error"]["message"] == "boom"

    @pytest.mark.asyncio
    async def test_text_body_is_kept(self, context):
        transport = make_transport(lambda request: httpx.Response(502, text="Bad Gateway"))

        response = await transport.send(context)

        assert response.data == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_empty_body(self, context):
        transport = make_transport(lambda request: httpx.Response(204))

        response = await transport.send(context)

        assert response.data is None

    @pytest.mark.asyncio
    async def test_connection_error_becomes_transport_failure(self, context):
        def handler(request):
            raise httpx.ConnectError("dial tcp: lookup backend.test: no such host", request=request)

        transport = make_transport(handler)

        with pytest.raises(TransportFailure) as exc_info:
            await transport.send(context)

        assert exc_info.value.status_code is None
        assert exc_info.value.request_id == "1-abc"
        assert "no such host" in exc_info.value.raw_message

    @pytest.mark.asyncio
    async def test_timeout_becomes_transport_failure(self, context):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportFailure, match="timed out"):
            await make_transport(handler).send(context)

    @pytest.mark.asyncio
    async def test_get_without_body(self):
        seen = {}

        def handler(request):
            seen["content"] = request.content
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"success": True, "data": []})

        context = RequestContext(method="GET", url="/ai-configs", base_url="http://backend.test/api/v1")

        await make_transport(handler).send(context)

        assert seen == {"content": b"", "url": "http://backend.test/api/v1/ai-configs"}

    @pytest.mark.asyncio
    async def test_aclose_leaves_injected_client_open(self, context):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(204)))
        transport = HttpxTransport(client=client)

        await transport.aclose()

        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_aclose_closes_owned_client(self):
        transport = HttpxTransport()
        client = transport.client

        await transport.aclose()

        assert client.is_closed

    @pytest.mark.asyncio
    async def test_corrupt_body_becomes_transport_failure(self, context):
        transport = make_transport(
            lambda request: httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not-gzip")
        )

        with pytest.raises(TransportFailure) as exc_info:
            await transport.send(context)

        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
        assert exc_info.value.request_id == "1-abc"
