"""
Tests for the Claude completion client.
"""
import json
import httpx
import pytest
from services.agent_weaver.ai_client import AIClient, CompletionClient
from services.agent_weaver.errors import ServiceError, RateLimitedError
from services.agent_weaver.models import CompletionParams

PARAMS = CompletionParams(model="claude-test", temperature=0.3, max_tokens=100)


def client_with(handler, settings):
    return AIClient(settings=settings, transport=httpx.MockTransport(handler))


class TestAIClient:
    """Test the AIClient class."""

    def test_satisfies_protocol(self, online_settings):
        assert isinstance(AIClient(settings=online_settings), CompletionClient)

    def test_model_info(self, online_settings, offline_settings):
        assert AIClient(settings=online_settings).get_model_info()["configured"] is True
        assert AIClient(settings=offline_settings).is_configured() is False

    @pytest.mark.asyncio
    async def test_complete(self, online_settings):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["headers"] = request.headers
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={
                "content": [
                    {"type": "text", "text": "{\"name\": "},
                    {"type": "text", "text": "\"agent\"}"}
                ]
            })

        client = client_with(handler, online_settings)
        text = await client.complete("system text", "user text", PARAMS)

        assert text == "{\"name\": \"agent\"}"
        assert captured["headers"]["x-api-key"] == "test-key"
        assert captured["headers"]["anthropic-version"] == "2023-06-01"
        assert captured["body"]["model"] == "claude-test"
        assert captured["body"]["temperature"] == 0.3
        assert captured["body"]["max_tokens"] == 100
        assert captured["body"]["system"] == "system text"
        assert captured["body"]["messages"] == [{"role": "user", "content": "user text"}]
        assert client.request_count == 1

    @pytest.mark.asyncio
    async def test_rate_limited(self, online_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, headers={"Retry-After": "2"}, json={"error": "slow down"})

        with pytest.raises(RateLimitedError) as exc_info:
            await client_with(handler, online_settings).complete("s", "u", PARAMS)

        assert exc_info.value.status_code == 429
        assert exc_info.value.retry_after == 2.0
        assert "Rate limit exceeded" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_server_error(self, online_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="boom")

        with pytest.raises(ServiceError) as exc_info:
            await client_with(handler, online_settings).complete("s", "u", PARAMS)

        assert not isinstance(exc_info.value, RateLimitedError)
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_connection_error(self, online_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ServiceError, match="Connection error"):
            await client_with(handler, online_settings).complete("s", "u", PARAMS)

    @pytest.mark.asyncio
    async def test_unexpected_body(self, online_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"content": []})

        with pytest.raises(ServiceError, match="Empty completion"):
            await client_with(handler, online_settings).complete("s", "u", PARAMS)

    @pytest.mark.asyncio
    async def test_non_json_body(self, online_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>gateway</html>")

        with pytest.raises(ServiceError, match="Malformed response body"):
            await client_with(handler, online_settings).complete("s", "u", PARAMS)

    @pytest.mark.asyncio
    async def test_requires_api_key(self, offline_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        with pytest.raises(ServiceError, match="API key is required"):
            await client_with(handler, offline_settings).complete("s", "u", PARAMS)

    @pytest.mark.asyncio
    async def test_content_blocks_not_objects(self, online_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"content": ["plain string block"]})

        with pytest.raises(ServiceError):
            await client_with(handler, online_settings).complete("s", "u", PARAMS)

    @pytest.mark.asyncio
    async def test_body_not_an_object(self, online_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=["not", "a", "message"])

        with pytest.raises(ServiceError, match="Unexpected response format"):
            await client_with(handler, online_settings).complete("s", "u", PARAMS)
