"""Tests for the remote fact client."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from conftest import BASE_URL, json_handler, make_client
from facts.client import DEFAULT_BASE_URL, FactClient
from facts.models import DecodeError, Fact, NetworkError
from observability import metrics


class TestFetchFact:
    @pytest.mark.asyncio
    async def test_success(self, sample_fact_text):
        client = make_client(json_handler({"fact": sample_fact_text, "length": 30}))
        async with client:
            fact = await client.fetch_fact()

        assert fact == Fact(text=sample_fact_text)
        assert metrics.count("fact.fetch.success") == 1

    @pytest.mark.asyncio
    async def test_requests_fact_path(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"fact": "x"})

        async with make_client(handler) as client:
            await client.fetch_fact()

        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert str(seen[0].url) == BASE_URL + "fact"
        assert seen[0].url.query == b""

    @pytest.mark.asyncio
    async def test_non_2xx_is_network_error(self):
        async with make_client(json_handler({"error": "nope"}, status_code=503)) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.fetch_fact()

        assert exc_info.value.status_code == 503
        assert metrics.count("fact.fetch.network_error") == 1

    @pytest.mark.asyncio
    async def test_connect_error_is_network_error(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.fetch_fact()

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_client(handler) as client:
            with pytest.raises(NetworkError):
                await client.fetch_fact()

    @pytest.mark.asyncio
    async def test_missing_field_is_decode_error(self):
        async with make_client(json_handler({"text": "wrong key"})) as client:
            with pytest.raises(DecodeError, match="Missing 'fact'"):
                await client.fetch_fact()

        assert metrics.count("fact.fetch.decode_error") == 1
        assert metrics.count("fact.fetch.success") == 0

    @pytest.mark.asyncio
    async def test_non_json_body_is_decode_error(self):
        def handler(request):
            return httpx.Response(200, text="<html>not json</html>")

        async with make_client(handler) as client:
            with pytest.raises(DecodeError, match="not valid JSON"):
                await client.fetch_fact()

    @pytest.mark.asyncio
    async def test_array_body_is_decode_error(self):
        async with make_client(json_handler([{"fact": "x"}])) as client:
            with pytest.raises(DecodeError, match="Expected JSON object"):
                await client.fetch_fact()

    @pytest.mark.asyncio
    async def test_fetch_is_timed(self):
        async with make_client(json_handler({"fact": "x"})) as client:
            await client.fetch_fact()

        assert metrics.summary()["timers"]["fact.fetch"]["count"] == 1


class TestClientConstruction:
    def test_defaults(self):
        client = FactClient()
        assert client.base_url == DEFAULT_BASE_URL
        assert str(client.client.base_url) == DEFAULT_BASE_URL

    def test_default_timeout_is_httpx_default(self):
        client = FactClient()
        assert client.client.timeout == httpx.Timeout(5.0)

    def test_custom_timeout(self):
        client = FactClient(timeout=1.5)
        assert client.client.timeout == httpx.Timeout(1.5)

    def test_user_agent_header(self):
        client = FactClient(user_agent="tester/1.0")
        assert client.client.headers["User-Agent"] == "tester/1.0"

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        client = FactClient()
        with patch.object(client.client, "aclose", new=AsyncMock()) as aclose:
            async with client:
                pass
        aclose.assert_awaited_once()


class TestFactPayload:
    def test_extra_fields_ignored(self):
        assert Fact.from_payload({"fact": "a", "length": 1}) == Fact(text="a")

    def test_non_string_fact(self):
        with pytest.raises(DecodeError, match="must be a string"):
            Fact.from_payload({"fact": 42})

    def test_null_fact(self):
        with pytest.raises(DecodeError):
            Fact.from_payload({"fact": None})

    def test_fact_is_immutable(self):
        fact = Fact(text="a")
        with pytest.raises(AttributeError):
            fact.text = "b"
