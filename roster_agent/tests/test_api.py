"""Tests for the Supabase HTTP client."""

import asyncio
import httpx
import pytest

from roster_agent.services.api import BackendAPIError, SupabaseAPIClient


def make_client(handler):
    client = SupabaseAPIClient(base_url="https://demo.supabase.co/rest/v1", api_key="anon")
    client.client = httpx.AsyncClient(transport=httpx.MockTransport(handler), headers=client.client.headers)
    return client


def run(client, method, endpoint, **kwargs):
    async def _call():
        async with client:
            return await client.request_json(method, endpoint, **kwargs)
    return asyncio.run(_call())


class TestSupabaseAPIClient:
    """Test SupabaseAPIClient class."""

    def test_get_json(self):
        """Test a GET sends auth headers and decodes rows."""
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["apikey"] = request.headers["apikey"]
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json=[{"id": "p1"}])

        rows = run(make_client(handler), "GET", "players", params={"team_id": "eq.t1"})

        assert rows == [{"id": "p1"}]
        assert seen["url"] == "https://demo.supabase.co/rest/v1/players?team_id=eq.t1"
        assert seen["apikey"] == "anon"
        assert seen["auth"] == "Bearer anon"

    def test_prefer_header_and_empty_body(self):
        seen = {}

        def handler(request):
            seen["prefer"] = request.headers.get("Prefer")
            seen["body"] = request.content
            return httpx.Response(204)

        result = run(make_client(handler), "PATCH", "game_rosters",
                     payload={"title": "Game"}, prefer="return=minimal")

        assert result is None
        assert seen["prefer"] == "return=minimal"
        assert b'"title"' in seen["body"]

    def test_not_found(self):
        with pytest.raises(BackendAPIError) as exc_info:
            run(make_client(lambda request: httpx.Response(404)), "GET", "game_rosters")

        assert exc_info.value.status_code == 404
        assert not exc_info.value.is_network_error

    def test_client_error(self):
        with pytest.raises(BackendAPIError) as exc_info:
            run(make_client(lambda request: httpx.Response(400, text="bad filter")), "GET", "players")

        assert exc_info.value.status_code == 400

    def test_retries_then_gives_up(self, monkeypatch):
        """Test a persistent 503 is retried three times before failing."""
        async def no_sleep(seconds):
            return None

        monkeypatch.setattr(SupabaseAPIClient._make_request.retry, "sleep", no_sleep)
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        with pytest.raises(BackendAPIError) as exc_info:
            run(make_client(handler), "GET", "players")

        assert len(calls) == 3
        assert exc_info.value.status_code == 503
        assert not exc_info.value.is_network_error

    def test_network_error(self, monkeypatch):
        """Test transport failures are flagged so callers can use the cache."""
        async def no_sleep(seconds):
            return None

        monkeypatch.setattr(SupabaseAPIClient._make_request.retry, "sleep", no_sleep)

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(BackendAPIError) as exc_info:
            run(make_client(handler), "GET", "players")

        assert exc_info.value.status_code == 0
        assert exc_info.value.is_network_error
