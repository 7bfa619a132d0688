"""HTTP API client for the Supabase REST backend."""

import asyncio
from typing import Any, Optional
import httpx
from tenacity import (
    RetryError,
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    retry_if_result
)
from rich.console import Console

from roster_agent.config import BackendConfig

console = Console()

RETRY_STATUSES = [429, 500, 502, 503, 504]


class BackendAPIError(Exception):
    """Exception raised for backend API errors."""

    def __init__(self, status_code: int, message: str, is_network_error: bool = False):
        self.status_code = status_code
        self.message = message
        self.is_network_error = is_network_error
        super().__init__(f"API Error {status_code}: {message}")


class SupabaseAPIClient:
    """HTTP client for Supabase PostgREST with retry logic."""

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None,
                 access_token: Optional[str] = None):
        if base_url is None:
            BackendConfig.validate()
            base_url = BackendConfig.rest_url()
        self.base_url = base_url.rstrip("/")
        api_key = api_key or BackendConfig.SUPABASE_KEY
        bearer = access_token or BackendConfig.SUPABASE_ACCESS_TOKEN or api_key
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(BackendConfig.REQUEST_TIMEOUT),
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {bearer}",
                "Content-Type": "application/json",
                "Accept": "application/json"
            }
        )

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.client.aclose()

    def _should_retry(self, response: httpx.Response) -> bool:
        """Check if response should be retried."""
        return response.status_code in RETRY_STATUSES

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=4, max=10),
        retry=(
            retry_if_exception_type(httpx.RequestError) |
            retry_if_result(lambda r: isinstance(r, httpx.Response) and r.status_code in RETRY_STATUSES)
        ),
        reraise=True
    )
    async def _make_request(self, method: str, url: str, *, params: Optional[dict] = None,
                            payload: Any = None, headers: Optional[dict] = None) -> httpx.Response:
        """Make HTTP request with retry logic."""
        try:
            response = await self.client.request(method, url, params=params, json=payload, headers=headers)

            if self._should_retry(response):
                console.print(f"[yellow]Retrying {method} {url} (status: {response.status_code})[/yellow]")
                return response  # Will be retried

            if response.status_code == 404:
                raise BackendAPIError(404, f"Resource not found: {url}")
            elif response.status_code >= 400:
                raise BackendAPIError(response.status_code, f"HTTP {response.status_code}: {response.text}")

            return response

        except httpx.RequestError as e:
            console.print(f"[red]Request error: {e}[/red]")
            raise

    async def request_json(self, method: str, endpoint: str, *, params: Optional[dict] = None,
                           payload: Any = None, prefer: Optional[str] = None) -> Any:
        """Send a request and decode the JSON body, if any."""
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        headers = {"Prefer": prefer} if prefer else None

        try:
            response = await self._make_request(method, url, params=params, payload=payload, headers=headers)
        except BackendAPIError:
            raise
        except RetryError as e:
            last = e.last_attempt.result()
            raise BackendAPIError(last.status_code, f"Gave up after retries: {url}")
        except httpx.RequestError as e:
            raise BackendAPIError(0, f"Network error: {e}", is_network_error=True)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise BackendAPIError(response.status_code, f"Invalid JSON response: {e}")

    async def get_json(self, endpoint: str, *, params: Optional[dict] = None) -> Any:
        """Get JSON data from a table endpoint."""
        return await self.request_json("GET", endpoint, params=params)


def _run(method: str, endpoint: str, **kwargs) -> Any:
    async def _call():
        async with SupabaseAPIClient() as client:
            return await client.request_json(method, endpoint, **kwargs)

    return asyncio.run(_call())


# Synchronous wrappers for convenience
def get_json(endpoint: str, *, params: Optional[dict] = None) -> Any:
    """Synchronous GET."""
    return _run("GET", endpoint, params=params)


def post_json(endpoint: str, payload: Any, *, params: Optional[dict] = None,
              prefer: Optional[str] = "return=representation") -> Any:
    """Synchronous POST (insert)."""
    return _run("POST", endpoint, params=params, payload=payload, prefer=prefer)


def patch_json(endpoint: str, payload: Any, *, params: Optional[dict] = None,
               prefer: Optional[str] = "return=minimal") -> Any:
    """Synchronous PATCH (update)."""
    return _run("PATCH", endpoint, params=params, payload=payload, prefer=prefer)


def delete(endpoint: str, *, params: Optional[dict] = None) -> Any:
    """Synchronous DELETE."""
    return _run("DELETE", endpoint, params=params)
