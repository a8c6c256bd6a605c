"""Shared fixtures for the client tests."""
from typing import Any, AsyncGenerator, Dict, Optional
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio
import respx

from gmclient.client import GMClient
from gmclient.context import ApiContext
from gmclient.core.config import Settings

API_HOST = "api.test.local"
BASE_URL = f"https://{API_HOST}/v2/"
API_KEY = "test-api-key-123456"


def envelope(data: Any) -> Dict[str, Any]:
    """Successful response body."""
    return {"success": True, "data": data}


def failure(error: str) -> Dict[str, Any]:
    """Failed response body."""
    return {"success": False, "error": error}


def account_record(
    account_number: str = "ACC1",
    balance: float = 1500.5,
    account_type: str = "Firma",
    bearer: str = "Acme GmbH",
) -> Dict[str, Any]:
    return {
        "accountNumber": account_number,
        "balance": balance,
        "accountType": account_type,
        "bearer": bearer,
    }


def mock_endpoint(api_mock: respx.MockRouter, endpoint: str, *responses: httpx.Response):
    """Register a GET route for an endpoint, answering with the given responses in order."""
    route = api_mock.get(host=API_HOST, path=f"/v2/{endpoint}")
    if len(responses) == 1:
        return route.mock(return_value=responses[0])
    return route.mock(side_effect=list(responses))


def make_fake_ctx(payloads: Dict[str, Any], lazy: bool = False, debug: bool = False) -> ApiContext:
    """Context with a fake transport answering from a dict of endpoint -> payload."""

    async def fetch_data(api_key, endpoint, params=None, debug=False):
        return payloads[endpoint]

    return ApiContext(
        api_key=API_KEY,
        fetch_data=AsyncMock(side_effect=fetch_data),
        handle_operation=AsyncMock(return_value=None),
        debug=debug,
        lazy=lazy,
    )


@pytest.fixture
def config() -> Settings:
    """Settings isolated from the environment."""
    return Settings(_env_file=None, api_key="", base_url=BASE_URL, environment="production")


@pytest.fixture
def api_mock():
    """Mock the HTTP layer for the duration of a test."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def api_info_route(api_mock):
    """api/info answering with 42 out of 100 requests used."""
    return mock_endpoint(
        api_mock,
        "api/info",
        httpx.Response(200, json=envelope({"limit": 100, "requests": 42, "outstandingCosts": 0})),
    )


@pytest_asyncio.fixture
async def http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def make_client(http_client, config):
    """Factory creating clients against the mocked API."""

    async def _make(
        lazy_mode: bool = False,
        debug_mode: bool = False,
        config_override: Optional[Settings] = None,
    ) -> GMClient:
        return await GMClient.create(
            API_KEY,
            lazy_mode,
            debug_mode,
            base_url=BASE_URL,
            http_client=http_client,
            config=config_override or config,
        )

    return _make
