"""HTTP transport for the GermanMiner API.

Every request is a GET against ``<base_url><endpoint>`` with the API key
appended as the ``key`` query parameter. Responses use the envelope
``{"success": true, "data": ...}``; anything else is surfaced as ``ApiError``.
"""

import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Mapping, Optional

import httpx

from gmclient.core.config import Settings, settings
from gmclient.core.logging import get_log_context
from gmclient.core.security import ApiKeyMaskFilter, mask_api_key
from gmclient.exceptions import ApiError

logger = logging.getLogger(__name__)

# httpx logs every request URL, key included, at INFO level
httpx_log_filter = ApiKeyMaskFilter()
logging.getLogger("httpx").addFilter(httpx_log_filter)


def create_http_client(config: Optional[Settings] = None, **kwargs) -> httpx.AsyncClient:
    """Create a new HTTP client with the configured timeouts and pool limits.

    The returned client should be closed when done:
        async with create_http_client() as client:
            ...

    Args:
        config: Settings to read defaults from. Defaults to the global settings.
        **kwargs: Override default settings. Can include:
            - timeout: Single timeout value (overrides all granular timeouts)
            - connect_timeout, read_timeout, write_timeout, pool_timeout
            - max_connections, max_keepalive_connections, keepalive_expiry
            - transport: Custom httpx transport (e.g. httpx.MockTransport)

    Returns:
        A new httpx.AsyncClient instance.
    """
    config = config or settings

    timeout_override = kwargs.get("timeout")
    if timeout_override is not None:
        timeout = httpx.Timeout(timeout_override)
    else:
        timeout = httpx.Timeout(
            connect=kwargs.get("connect_timeout", config.httpx_connect_timeout),
            read=kwargs.get("read_timeout", config.httpx_read_timeout),
            write=kwargs.get("write_timeout", config.httpx_write_timeout),
            pool=kwargs.get("pool_timeout", config.httpx_pool_timeout),
        )

    client_kwargs: Dict[str, Any] = {
        "timeout": timeout,
        "limits": httpx.Limits(
            max_connections=kwargs.get(
                "max_connections", config.httpx_max_connections
            ),
            max_keepalive_connections=kwargs.get(
                "max_keepalive_connections", config.httpx_max_keepalive_connections
            ),
            keepalive_expiry=kwargs.get(
                "keepalive_expiry", config.httpx_keepalive_expiry
            ),
        ),
    }
    if kwargs.get("transport") is not None:
        client_kwargs["transport"] = kwargs["transport"]
    return httpx.AsyncClient(**client_kwargs)


def build_query_params(
    api_key: str, params: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Build the query parameters for a request.

    The API key is always sent as ``key``; additional parameters follow.
    """
    query = {"key": api_key}
    if params:
        for name, value in params.items():
            query[name] = value
    return query


class Transport:
    """Performs GET requests against the API and unwraps the response envelope.

    The transport can use an external ``httpx.AsyncClient`` for connection
    pooling, or create a client per request if none is provided.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        config: Optional[Settings] = None,
    ):
        """Initialize the transport.

        Args:
            base_url: The API base URL. Defaults to the configured base URL.
            http_client: Optional shared HTTP client for connection pooling
            config: Settings used for defaults and per-request clients
        """
        self._config = config or settings
        self._http_client = http_client
        base_url = base_url or self._config.base_url
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"

    @property
    def http_client(self) -> Optional[httpx.AsyncClient]:
        """Get the HTTP client, if one was provided."""
        return self._http_client

    def _get_endpoint_url(self, endpoint: str) -> str:
        """Build full URL for an endpoint (e.g. "bank/info")."""
        return f"{self.base_url}{endpoint.lstrip('/')}"

    @asynccontextmanager
    async def _client_context(self) -> AsyncGenerator[httpx.AsyncClient, None]:
        """Yield the shared client, or a per-request client closed afterwards."""
        if self._http_client is not None:
            yield self._http_client
            return

        client = create_http_client(self._config)
        try:
            yield client
        finally:
            await client.aclose()

    async def fetch_data(
        self,
        api_key: str,
        endpoint: str,
        params: Optional[Mapping[str, str]] = None,
        debug: bool = False,
    ) -> Any:
        """Fetch an endpoint and return the ``data`` member of the envelope.

        Args:
            api_key: The API key appended to the query
            endpoint: Endpoint path relative to the base URL
            params: Additional query parameters
            debug: Log the (masked) URL and payload at debug level

        Returns:
            The endpoint-specific payload

        Raises:
            ApiError: If the HTTP status is not a success, the body is not
                JSON, or the envelope does not report success
            httpx.HTTPError: On network level failures
        """
        url = self._get_endpoint_url(endpoint)
        query = build_query_params(api_key, params)
        httpx_log_filter.add_key(api_key)

        started = time.perf_counter()
        async with self._client_context() as client:
            resp = await client.get(url, params=query)
        duration_ms = round((time.perf_counter() - started) * 1000, 1)

        if debug:
            logger.debug(
                f"Query URL built: {mask_api_key(str(resp.request.url), api_key)}",
                extra=get_log_context(
                    endpoint=endpoint,
                    status_code=resp.status_code,
                    duration_ms=duration_ms,
                ),
            )

        try:
            body = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise ApiError(
                f"response is not valid JSON (HTTP {resp.status_code})",
                resp.status_code,
                resp.reason_phrase,
            )

        if not resp.is_success or not isinstance(body, dict) or body.get("success") is not True:
            error = body.get("error") if isinstance(body, dict) else None
            logger.warning(
                f"Request to {endpoint} failed: {error}",
                extra=get_log_context(endpoint=endpoint, status_code=resp.status_code),
            )
            raise ApiError(
                str(error) if error is not None else None,
                resp.status_code,
                resp.reason_phrase,
            )

        data = body.get("data")
        if debug:
            logger.debug(
                f"Successfully fetched from {endpoint}: {json.dumps(data, default=str)}",
                extra=get_log_context(endpoint=endpoint),
            )
        return data
