"""GermanMiner API client.

The client owns the API key, the lazy/debug flags, the HTTP transport and
an advisory cache of the api/info quota snapshot. The cache lets the client
refuse requests once the limit is reached without an extra round trip
before every request; it may be stale by up to the cache lifetime.
"""

import logging
import time
from typing import Awaitable, Optional, Union

import httpx

from gmclient.context import ApiContext
from gmclient.core.config import Settings, settings
from gmclient.core.http_client import Transport, create_http_client
from gmclient.core.logging import get_log_context
from gmclient.exceptions import ClientConfigError, LimitReachedError
from gmclient.resources.bank import BankAccount
from gmclient.resources.player import Player
from gmclient.schemas.api_info import ApiInfo
from gmclient.services.bank import BankService
from gmclient.services.player import PlayerService

logger = logging.getLogger(__name__)

API_INFO_ENDPOINT = "api/info"


class GMClient:
    """Client for the GermanMiner API.

    Use ``await GMClient.create(...)`` to get a client with a primed quota
    cache. The client can be used as an async context manager to close its
    HTTP connections.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        lazy_mode: bool = False,
        debug_mode: Optional[bool] = None,
        *,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        config: Optional[Settings] = None,
    ):
        """Initialize the client.

        Args:
            api_key: The API key. Falls back to GM_API_KEY / API_KEY.
            lazy_mode: Return resources unloaded to save requests; they
                must then be loaded with ``load()``.
            debug_mode: Log requests and payloads at debug level. Defaults
                to true when GM_ENV is "development".
            base_url: Override the API base URL
            http_client: Optional shared HTTP client. If omitted the client
                creates and owns one.
            config: Settings to use instead of the global settings

        Raises:
            ClientConfigError: If no API key can be resolved
        """
        config = config or settings

        api_key = api_key or config.api_key
        if not api_key:
            raise ClientConfigError(
                "API key is required but not found in environment nor passed as an argument."
            )
        self.__api_key = api_key

        self.__lazy = bool(lazy_mode)
        self.__debug = config.debug_default if debug_mode is None else bool(debug_mode)

        # Quota cache, only ever set from an api/info response
        self.__cache_ttl = config.quota_cache_ttl_seconds
        self.__limit = 0
        self.__requests = 0
        self.__last_updated: Optional[float] = None
        self.__api_info: Optional[ApiInfo] = None

        # Advisory count of operations issued by this client
        self.__local_request_count = 0

        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = create_http_client(config)
        self._transport = Transport(base_url, http_client, config)

        self._ctx = ApiContext(
            api_key=self.__api_key,
            fetch_data=self._transport.fetch_data,
            handle_operation=self._handle_operation,
            debug=self.__debug,
            lazy=self.__lazy,
        )

        if self.__lazy:
            logger.info("Lazy mode activated for GMClient.")
        if self.__debug:
            logger.info("Debug mode activated for GMClient.")
        logger.info("GMClient successfully initialized.")

    @classmethod
    async def create(
        cls,
        api_key: Optional[str] = None,
        lazy_mode: bool = False,
        debug_mode: Optional[bool] = None,
        **kwargs,
    ) -> "GMClient":
        """Create a client and fetch the initial quota snapshot.

        Accepts the same arguments as the constructor.
        """
        client = cls(api_key, lazy_mode, debug_mode, **kwargs)
        try:
            await client._refresh_cache()
        except BaseException:
            await client.aclose()
            raise
        return client

    @property
    def lazy(self) -> bool:
        return self.__lazy

    @property
    def debug(self) -> bool:
        return self.__debug

    @property
    def limit(self) -> int:
        """Request limit from the last quota snapshot."""
        return self.__limit

    @property
    def requests(self) -> int:
        """Requests used according to the last quota snapshot."""
        return self.__requests

    @property
    def local_request_count(self) -> int:
        """Operations issued by this client, including quota refreshes."""
        return self.__local_request_count

    @property
    def base_url(self) -> str:
        return self._transport.base_url

    def is_limit_reached(self) -> bool:
        """Whether the cached snapshot shows the limit reached.

        Never refreshes the cache.
        """
        return self.__requests >= self.__limit

    async def get_remaining_requests(self) -> int:
        """Remaining requests, refreshing the cache first if it is stale."""
        if self._is_cache_outdated():
            await self._refresh_cache()
        return self.__limit - self.__requests

    async def get_api_info(self, force_refresh: bool = False) -> ApiInfo:
        """Get request limit, used requests and outstanding costs.

        Args:
            force_refresh: Fetch a new snapshot even if the cached one is
                fresh. This skips the limit check.

        Raises:
            LimitReachedError: If not forced and the cached limit is reached
        """
        if force_refresh:
            return await self._refresh_cache()

        await self._handle_operation()
        if self.__api_info is None or self._is_cache_outdated():
            return await self._refresh_cache()
        return self.__api_info

    def bank(
        self, account_number: Optional[str] = None
    ) -> Union[BankService, Awaitable[BankAccount]]:
        """Access bank accounts.

        Without an account number this returns a ``BankService``. With one
        it returns an awaitable resolving to the ``BankAccount``, loaded
        unless lazy mode is enabled.
        """
        if account_number:
            return BankAccount.create(account_number, self._ctx)
        return BankService(self._ctx)

    def player(
        self, player_name: Optional[str] = None, uuid: Optional[str] = None
    ) -> Union[PlayerService, Awaitable[Player]]:
        """Access players.

        Without arguments this returns a ``PlayerService``. With a name or
        UUID it returns an awaitable resolving to the ``Player``, loaded
        unless lazy mode is enabled.
        """
        if player_name or uuid:
            return Player.create(self._ctx, player_name=player_name, uuid=uuid)
        return PlayerService(self._ctx)

    async def aclose(self) -> None:
        """Close the HTTP client if this client created it."""
        client = self._transport.http_client
        if self._owns_http_client and client is not None:
            await client.aclose()

    async def __aenter__(self) -> "GMClient":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()

    def _is_cache_outdated(self) -> bool:
        if self.__last_updated is None:
            return True
        return time.monotonic() - self.__last_updated > self.__cache_ttl

    async def _handle_operation(self, ignore_cache: bool = False) -> None:
        """Count an operation and check the cached quota before it is sent.

        Args:
            ignore_cache: Only count; skip the refresh and the limit check.
                Used by the cache refresh itself.

        Raises:
            LimitReachedError: If the (possibly refreshed) cache shows the
                limit reached
        """
        self.__local_request_count += 1
        if ignore_cache:
            return

        if self._is_cache_outdated():
            await self._refresh_cache()

        if self.is_limit_reached():
            logger.warning(
                f"Request limit reached: {self.__requests} out of {self.__limit} requests used."
            )
            raise LimitReachedError(self.__requests, self.__limit)

        if self.__debug:
            logger.debug(
                f"{self.__requests} out of {self.__limit} requests used "
                f"({self.__local_request_count} sent by this client)."
            )

    async def _refresh_cache(self) -> ApiInfo:
        await self._handle_operation(ignore_cache=True)

        data = await self._ctx.fetch(API_INFO_ENDPOINT)
        result = ApiInfo.model_validate(data)
        if self.__debug:
            logger.debug(
                f"ApiInfo successfully validated: {result.model_dump_json(by_alias=True)}",
                extra=get_log_context(endpoint=API_INFO_ENDPOINT),
            )

        self.__limit = result.limit
        self.__requests = result.requests
        self.__last_updated = time.monotonic()
        self.__api_info = result
        return result

    def __repr__(self) -> str:
        return (
            f"GMClient(base_url={self.base_url!r}, lazy={self.__lazy}, "
            f"debug={self.__debug}, requests={self.__requests}, limit={self.__limit})"
        )
