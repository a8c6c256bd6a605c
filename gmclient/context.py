"""Capability bundle shared by every service and resource of one client."""

from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Mapping, Optional

FetchData = Callable[..., Awaitable[Any]]
HandleOperation = Callable[..., Awaitable[None]]


@dataclass(frozen=True)
class ApiContext:
    """Immutable context handed to services and resource objects.

    Attributes:
        api_key: The API key appended to every request
        fetch_data: Transport coroutine ``(api_key, endpoint, params, debug)``
        handle_operation: Quota precheck coroutine, awaited before each fetch
        debug: Log requests and validated payloads
        lazy: Return resources unloaded from factories
    """

    api_key: str = field(repr=False)
    fetch_data: FetchData = field(repr=False)
    handle_operation: HandleOperation = field(repr=False)
    debug: bool = False
    lazy: bool = False

    async def fetch(self, endpoint: str, params: Optional[Mapping[str, str]] = None) -> Any:
        """Fetch an endpoint with the bundled key and debug flag."""
        return await self.fetch_data(self.api_key, endpoint, params, self.debug)

    def eager(self) -> "ApiContext":
        """Return a copy of this context with lazy loading disabled."""
        if not self.lazy:
            return self
        return replace(self, lazy=False)
