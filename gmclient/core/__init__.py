"""Core utilities for the client."""

from gmclient.core.config import Settings, settings
from gmclient.core.http_client import Transport, build_query_params, create_http_client
from gmclient.core.logging import get_log_context, get_logger, setup_logging
from gmclient.core.security import ApiKeyMaskFilter, mask_api_key

__all__ = [
    "Settings",
    "settings",
    "Transport",
    "build_query_params",
    "create_http_client",
    "get_log_context",
    "get_logger",
    "setup_logging",
    "ApiKeyMaskFilter",
    "mask_api_key",
]
