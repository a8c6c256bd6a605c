import logging
import re
from typing import Set
from urllib.parse import quote, quote_plus

MASK = "****"


def mask_api_key(text: str, api_key: str, visible: int = 4) -> str:
    """Mask an API key sent as the ``key`` query parameter of a URL.

    Only values of ``key=`` in a query string are replaced, so a short key
    that happens to match a path segment leaves the rest of the URL intact.
    The first ``visible`` characters of the key are kept so that log lines
    of different keys can still be told apart. Keys no longer than
    ``visible * 2`` are masked completely. URL-encoded forms of the key
    are masked as well.

    Args:
        text: Text that may contain a request URL
        api_key: The raw API key
        visible: Number of leading characters to keep

    Returns:
        The text with the key masked
    """
    if not api_key:
        return text
    if len(api_key) <= visible * 2:
        masked = MASK
    else:
        masked = f"{api_key[:visible]}{MASK}"

    forms = sorted({api_key, quote(api_key, safe=""), quote_plus(api_key)}, key=len, reverse=True)
    pattern = re.compile(
        r"(?<=[?&]key=)(?:%s)(?=[&#\s\"']|$)" % "|".join(re.escape(form) for form in forms)
    )
    return pattern.sub(masked, text)


class ApiKeyMaskFilter(logging.Filter):
    """Logging filter masking registered API keys in record messages.

    Attached to the ``httpx`` logger, which logs every request URL at INFO.
    """

    def __init__(self):
        super().__init__()
        self._api_keys: Set[str] = set()

    def add_key(self, api_key: str) -> None:
        if api_key:
            self._api_keys.add(api_key)

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._api_keys:
            return True

        message = record.getMessage()
        masked = message
        for api_key in self._api_keys:
            masked = mask_api_key(masked, api_key)
        if masked != message:
            record.msg = masked
            record.args = ()
        return True
