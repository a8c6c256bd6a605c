"""Custom exceptions for the GermanMiner client."""

from typing import Optional


class GMClientException(Exception):
    """Base class for all errors raised by the client itself.

    Validation errors are not wrapped: payloads that do not match the
    expected shape raise ``pydantic.ValidationError`` unmodified.
    """

    def __init__(self, message: str = "Client error"):
        self.message = message
        super().__init__(message)


class ClientConfigError(GMClientException):
    """Raised at construction when the client cannot be configured.

    The typical cause is a missing API key: none was passed and none was
    found in the environment.
    """

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Client failed: {detail}")


class ApiError(GMClientException):
    """Raised when a request fails.

    Covers both a non-success HTTP status and a response envelope with
    ``success`` not set to true.
    """

    def __init__(
        self,
        error: Optional[str] = None,
        status_code: Optional[int] = None,
        status_text: Optional[str] = None,
    ):
        self.error = error
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(f"Request failed: {error or 'unknown error'}")


class UnexpectedResponseError(ApiError):
    """Raised when a successful response carries a payload of unusable shape."""

    def __init__(self, endpoint: str, detail: str):
        self.endpoint = endpoint
        super().__init__(f"unexpected response shape from {endpoint}: {detail}")


class LimitReachedError(GMClientException):
    """Raised by the client-side quota guard before a request is sent.

    The values come from the last cached api/info snapshot; the server may
    still reject requests on its own, which surfaces as ``ApiError``.
    """

    def __init__(self, current_requests: int, limit: int):
        self.current_requests = current_requests
        self.limit = limit
        super().__init__(f"You have reached the limit of {limit} requests.")


class UsageError(GMClientException, ValueError):
    """Raised when the library is used incorrectly, before any network call."""
