# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the recommendation client library.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from RecClientError, making it easy to catch
all client-related exceptions with a single except clause.

Host probing never raises any of these: probe failures are absorbed by the
availability tracker and only affect its failure-rate windows.
"""


class RecClientError(Exception):
    """Base exception for all recommendation client errors.

    Example:
        try:
            response = await client.predict(request, scene="home")
        except RecClientError as e:
            logger.error(f"Predict failed: {e}")
    """

    pass


class ConfigurationError(RecClientError):
    """Raised when client configuration is invalid.

    Configuration is validated once, when a client is constructed. A client
    (and its availability tracker) is never built from an invalid config.

    Common causes include:
    - Missing tenant, tenant id or token
    - No explicit hosts and no known region
    - Unsupported URL schema
    - Non-positive probe interval, timeout or window size

    Example:
        try:
            client = RetailClient(ClientConfig(tenant="demo", ...))
        except ConfigurationError as e:
            logger.error(f"Invalid configuration: {e}")
            raise SystemExit(1)
    """

    pass


class NetworkError(RecClientError):
    """Raised when a request fails at the transport level.

    When a request is issued with ``retry_times > 0`` the dispatcher
    retries transport failures and 5xx answers; other statuses are raised
    at once.

    Attributes:
        url: The URL the failed request was sent to. May be None.
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class RequestTimeoutError(NetworkError):
    """Raised when a request does not complete within its timeout."""

    pass


class UnexpectedStatusError(NetworkError):
    """Raised when the server answers with an HTTP status other than 200.

    Attributes:
        status_code: The HTTP status code returned by the server.
        body: The raw response body, possibly empty.

    Example:
        try:
            await client.write_users(request)
        except UnexpectedStatusError as e:
            if e.status_code == 429:
                await asyncio.sleep(1.0)
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        url: str | None = None,
        body: bytes = b"",
    ):
        super().__init__(message, url=url)
        self.status_code = status_code
        self.body = body


class ResponseDecodeError(RecClientError):
    """Raised when a response body cannot be decompressed or parsed."""

    pass


class TooManyItemsError(RecClientError):
    """Raised when a write or import batch exceeds the per-request limit.

    Attributes:
        limit: Maximum number of items accepted in one request.
        count: Number of items in the rejected request.
    """

    def __init__(self, limit: int, count: int):
        super().__init__(
            f"Only can receive max to {limit} items in one request, got {count}"
        )
        self.limit = limit
        self.count = count


__all__ = [
    "ConfigurationError",
    "NetworkError",
    "RecClientError",
    "RequestTimeoutError",
    "ResponseDecodeError",
    "TooManyItemsError",
    "UnexpectedStatusError",
]
