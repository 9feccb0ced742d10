# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Per-request options accepted by every client operation."""

import uuid
from dataclasses import dataclass, field


@dataclass
class RequestOptions:
    """
    Options for a single request.

    Example:
        >>> opts = RequestOptions(timeout=0.8, retry_times=2)
        >>> await client.predict(request, scene="home", options=opts)
    """

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    """Sent as the Request-Id header. A fresh UUID when not given."""

    timeout: float | None = None
    """Request timeout in seconds. Falls back to the client default."""

    headers: dict[str, str] = field(default_factory=dict)
    """Extra headers, applied last so they override library headers."""

    retry_times: int = 0
    """Retries after transport errors, timeouts and 5xx answers."""

    def __post_init__(self) -> None:
        """Validate options after initialization."""
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.retry_times < 0:
            raise ValueError("retry_times must be non-negative")


__all__ = ["RequestOptions"]
