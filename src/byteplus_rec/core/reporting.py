# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request outcome reporting.

Turns a finished request into bounded metric labels: the request family
parsed from the URL, the status code, and a coarse error class.
"""

from __future__ import annotations

from ..observability.constants import REQUEST_LATENCY_SECONDS, REQUESTS_TOTAL
from ..observability.protocols import MetricsCollectorProtocol


def parse_req_type(url: str) -> str:
    """Classify a URL as ping, data-api, predict-api or unknown."""
    if "ping" in url:
        return "ping"
    if "data/api" in url:
        return "data-api"
    if "predict/api" in url:
        return "predict-api"
    return "unknown"


def classify_error(error: BaseException) -> str:
    """Map an exception to connect-timeout, read-timeout, timeout or other."""
    msg = f"{type(error).__name__} {error}".lower()
    if "time" in msg and "out" in msg:
        if "connect" in msg:
            return "connect-timeout"
        if "read" in msg:
            return "read-timeout"
        return "timeout"
    return "other"


def report_request(
    collector: MetricsCollectorProtocol | None,
    url: str,
    latency: float,
    code: int = 200,
    error: BaseException | None = None,
) -> None:
    """Record one request's latency and outcome."""
    if collector is None:
        return
    req_type = parse_req_type(url)
    if error is not None:
        message = classify_error(error)
    elif code == 200:
        message = "success"
    else:
        message = "status"
    collector.observe_histogram(
        REQUEST_LATENCY_SECONDS, latency, labels={"req_type": req_type}
    )
    collector.inc_counter(
        REQUESTS_TOTAL,
        labels={"req_type": req_type, "code": str(code), "message": message},
    )


__all__ = ["classify_error", "parse_req_type", "report_request"]
