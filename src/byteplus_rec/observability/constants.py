# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

This module provides standardized metric names for all observability
in the byteplus-rec library. All metric names use the `byteplus_rec_`
prefix for Prometheus compatibility.

Naming Conventions:
    - Counter metrics end with `_total`
    - Histogram metrics for time end with `_seconds`
    - Gauges use present-tense descriptive names

Label Best Practices:
    To prevent label cardinality explosion, use only:
    - `host` - Configured endpoint host (a handful per client)
    - `outcome` - Probe outcome (enum: success, failure)
    - `req_type` - Request family (enum: ping, data-api, predict-api, unknown)
    - `code` - HTTP status code or "0" for transport errors
    - `message` - Error class (enum: connect-timeout, read-timeout, timeout, other)

    NEVER use:
    - `request_id` - Unique per request (unbounded!)
    - `url` - Contains scene and topic names (unbounded in practice)

Usage:
    >>> from byteplus_rec.observability.constants import PROBES_TOTAL
    >>> print(PROBES_TOTAL)
    'byteplus_rec_probes_total'
"""


# =============================================================================
# Global Prefix
# =============================================================================

METRIC_PREFIX = "byteplus_rec"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Host Availability Metrics (core/prober.py, core/availability.py)
# =============================================================================

PROBES_TOTAL = f"{METRIC_PREFIX}_probes_total"
"""Total health-check probes sent, by host and outcome."""

PROBE_LATENCY_SECONDS = f"{METRIC_PREFIX}_probe_latency_seconds"
"""Latency of health-check probes (histogram)."""

HOST_SWITCHES_TOTAL = f"{METRIC_PREFIX}_host_switches_total"
"""Total switches of the current host, labeled by the new host."""

HOST_FAILURE_RATE = f"{METRIC_PREFIX}_host_failure_rate"
"""Sliding-window probe failure rate per host."""

AVAILABLE_HOSTS = f"{METRIC_PREFIX}_available_hosts"
"""Number of hosts currently below the failure-rate threshold."""

TICK_ERRORS_TOTAL = f"{METRIC_PREFIX}_tick_errors_total"
"""Unexpected exceptions caught by the availability tick loop."""


# =============================================================================
# Request Metrics (core/dispatcher.py)
# =============================================================================

REQUESTS_TOTAL = f"{METRIC_PREFIX}_requests_total"
"""Total requests dispatched, by request type and outcome."""

REQUEST_LATENCY_SECONDS = f"{METRIC_PREFIX}_request_latency_seconds"
"""Latency of dispatched requests (histogram)."""

REQUEST_RETRIES_TOTAL = f"{METRIC_PREFIX}_request_retries_total"
"""Total retry attempts after network errors."""


# =============================================================================
# Histogram Buckets
# =============================================================================

LATENCY_BUCKETS = [
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.2,
    0.3,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
]
"""Buckets for request and probe latencies in seconds."""


__all__ = [
    "AVAILABLE_HOSTS",
    "HOST_FAILURE_RATE",
    "HOST_SWITCHES_TOTAL",
    "LATENCY_BUCKETS",
    "METRIC_PREFIX",
    "PROBES_TOTAL",
    "PROBE_LATENCY_SECONDS",
    "REQUESTS_TOTAL",
    "REQUEST_LATENCY_SECONDS",
    "REQUEST_RETRIES_TOTAL",
    "TICK_ERRORS_TOTAL",
]
