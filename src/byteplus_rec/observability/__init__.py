# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability and metrics for the recommendation client.

Classes:
    UnifiedMetricsCollector: Metrics collector supporting dict and Prometheus.

Protocols:
    MetricsCollectorProtocol: Protocol for metrics collection backends.

Constants:
    PROMETHEUS_AVAILABLE: Whether prometheus_client is available.
    All metric name constants from constants module.
"""

from .collector import (
    METRIC_DEFINITIONS,
    PROMETHEUS_AVAILABLE,
    MetricDefinition,
    UnifiedMetricsCollector,
)
from .constants import (
    AVAILABLE_HOSTS,
    HOST_FAILURE_RATE,
    HOST_SWITCHES_TOTAL,
    LATENCY_BUCKETS,
    METRIC_PREFIX,
    PROBE_LATENCY_SECONDS,
    PROBES_TOTAL,
    REQUEST_LATENCY_SECONDS,
    REQUEST_RETRIES_TOTAL,
    REQUESTS_TOTAL,
    TICK_ERRORS_TOTAL,
)
from .protocols import MetricsCollectorProtocol

__all__ = [
    # Host availability
    "AVAILABLE_HOSTS",
    "HOST_FAILURE_RATE",
    "HOST_SWITCHES_TOTAL",
    # Buckets
    "LATENCY_BUCKETS",
    "METRIC_DEFINITIONS",
    "METRIC_PREFIX",
    "PROBES_TOTAL",
    "PROBE_LATENCY_SECONDS",
    # Constants
    "PROMETHEUS_AVAILABLE",
    # Requests
    "REQUESTS_TOTAL",
    "REQUEST_LATENCY_SECONDS",
    "REQUEST_RETRIES_TOTAL",
    "TICK_ERRORS_TOTAL",
    "MetricDefinition",
    # Protocols
    "MetricsCollectorProtocol",
    # Collector
    "UnifiedMetricsCollector",
]
