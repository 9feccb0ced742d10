# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Unified metrics collector supporting both dict-based and Prometheus metrics.

This module provides the UnifiedMetricsCollector class, the default
implementation of MetricsCollectorProtocol used by clients, the
availability tracker and the request dispatcher.

Features:
    1. Thread-safe counter/gauge/histogram operations
    2. Automatic Prometheus metric registration when available
    3. Dict-based snapshots for JSON export
    4. Label cardinality protection (max 1000 unique combinations per metric)
    5. Optional HTTP server for Prometheus scraping

Usage:
    >>> from byteplus_rec.observability.collector import UnifiedMetricsCollector
    >>> collector = UnifiedMetricsCollector(enable_prometheus=False)
    >>> collector.inc_counter('byteplus_rec_probes_total',
    ...                       labels={'host': 'a.example.com', 'outcome': 'success'})
    >>> metrics = collector.get_metrics()

Ownership:
    Each client owns its collector. There is no process-wide instance, so
    two clients in one process never mix their host statistics.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
)

from .constants import (
    AVAILABLE_HOSTS,
    HOST_FAILURE_RATE,
    HOST_SWITCHES_TOTAL,
    LATENCY_BUCKETS,
    PROBE_LATENCY_SECONDS,
    PROBES_TOTAL,
    REQUEST_LATENCY_SECONDS,
    REQUEST_RETRIES_TOTAL,
    REQUESTS_TOTAL,
    TICK_ERRORS_TOTAL,
)

logger = logging.getLogger(__name__)

# Type declarations for optional prometheus_client imports
if TYPE_CHECKING:
    from prometheus_client import (
        CollectorRegistry as CollectorRegistryType,
        Counter as CounterType,
        Gauge as GaugeType,
        Histogram as HistogramType,
    )
else:
    CounterType = object
    GaugeType = object
    HistogramType = object
    CollectorRegistryType = object

# prometheus_client is an optional extra; without it only dict metrics are kept
try:
    from prometheus_client import (
        CollectorRegistry as _CollectorRegistry,
        Counter as _Counter,
        Gauge as _Gauge,
        Histogram as _Histogram,
        start_http_server as _start_http_server,
    )

    Counter: type[CounterType] | None = _Counter
    Gauge: type[GaugeType] | None = _Gauge
    Histogram: type[HistogramType] | None = _Histogram
    CollectorRegistry: type[CollectorRegistryType] | None = _CollectorRegistry
    start_http_server: Callable[..., Any] | None = _start_http_server
    PROMETHEUS_AVAILABLE = True
except ImportError:
    Counter = None
    Gauge = None
    Histogram = None
    CollectorRegistry = None
    start_http_server = None
    PROMETHEUS_AVAILABLE = False


@dataclass
class MetricDefinition:
    """
    Definition for a metric that can be instantiated.

    This dataclass defines the schema for metrics, including their type,
    description, labels, and histogram buckets.
    """

    name: str
    metric_type: str  # 'counter', 'gauge', 'histogram'
    description: str
    label_names: tuple[str, ...] = ()
    buckets: list[float] | None = None


# Pre-defined metrics for the library
METRIC_DEFINITIONS: dict[str, MetricDefinition] = {
    # === Host Availability ===
    PROBES_TOTAL: MetricDefinition(
        PROBES_TOTAL,
        "counter",
        "Total health-check probes",
        ("host", "outcome"),
    ),
    PROBE_LATENCY_SECONDS: MetricDefinition(
        PROBE_LATENCY_SECONDS,
        "histogram",
        "Latency of health-check probes",
        ("host",),
        buckets=LATENCY_BUCKETS,
    ),
    HOST_SWITCHES_TOTAL: MetricDefinition(
        HOST_SWITCHES_TOTAL,
        "counter",
        "Total switches of the current host",
        ("host",),
    ),
    HOST_FAILURE_RATE: MetricDefinition(
        HOST_FAILURE_RATE,
        "gauge",
        "Sliding-window probe failure rate",
        ("host",),
    ),
    AVAILABLE_HOSTS: MetricDefinition(
        AVAILABLE_HOSTS,
        "gauge",
        "Hosts below the failure-rate threshold",
        (),
    ),
    TICK_ERRORS_TOTAL: MetricDefinition(
        TICK_ERRORS_TOTAL,
        "counter",
        "Unexpected errors in the availability loop",
        (),
    ),
    # === Requests ===
    REQUESTS_TOTAL: MetricDefinition(
        REQUESTS_TOTAL,
        "counter",
        "Total requests dispatched",
        ("req_type", "code", "message"),
    ),
    REQUEST_LATENCY_SECONDS: MetricDefinition(
        REQUEST_LATENCY_SECONDS,
        "histogram",
        "Latency of dispatched requests",
        ("req_type",),
        buckets=LATENCY_BUCKETS,
    ),
    REQUEST_RETRIES_TOTAL: MetricDefinition(
        REQUEST_RETRIES_TOTAL,
        "counter",
        "Total request retries",
        ("req_type",),
    ),
}


class UnifiedMetricsCollector:
    """
    Unified metrics collector supporting both dict-based and Prometheus metrics.

    Thread Safety:
        All operations use RLock for thread-safe access. The lock is reentrant
        to allow nested calls from callbacks.

    Cardinality Protection:
        To prevent unbounded memory growth, a maximum of MAX_LABEL_COMBINATIONS
        unique label combinations are tracked per metric.

    Example:
        >>> collector = UnifiedMetricsCollector()
        >>> collector.observe_histogram('byteplus_rec_probe_latency_seconds',
        ...                             0.012, labels={'host': 'a.example.com'})
        >>> metrics = collector.get_metrics()
    """

    MAX_LABEL_COMBINATIONS: ClassVar[int] = 1000

    # Observations kept per label key for dict-based histogram summaries
    MAX_HISTOGRAM_OBSERVATIONS: ClassVar[int] = 10000

    def __init__(
        self,
        enable_prometheus: bool = True,
        registry: Any | None = None,
    ) -> None:
        """
        Initialize the metrics collector.

        Args:
            enable_prometheus: Whether to enable Prometheus metrics (if available)
            registry: Optional Prometheus CollectorRegistry. Defaults to a
                registry owned by this collector, so several clients can
                live in one process without duplicate metric names.
        """
        self._enable_prometheus = enable_prometheus and PROMETHEUS_AVAILABLE
        if registry is None and CollectorRegistry is not None:
            registry = CollectorRegistry()
        self._registry = registry

        # Dict-based metrics (always available)
        self._counters: dict[str, dict[str, int]] = defaultdict(
            lambda: defaultdict(int)
        )
        self._gauges: dict[str, dict[str, float]] = defaultdict(
            lambda: defaultdict(float)
        )
        self._histograms: dict[str, dict[str, list[float]]] = defaultdict(
            lambda: defaultdict(list)
        )

        self._lock = threading.RLock()

        # Prometheus metric instances (lazy initialized)
        self._prom_metrics: dict[str, Any] = {}

        self._label_combinations: dict[str, set[str]] = defaultdict(set)

        self._server_running = False

        logger.debug(
            f"UnifiedMetricsCollector initialized "
            f"(prometheus={'enabled' if self._enable_prometheus else 'disabled'})"
        )

    def _labels_to_key(self, labels: dict[str, str] | None) -> str:
        """Convert labels dict to a stable string key."""
        if not labels:
            return ""
        return ",".join(f"{k}={v}" for k, v in sorted(labels.items()))

    def _check_cardinality(self, name: str, label_key: str) -> bool:
        """
        Check if adding this label combination would exceed cardinality limit.

        Returns:
            True if the label combination is allowed, False otherwise
        """
        if label_key in self._label_combinations[name]:
            return True
        if len(self._label_combinations[name]) >= self.MAX_LABEL_COMBINATIONS:
            logger.warning(
                f"Cardinality limit ({self.MAX_LABEL_COMBINATIONS}) reached "
                f"for metric {name}. Dropping label combination: {label_key}"
            )
            return False
        self._label_combinations[name].add(label_key)
        return True

    def _get_or_create_prom_metric(self, name: str, metric_type: str) -> Any | None:
        """Get or create a Prometheus metric of the given type."""
        factory = {"counter": Counter, "gauge": Gauge, "histogram": Histogram}[
            metric_type
        ]
        if not self._enable_prometheus or factory is None:
            return None

        if name not in self._prom_metrics:
            defn = METRIC_DEFINITIONS.get(name)
            if defn is None or defn.metric_type != metric_type:
                defn = MetricDefinition(
                    name, metric_type, f"Dynamic {metric_type}: {name}"
                )
            kwargs: dict[str, Any] = {"registry": self._registry}
            if metric_type == "histogram":
                kwargs["buckets"] = defn.buckets or LATENCY_BUCKETS
            try:
                self._prom_metrics[name] = factory(
                    name, defn.description, list(defn.label_names), **kwargs
                )
            except Exception as e:
                logger.warning(f"Failed to create Prometheus {metric_type} {name}: {e}")
                # Cached so the warning is logged once per metric
                self._prom_metrics[name] = None

        return self._prom_metrics.get(name)

    def _record(
        self,
        name: str,
        metric_type: str,
        method: str,
        value: float,
        labels: dict[str, str] | None,
    ) -> None:
        """Mirror one update into Prometheus, never raising."""
        prom_metric = self._get_or_create_prom_metric(name, metric_type)
        if prom_metric is None:
            return
        try:
            target = prom_metric.labels(**labels) if labels else prom_metric
            getattr(target, method)(value)
        except Exception as e:
            logger.debug(f"Prometheus {metric_type} update failed for {name}: {e}")

    # === Counter Operations ===

    def inc_counter(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None:
        """
        Increment a counter metric.

        Args:
            name: Metric name (should follow Prometheus naming convention)
            value: Value to increment by (must be positive)
            labels: Optional labels dict

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError("Counter increment must be non-negative")

        label_key = self._labels_to_key(labels)

        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._counters[name][label_key] += value

        self._record(name, "counter", "inc", value, labels)

    # === Gauge Operations ===

    def set_gauge(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to a specific value."""
        label_key = self._labels_to_key(labels)

        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._gauges[name][label_key] = value

        self._record(name, "gauge", "set", value, labels)

    # === Histogram Operations ===

    def observe_histogram(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Record an observation in a histogram."""
        label_key = self._labels_to_key(labels)

        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            observations = self._histograms[name][label_key]
            observations.append(value)
            if len(observations) > self.MAX_HISTOGRAM_OBSERVATIONS:
                self._histograms[name][label_key] = observations[
                    -(self.MAX_HISTOGRAM_OBSERVATIONS // 2) :
                ]

        self._record(name, "histogram", "observe", value, labels)

    # === Snapshot Operations ===

    def get_metrics(self) -> dict[str, Any]:
        """
        Get a snapshot of all metrics.

        Returns a dict suitable for JSON serialization with structure:
        {
            "counters": {"metric_name": {"label_key": value, ...}, ...},
            "gauges": {"metric_name": {"label_key": value, ...}, ...},
            "histograms": {"metric_name": {"label_key": {...}, ...}, ...}
        }
        """
        with self._lock:
            counters = {
                name: dict(label_values)
                for name, label_values in self._counters.items()
            }
            gauges = {
                name: dict(label_values) for name, label_values in self._gauges.items()
            }

            histograms: dict[str, dict[str, dict[str, Any]]] = {}
            for name, label_values in self._histograms.items():
                histograms[name] = {}
                for label_key, observations in label_values.items():
                    if observations:
                        histograms[name][label_key] = {
                            "count": len(observations),
                            "sum": sum(observations),
                            "avg": sum(observations) / len(observations),
                            "min": min(observations),
                            "max": max(observations),
                        }

        return {
            "counters": counters,
            "gauges": gauges,
            "histograms": histograms,
        }

    def get_flat_metrics(self) -> dict[str, Any]:
        """
        Get counters and gauges in a flat dict.

        Returns:
            Dict with metric names as keys and values as int/float.
            For labeled metrics, uses format "metric_name{label=value,...}".
        """
        result: dict[str, Any] = {}

        with self._lock:
            for source in (self._counters, self._gauges):
                for name, label_values in source.items():
                    for label_key, value in label_values.items():
                        if label_key:
                            result[f"{name}{{{label_key}}}"] = value
                        else:
                            result[name] = value

        return result

    # === Lifecycle ===

    def reset(self) -> None:
        """Reset all metrics to zero."""
        with self._lock:
            self._counters.clear()
            self._gauges.clear()
            self._histograms.clear()
            self._label_combinations.clear()

        logger.debug("Metrics collector reset")

    # === Prometheus HTTP Server ===

    def start_http_server(self, host: str = "127.0.0.1", port: int = 9090) -> bool:
        """
        Start the Prometheus HTTP server for metrics scraping.

        Args:
            host: Host to bind to (default: 127.0.0.1 for localhost only).
            port: Port to bind to

        Returns:
            True if server started successfully, False otherwise
        """
        if not PROMETHEUS_AVAILABLE or start_http_server is None:
            logger.warning(
                "Cannot start Prometheus server: prometheus_client not installed"
            )
            return False

        if self._server_running:
            logger.warning("Prometheus server already running")
            return True

        try:
            # start_http_server runs in a daemon thread
            if self._registry is not None:
                start_http_server(port, addr=host, registry=self._registry)
            else:
                start_http_server(port, addr=host)
            self._server_running = True
            logger.info(f"Prometheus metrics server started on {host}:{port}")
            return True
        except Exception as e:
            logger.error(f"Failed to start Prometheus server: {e}")
            return False

    @property
    def prometheus_enabled(self) -> bool:
        """Check if Prometheus metrics are enabled."""
        return self._enable_prometheus

    @property
    def server_running(self) -> bool:
        """Check if the Prometheus HTTP server is running."""
        return self._server_running


__all__ = [
    "METRIC_DEFINITIONS",
    "PROMETHEUS_AVAILABLE",
    "MetricDefinition",
    "UnifiedMetricsCollector",
]
