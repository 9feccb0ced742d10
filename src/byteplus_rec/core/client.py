# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Shared base for product-line clients.

BaseClient wires together the pieces every product line needs: the
resolved context, a metrics collector, the request dispatcher, the
product line's URL holder and, for multi-host configurations, the host
availability tracker that keeps that URL holder pointed at a live host.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import reduce
from typing import Any

import httpx
from typing_extensions import Self

from ..config import ClientConfig
from ..exceptions import TooManyItemsError
from ..observability.collector import UnifiedMetricsCollector
from ..observability.protocols import MetricsCollectorProtocol
from ..protocols.url_refresher import URLRefresher
from .availability import HostAvailabilityTracker
from .context import Context
from .dispatcher import RequestDispatcher

logger = logging.getLogger(__name__)

MAX_WRITE_ITEM_COUNT = 100
MAX_IMPORT_ITEM_COUNT = 10000


def count_items(request: Any, path: str) -> int:
    """Count the items found at a dotted attribute ``path`` of ``request``."""
    return len(reduce(getattr, path.split("."), request))


def check_item_count(count: int, limit: int) -> None:
    """Raise TooManyItemsError when ``count`` exceeds ``limit``."""
    if count > limit:
        raise TooManyItemsError(limit=limit, count=count)


class BaseClient(ABC):
    """
    An abstract base class for product-line clients.

    Subclasses provide their URL holder through ``_build_urls`` and
    implement their operations on top of ``self.dispatcher`` and
    ``self.urls``.

    With a single configured host no tracker is created and the host never
    changes. With several hosts the tracker starts immediately if an event
    loop is running, otherwise on ``start()``, ``async with``, the first
    request or the first ``get_host()`` call made inside an event loop.

    Example:
        async with RetailClient(config) as client:
            response = await client.predict(request, PredictResponse(), "home")
    """

    def __init__(
        self,
        config: ClientConfig,
        metrics_collector: MetricsCollectorProtocol | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Validated client configuration
            metrics_collector: Optional collector. When omitted and metrics
                are enabled, the client creates its own.
            transport: Optional httpx transport, mainly for testing

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = config
        self.context = Context(config, transport=transport)
        self.metrics_collector = self._setup_metrics(metrics_collector)
        self.urls = self._build_urls(self.context.hosts[0])

        self._tracker: HostAvailabilityTracker | None = None
        if len(self.context.hosts) > 1:
            self._tracker = HostAvailabilityTracker(
                self.context,
                self.urls,
                config=config.availability,
                metrics_collector=self.metrics_collector,
            )

        self.dispatcher = RequestDispatcher(
            self.context,
            self.metrics_collector,
            before_request=self._ensure_tracking,
        )

        logger.info(
            f"Initialized {self.__class__.__name__} for tenant '{config.tenant}' "
            f"with hosts {list(self.context.hosts)}"
        )

    def _setup_metrics(
        self, metrics_collector: MetricsCollectorProtocol | None
    ) -> MetricsCollectorProtocol | None:
        """Use the given collector, or create one if metrics are enabled."""
        if metrics_collector is not None:
            return metrics_collector
        if not self.config.metrics_enabled:
            return None
        return UnifiedMetricsCollector(
            enable_prometheus=self.config.prometheus_enabled
        )

    @abstractmethod
    def _build_urls(self, host: str) -> URLRefresher:
        """Create the URL holder, initially pointed at ``host``."""
        ...

    # ==========================================================================
    # Host Availability
    # ==========================================================================

    @property
    def tracker(self) -> HostAvailabilityTracker | None:
        """The availability tracker, None for single-host clients."""
        return self._tracker

    def get_host(self) -> str:
        """Return the host requests are currently sent to."""
        if self._tracker is None:
            return self.context.hosts[0]
        self._tracker.ensure_started()
        return self._tracker.get_host()

    def _ensure_tracking(self) -> None:
        if self._tracker is not None:
            self._tracker.ensure_started()

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    async def start(self) -> None:
        """Start host probing if it is not already running."""
        if self._tracker is not None:
            self._tracker.start()

    def release(self) -> None:
        """
        Stop host probing.

        One-shot and non-blocking: the tracker exits at its next tick.
        """
        if self._tracker is not None:
            self._tracker.shutdown()

    async def aclose(self) -> None:
        """Stop probing, wait briefly for the loop to exit, close HTTP clients."""
        self.release()
        if self._tracker is not None:
            availability = self.config.availability
            stopped = await self._tracker.wait_stopped(
                timeout=availability.probe_interval + availability.probe_timeout
            )
            if not stopped:
                logger.warning("Host availability loop did not stop in time")
        await self.context.aclose()

    async def __aenter__(self) -> Self:
        """
        Async context manager entry.

        Starts host probing and returns self for use in async with blocks.
        """
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit. Always closes the client."""
        await self.aclose()


__all__ = [
    "MAX_IMPORT_ITEM_COUNT",
    "MAX_WRITE_ITEM_COUNT",
    "BaseClient",
    "check_item_count",
    "count_items",
]
