# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Host availability tracking for multi-host clients.

This module provides HostAvailabilityTracker, which probes every configured
host once per tick, keeps a sliding window of outcomes per host, ranks the
hosts by failure rate and switches the client's current host when the best
candidate changes.

Request issuance never waits on the tracker: the current host and the URLs
derived from it are published by plain attribute assignment, so readers
see at worst the previous host for up to one tick.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from ..config import AvailabilityConfig
from ..exceptions import ConfigurationError
from ..observability.constants import (
    AVAILABLE_HOSTS,
    HOST_FAILURE_RATE,
    HOST_SWITCHES_TOTAL,
    TICK_ERRORS_TOTAL,
)
from ..observability.protocols import MetricsCollectorProtocol
from ..protocols.url_refresher import URLRefresher
from .context import Context
from .prober import Prober, ProbeResult
from .window import SlidingWindow

logger = logging.getLogger(__name__)


class TrackerState(Enum):
    """Lifecycle of the tracker's tick loop. STOPPED is terminal."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class HostAvailabilityTracker:
    """
    Probes hosts periodically and keeps the best one published.

    Responsibilities:
    - One SlidingWindow per configured host, created once
    - Periodic tick: probe every host, recompute available hosts, switch
    - Push host switches into the URL refresher (and rebind the HTTP
      client when a virtual-host header is configured)

    Lifecycle:
        The loop starts on construction when an event loop is running,
        otherwise on start() or ensure_started(). shutdown() is a one-shot
        signal observed at the next tick; it never cancels a probe already
        in flight and never waits for the loop to exit.

    Example:
        >>> tracker = HostAvailabilityTracker(context, url_holder)
        >>> tracker.get_host()
        'rec-b.volcengineapi.com'
        >>> tracker.shutdown()
    """

    def __init__(
        self,
        context: Context,
        url_refresher: URLRefresher,
        config: AvailabilityConfig | None = None,
        metrics_collector: MetricsCollectorProtocol | None = None,
        prober: Prober | None = None,
    ):
        """
        Initialize the tracker.

        Args:
            context: Client context with at least two hosts
            url_refresher: Component whose URLs follow the current host
            config: Probing configuration (defaults to the context's)
            metrics_collector: Optional collector for tracker telemetry
            prober: Optional prober, built from the context when omitted

        Raises:
            ConfigurationError: If fewer than two hosts are configured
        """
        if len(context.hosts) < 2:
            raise ConfigurationError(
                "host availability tracking needs at least two hosts"
            )
        self._context = context
        self._url_refresher = url_refresher
        self._config = config or context.config.availability
        self._metrics_collector = metrics_collector
        self._prober = prober or Prober(context, self._config, metrics_collector)

        self._hosts = context.hosts
        self._windows: dict[str, SlidingWindow] = {
            host: SlidingWindow(self._config.window_size) for host in self._hosts
        }

        # Published state, replaced wholesale by the tick loop only
        self._current_host: str = self._hosts[0]
        self._available_hosts: tuple[str, ...] = self._hosts

        self._abort = False
        self._state = TrackerState.IDLE
        self._task: asyncio.Task[None] | None = None

        if not self.ensure_started():
            logger.debug("No running event loop, host probing starts on first use")

    # ==========================================================================
    # Published State
    # ==========================================================================

    def get_host(self) -> str:
        """Return the current host at the instant of the call."""
        return self._current_host

    @property
    def current_host(self) -> str:
        """The host requests are currently sent to."""
        return self._current_host

    @property
    def available_hosts(self) -> tuple[str, ...]:
        """Hosts below the failure-rate threshold, best first."""
        return self._available_hosts

    @property
    def windows(self) -> Mapping[str, SlidingWindow]:
        """Read-only view of the per-host windows."""
        return MappingProxyType(self._windows)

    @property
    def state(self) -> TrackerState:
        """Current lifecycle state of the tick loop."""
        return self._state

    def is_running(self) -> bool:
        """Check if the tick loop is running."""
        return self._state is TrackerState.RUNNING

    def snapshot(self) -> dict[str, float]:
        """Return the failure rate of every host, in configured order."""
        return {host: self._windows[host].failure_rate() for host in self._hosts}

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    def start(self) -> None:
        """
        Start the background tick loop.

        Idempotent. Must be called with a running event loop. Does nothing
        once the tracker has been shut down.
        """
        if self._abort:
            return
        if self._task is not None and not self._task.done():
            return
        self._state = TrackerState.RUNNING
        self._task = asyncio.create_task(
            self._schedule_loop(), name="host_availability"
        )
        logger.info(
            f"Host availability tracking started for {len(self._hosts)} hosts"
        )

    def ensure_started(self) -> bool:
        """
        Start the tick loop if it is idle and an event loop is running.

        Safe to call from synchronous code and on every request.

        Returns:
            True if the loop is running after the call
        """
        if self._state is TrackerState.IDLE:
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                return False
            self.start()
        return self.is_running()

    def shutdown(self) -> None:
        """
        Signal the tick loop to stop.

        The flag is read before every tick. A probe already in flight is
        allowed to finish, bounded by the probe timeout.
        """
        if self._abort:
            return
        self._abort = True
        if self._task is None:
            self._state = TrackerState.STOPPED
        logger.info("Host availability tracking shutdown requested")

    async def wait_stopped(self, timeout: float | None = None) -> bool:
        """
        Wait for the tick loop to exit after shutdown().

        Args:
            timeout: Maximum seconds to wait, None to wait indefinitely

        Returns:
            True if the loop has exited, False on timeout
        """
        if self._task is None or self._task.done():
            return True
        done, _ = await asyncio.wait({self._task}, timeout=timeout)
        return bool(done)

    # ==========================================================================
    # Tick
    # ==========================================================================

    async def _schedule_loop(self) -> None:
        """Run ticks at fixed interval boundaries until shutdown."""
        loop = asyncio.get_running_loop()
        interval = self._config.probe_interval
        next_tick = loop.time()
        try:
            while not self._abort:
                try:
                    await self.tick()
                except asyncio.CancelledError:
                    raise
                except Exception:
                    logger.exception("Host availability tick failed")
                    if self._metrics_collector is not None:
                        self._metrics_collector.inc_counter(TICK_ERRORS_TOTAL)

                # Ticker semantics: overrun ticks are dropped, not queued
                next_tick += interval
                now = loop.time()
                if next_tick <= now:
                    missed = int((now - next_tick) // interval) + 1
                    next_tick += missed * interval
                await asyncio.sleep(next_tick - now)
        finally:
            self._state = TrackerState.STOPPED
            await self._prober.aclose()
            logger.info("Host availability tracking stopped")

    async def tick(self) -> None:
        """Probe all hosts, recompute availability and switch if needed."""
        await self.check_hosts()
        self.switch_host()

    async def check_hosts(self) -> tuple[str, ...]:
        """
        Probe every configured host and recompute the available hosts.

        Probes run concurrently; the recompute happens once all of them
        have completed. A probe that raises counts as a failure.

        Returns:
            The new available hosts, best first
        """
        results = await asyncio.gather(
            *(self._prober.probe(host) for host in self._hosts),
            return_exceptions=True,
        )
        for host, result in zip(self._hosts, results):
            if isinstance(result, ProbeResult):
                success = result.success
            else:
                if isinstance(result, asyncio.CancelledError):
                    raise result
                logger.warning(f"Probe of host '{host}' raised: {result!r}")
                success = False
            self._windows[host].put(success)
        return self.recompute()

    def recompute(self) -> tuple[str, ...]:
        """
        Rebuild available hosts from the current window state.

        Hosts below the threshold are kept in configured order, then stably
        sorted by failure rate, so equal rates keep their configured order.
        """
        threshold = self._config.failure_rate_threshold
        rates = self.snapshot()
        available = [host for host in self._hosts if rates[host] < threshold]
        available.sort(key=rates.__getitem__)
        self._available_hosts = tuple(available)
        self._report_rates(rates)
        return self._available_hosts

    def preferred_host(self) -> str:
        """Best available host, or the first configured host when none is."""
        available = self._available_hosts
        if not available:
            return self._hosts[0]
        return available[0]

    def switch_host(self) -> bool:
        """
        Switch to the preferred host if it differs from the current one.

        URLs are refreshed before the new host is published, so a reader
        that sees the new host also sees the new URLs.

        Returns:
            True if the current host changed
        """
        new_host = self.preferred_host()
        old_host = self._current_host
        if new_host == old_host:
            return False
        logger.warning(f"switch host to '{new_host}', origin is '{old_host}'")
        self._url_refresher.refresh(new_host)
        if self._context.host_header:
            self._context.rebind_http_client(new_host)
        self._current_host = new_host
        if self._metrics_collector is not None:
            self._metrics_collector.inc_counter(
                HOST_SWITCHES_TOTAL, labels={"host": new_host}
            )
        return True

    def _report_rates(self, rates: dict[str, float]) -> None:
        if self._metrics_collector is None:
            return
        for host, rate in rates.items():
            self._metrics_collector.set_gauge(
                HOST_FAILURE_RATE, rate, labels={"host": host}
            )
        self._metrics_collector.set_gauge(
            AVAILABLE_HOSTS, float(len(self._available_hosts))
        )


__all__ = ["HostAvailabilityTracker", "TrackerState"]
