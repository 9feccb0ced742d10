# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Health-check prober for candidate hosts.

A probe is a short GET against the ping endpoint of one host. Probe
failures are expected steady-state events: they are logged and counted,
never raised.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

import httpx

from ..config import AvailabilityConfig
from ..observability.constants import PROBE_LATENCY_SECONDS, PROBES_TOTAL
from ..observability.protocols import MetricsCollectorProtocol
from .context import Context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeResult:
    """
    Outcome of a single probe.

    Attributes:
        host: The probed host
        success: True when the host answered 200 within the probe timeout
        latency: Wall time of the probe in seconds
        status_code: HTTP status, or None when no response was received
        error: Description of the transport error, if any
    """

    host: str
    success: bool
    latency: float
    status_code: int | None = None
    error: str | None = None


class Prober:
    """
    Sends health-check probes, one dedicated HTTP client per host.

    The prober does not touch any tracker state; the tracker feeds the
    returned results into its windows.
    """

    def __init__(
        self,
        context: Context,
        config: AvailabilityConfig,
        metrics_collector: MetricsCollectorProtocol | None = None,
    ):
        """
        Initialize the prober.

        Args:
            context: Client context providing schema, hosts and headers
            config: Probing configuration (path and timeout)
            metrics_collector: Optional collector for probe telemetry
        """
        self._context = context
        self._config = config
        self._metrics_collector = metrics_collector
        self._headers = context.custom_headers
        if context.host_header:
            self._headers["Host"] = context.host_header
        # Populated once, never mutated afterwards
        self._clients: dict[str, httpx.AsyncClient] = {
            host: httpx.AsyncClient(
                timeout=config.probe_timeout,
                transport=context.transport,
            )
            for host in context.hosts
        }

    def ping_url(self, host: str) -> str:
        """Return the health-check URL for ``host``."""
        return f"{self._context.schema}://{host}{self._config.ping_path}"

    async def probe(self, host: str) -> ProbeResult:
        """
        Probe ``host`` once.

        Returns:
            ProbeResult with success = no transport error and status 200.
        """
        url = self.ping_url(host)
        client = self._clients[host]
        start = time.monotonic()
        status_code: int | None = None
        error: str | None = None
        try:
            response = await asyncio.wait_for(
                client.get(url, headers=self._headers),
                timeout=self._config.probe_timeout,
            )
            status_code = response.status_code
        except (asyncio.TimeoutError, httpx.TimeoutException):
            error = "timeout"
        except Exception as e:
            # Any other error is a failed probe
            error = f"{type(e).__name__}: {e}"
        latency = time.monotonic() - start

        success = error is None and status_code == httpx.codes.OK
        if success:
            logger.debug(f"ping success host:'{host}' cost:'{latency * 1000:.1f}ms'")
        else:
            logger.warning(
                f"ping fail, host:{host} cost:{latency * 1000:.1f}ms "
                f"status:{status_code} err:{error}"
            )
        self._report(host, success, latency)
        return ProbeResult(
            host=host,
            success=success,
            latency=latency,
            status_code=status_code,
            error=error,
        )

    def _report(self, host: str, success: bool, latency: float) -> None:
        if self._metrics_collector is None:
            return
        outcome = "success" if success else "failure"
        self._metrics_collector.inc_counter(
            PROBES_TOTAL, labels={"host": host, "outcome": outcome}
        )
        self._metrics_collector.observe_histogram(
            PROBE_LATENCY_SECONDS, latency, labels={"host": host}
        )

    async def aclose(self) -> None:
        """Close every per-host HTTP client."""
        for client in self._clients.values():
            if not client.is_closed:
                await client.aclose()


__all__ = ["ProbeResult", "Prober"]
