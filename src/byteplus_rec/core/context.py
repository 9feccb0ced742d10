# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Resolved client context shared by the dispatcher and the availability tracker.
"""

from __future__ import annotations

import logging

import httpx

from ..config import ClientConfig

logger = logging.getLogger(__name__)


class Context:
    """
    Validated, resolved view of a ClientConfig plus the shared HTTP client.

    The host list is fixed at construction. The HTTP client used for
    application requests may be replaced by the availability tracker when
    a virtual-host header is configured; readers always pick up the latest
    published client through ``http_client``.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the context.

        Args:
            config: Client configuration (already validated on creation)
            transport: Optional httpx transport, mainly for testing
        """
        self.config = config
        self._hosts: tuple[str, ...] = tuple(config.resolved_hosts())
        self._transport = transport
        self._retired_clients: list[httpx.AsyncClient] = []
        self._http_client = self._new_http_client(self._hosts[0])

    # ==========================================================================
    # Resolved Configuration
    # ==========================================================================

    @property
    def tenant(self) -> str:
        return self.config.tenant

    @property
    def tenant_id(self) -> str:
        return self.config.tenant_id

    @property
    def token(self) -> str:
        return self.config.token

    @property
    def schema(self) -> str:
        return self.config.schema

    @property
    def hosts(self) -> tuple[str, ...]:
        """Configured hosts in preference order. Never empty."""
        return self._hosts

    @property
    def host_header(self) -> str | None:
        return self.config.host_header

    @property
    def custom_headers(self) -> dict[str, str]:
        return dict(self.config.headers)

    @property
    def transport(self) -> httpx.AsyncBaseTransport | None:
        """Transport shared by every HTTP client the library creates."""
        return self._transport

    # ==========================================================================
    # HTTP Client
    # ==========================================================================

    @property
    def http_client(self) -> httpx.AsyncClient:
        """The HTTP client currently used for application requests."""
        return self._http_client

    def _new_http_client(self, host: str) -> httpx.AsyncClient:
        headers = {}
        if self.host_header:
            headers["Host"] = self.host_header
        return httpx.AsyncClient(
            base_url=f"{self.schema}://{host}",
            headers=headers,
            timeout=self.config.request_timeout,
            transport=self._transport,
        )

    def rebind_http_client(self, host: str) -> None:
        """
        Publish a new HTTP client dedicated to ``host``.

        The previous client is retired rather than closed, since requests
        may still be in flight on it. Retired clients are closed by aclose().
        """
        previous = self._http_client
        self._http_client = self._new_http_client(host)
        self._retired_clients.append(previous)
        logger.debug(f"Rebound HTTP client to host '{host}'")

    async def aclose(self) -> None:
        """Close the current and all retired HTTP clients."""
        clients = [*self._retired_clients, self._http_client]
        self._retired_clients.clear()
        for client in clients:
            if not client.is_closed:
                await client.aclose()


__all__ = ["Context"]
