# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client Configuration for the Recommendation Client

This module provides configuration classes for building a client: the
tenant credentials and host list, and the host-availability probing knobs.
"""

from dataclasses import dataclass, field
from enum import Enum

from .exceptions import ConfigurationError


class Region(Enum):
    """Deployment region that selects the default host list.

    - UNKNOWN: No region. Only valid when hosts are configured explicitly.
    - CN: Mainland China, served from two hosts.
    - SG: Singapore.
    - US: US east.
    - AIR: The byteair product line.
    """

    UNKNOWN = "unknown"
    CN = "cn"
    SG = "sg"
    US = "us"
    AIR = "air"


REGION_HOSTS: dict[Region, tuple[str, ...]] = {
    Region.CN: ("rec-b.volcengineapi.com", "rec.volcengineapi.com"),
    Region.SG: ("rec-ap-singapore-1.byteplusapi.com",),
    Region.US: ("rec-us-east-1.byteplusapi.com",),
    Region.AIR: ("byteair-api-cn1.snssdk.com",),
}
"""Default hosts per region, in preference order."""

SUPPORTED_SCHEMAS = ("http", "https")


@dataclass
class AvailabilityConfig:
    """
    Configuration for host availability probing.

    Only used when a client is configured with more than one host.
    """

    ping_path: str = "/predict/api/ping"
    """Path of the health-check endpoint, appended to schema and host."""

    probe_timeout: float = 0.2
    """Timeout of a single probe in seconds. Kept far below request timeouts."""

    probe_interval: float = 1.0
    """Interval between probe ticks in seconds."""

    failure_rate_threshold: float = 0.1
    """Hosts with a failure rate at or above this are not considered available."""

    window_size: int = 60
    """Number of recent probe outcomes kept per host."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.ping_path.startswith("/"):
            raise ConfigurationError("ping_path must start with '/'")
        if self.probe_timeout <= 0:
            raise ConfigurationError("probe_timeout must be positive")
        if self.probe_interval <= 0:
            raise ConfigurationError("probe_interval must be positive")
        if not 0 < self.failure_rate_threshold <= 1.0:
            raise ConfigurationError(
                "failure_rate_threshold must be between 0 and 1.0"
            )
        if self.window_size < 1:
            raise ConfigurationError("window_size must be at least 1")


@dataclass
class ClientConfig:
    """
    Configuration for a recommendation client.

    Shared by every product line. Hosts are resolved from ``region`` when
    ``hosts`` is left empty.
    """

    # === Credentials ===

    tenant: str = ""
    """Tenant name embedded in URLs. Sometimes called "company"."""

    tenant_id: str = ""
    """Tenant identifier sent with every signed request."""

    token: str = ""
    """Secret used to sign requests."""

    # === Endpoints ===

    region: Region = Region.UNKNOWN
    """Region used to pick default hosts."""

    hosts: list[str] = field(default_factory=list)
    """Candidate hosts in preference order. Overrides the region defaults."""

    schema: str = "https"
    """URL schema, 'http' or 'https'."""

    host_header: str | None = None
    """Optional virtual-host override sent as the Host header."""

    headers: dict[str, str] = field(default_factory=dict)
    """Custom headers added to every request and probe."""

    # === Request Processing ===

    request_timeout: float = 5.0
    """Default request timeout in seconds."""

    # === Metrics and Monitoring ===

    metrics_enabled: bool = True
    """Enable metrics collection."""

    prometheus_enabled: bool = False
    """Mirror metrics into prometheus_client when it is installed."""

    # === Host Availability ===

    availability: AvailabilityConfig = field(default_factory=AvailabilityConfig)
    """Probing configuration, only used with more than one host."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.tenant:
            raise ConfigurationError("tenant is null")
        if not self.tenant_id:
            raise ConfigurationError("tenant id is null")
        if not self.token:
            raise ConfigurationError("token is null")
        if not self.hosts and self.region is Region.UNKNOWN:
            raise ConfigurationError("region is null")
        if any(not host for host in self.hosts):
            raise ConfigurationError("hosts must not contain empty entries")
        if self.schema not in SUPPORTED_SCHEMAS:
            raise ConfigurationError(
                f"schema must be one of {SUPPORTED_SCHEMAS}, got {self.schema!r}"
            )
        if self.request_timeout <= 0:
            raise ConfigurationError("request_timeout must be positive")

    def resolved_hosts(self) -> list[str]:
        """Return the explicit hosts, or the region defaults."""
        if self.hosts:
            return list(self.hosts)
        return list(REGION_HOSTS[self.region])


__all__ = [
    "REGION_HOSTS",
    "SUPPORTED_SCHEMAS",
    "AvailabilityConfig",
    "ClientConfig",
    "Region",
]
