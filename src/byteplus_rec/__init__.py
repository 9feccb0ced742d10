# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""BytePlus Rec - Asynchronous client for the recommendation service.

This library signs, compresses and sends requests to the recommendation
service, and keeps every client pointed at a healthy host when several
are configured.

Key Features:
    - Tenant request signing and gzip-compressed bodies
    - Background health probing with sliding-window failure rates
    - Automatic host switching with atomic URL refresh
    - Optional retries with exponential backoff
    - Metrics collection with optional Prometheus export

Quick Start:
    >>> from byteplus_rec import ClientConfig, Region, RetailClient
    >>>
    >>> config = ClientConfig(
    ...     tenant="retail_demo",
    ...     tenant_id="123",
    ...     token="secret",
    ...     region=Region.CN,
    ... )
    >>> async with RetailClient(config) as client:
    ...     response = await client.predict(request, PredictResponse(), "home")

Main Exports:
    - RetailClient, GeneralClient, CommonClient: Product-line clients
    - ClientConfig, AvailabilityConfig, Region: Configuration options
    - RequestOptions: Per-request options
    - HostAvailabilityTracker, SlidingWindow: Host availability machinery

Note: Prometheus export requires the 'prometheus' extra. Install with:
    pip install byteplus-rec[prometheus]

Version: 1.0.0
"""

__version__ = "1.0.0"

from .common import CommonClient, CommonURL
from .config import REGION_HOSTS, AvailabilityConfig, ClientConfig, Region
from .core import (
    BaseClient,
    Context,
    HostAvailabilityTracker,
    ProbeResult,
    Prober,
    RequestDispatcher,
    RequestOptions,
    SlidingWindow,
    TrackerState,
)
from .exceptions import (
    ConfigurationError,
    NetworkError,
    RecClientError,
    RequestTimeoutError,
    ResponseDecodeError,
    TooManyItemsError,
    UnexpectedStatusError,
)
from .general import GeneralClient, GeneralURL
from .protocols import ProtoMessage, URLRefresher
from .retail import RetailClient, RetailURL

__all__ = [
    "REGION_HOSTS",
    "AvailabilityConfig",
    # Clients
    "BaseClient",
    "ClientConfig",
    "CommonClient",
    "CommonURL",
    # Exceptions
    "ConfigurationError",
    "Context",
    "GeneralClient",
    "GeneralURL",
    # Host availability
    "HostAvailabilityTracker",
    "NetworkError",
    "ProbeResult",
    "Prober",
    # Protocols
    "ProtoMessage",
    "RecClientError",
    "Region",
    "RequestDispatcher",
    "RequestOptions",
    "RequestTimeoutError",
    "ResponseDecodeError",
    "RetailClient",
    "RetailURL",
    "SlidingWindow",
    "TooManyItemsError",
    "TrackerState",
    "URLRefresher",
    "UnexpectedStatusError",
    "__version__",
]
