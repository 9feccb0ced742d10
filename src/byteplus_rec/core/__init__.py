# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Core request and host-availability machinery shared by all product lines.

This package provides:
- SlidingWindow: Rolling probe-outcome history with O(1) failure rate
- Prober: Health-check probes against one host at a time
- HostAvailabilityTracker: Periodic probing, ranking and host switching
- RequestDispatcher: Signed, compressed request-response exchanges
- BaseClient: Lifecycle shared by every product-line client
"""

from .availability import HostAvailabilityTracker, TrackerState
from .client import (
    MAX_IMPORT_ITEM_COUNT,
    MAX_WRITE_ITEM_COUNT,
    BaseClient,
)
from .context import Context
from .dispatcher import RequestDispatcher
from .options import RequestOptions
from .prober import ProbeResult, Prober
from .window import SlidingWindow

__all__ = [
    "MAX_IMPORT_ITEM_COUNT",
    "MAX_WRITE_ITEM_COUNT",
    "BaseClient",
    "Context",
    "HostAvailabilityTracker",
    "ProbeResult",
    "Prober",
    "RequestDispatcher",
    "RequestOptions",
    "SlidingWindow",
    "TrackerState",
]
