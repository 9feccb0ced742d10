# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for pluggable collaborators.

Available protocols:
- URLRefresher: Interface for components holding host-embedded URLs
- ProtoMessage: Interface for protobuf-style request/response messages
"""

from .message import ProtoMessage
from .url_refresher import URLRefresher

__all__ = [
    "ProtoMessage",
    "URLRefresher",
]
