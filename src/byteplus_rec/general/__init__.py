# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""General product line."""

from .client import GeneralClient
from .urls import GeneralURL

__all__ = ["GeneralClient", "GeneralURL"]
