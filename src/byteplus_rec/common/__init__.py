# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Operation endpoints shared by every product line."""

from .client import CommonClient
from .urls import CommonURL

__all__ = ["CommonClient", "CommonURL"]
