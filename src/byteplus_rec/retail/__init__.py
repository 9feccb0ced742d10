# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Retail product line."""

from .client import RetailClient
from .urls import RetailURL

__all__ = ["RetailClient", "RetailURL"]
