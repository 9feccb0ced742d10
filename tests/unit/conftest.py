"""
Shared fixtures for the unit test suite.

Test doubles live in support.py so test modules can import them directly.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest
from support import RecordingRefresher

from byteplus_rec.config import AvailabilityConfig, ClientConfig

# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def make_config() -> Callable[..., ClientConfig]:
    """Factory for valid client configurations."""

    def _make(**overrides) -> ClientConfig:
        values = {
            "tenant": "demo",
            "tenant_id": "1001",
            "token": "secret-token",
            "hosts": ["h1.example.com"],
            "schema": "http",
        }
        values.update(overrides)
        return ClientConfig(**values)

    return _make


@pytest.fixture
def fast_availability() -> AvailabilityConfig:
    """Availability settings short enough for loop tests."""
    return AvailabilityConfig(probe_interval=0.01, probe_timeout=0.05, window_size=10)


@pytest.fixture
def refresher() -> RecordingRefresher:
    return RecordingRefresher()
