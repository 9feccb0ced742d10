# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for components holding host-embedded URLs."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class URLRefresher(Protocol):
    """
    Anything that owns absolute URLs built from the current host.

    The availability tracker calls ``refresh`` from its tick loop whenever
    the current host changes. Implementations must regenerate every URL
    they own and publish them in one assignment, so that concurrent readers
    see either the old set or the new set, never a mix.
    """

    def refresh(self, host: str) -> None:
        """Regenerate and republish every URL for ``host``."""
        ...
