# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for protobuf-style request and response messages."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProtoMessage(Protocol):
    """
    Minimal protocol satisfied by generated protobuf messages.

    The library never imports message classes itself; callers pass their
    own generated request objects and empty response objects.
    """

    def SerializeToString(self) -> bytes:  # noqa: N802
        """Serialize the message to its wire format."""
        ...

    def ParseFromString(self, data: bytes) -> object:  # noqa: N802
        """Replace the message content with the parsed ``data``."""
        ...
