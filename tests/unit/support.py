"""Test doubles and helpers shared across the unit test suite."""

from __future__ import annotations

import gzip
import json

import httpx


class FakeMessage:
    """Stands in for a generated protobuf message."""

    def __init__(self, payload: bytes = b"", **fields):
        self.payload = payload
        for name, value in fields.items():
            setattr(self, name, value)

    def SerializeToString(self) -> bytes:  # noqa: N802
        return self.payload

    def ParseFromString(self, data: bytes) -> int:  # noqa: N802
        self.payload = data
        return len(data)


class BrokenMessage(FakeMessage):
    """A response message that rejects every payload."""

    def ParseFromString(self, data: bytes) -> int:  # noqa: N802
        raise ValueError("Error parsing message")


class RecordingRefresher:
    """URL refresher that records every host it is pointed at."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def refresh(self, host: str) -> None:
        self.calls.append(host)


class RecordingHandler:
    """
    Mock transport handler recording every request.

    Answers with the given responses in order, repeating the last one.
    """

    def __init__(self, *responses: httpx.Response | Exception):
        self.responses = list(responses) or [httpx.Response(200)]
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def decoded_body(request: httpx.Request) -> bytes:
    """Return the uncompressed body of a captured request."""
    return gzip.decompress(request.content)


def decoded_json(request: httpx.Request):
    return json.loads(decoded_body(request))
