# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request dispatcher: one signed, compressed request-response exchange.

The dispatcher never chooses a host. Callers pass the absolute URL they
read from their URL holder at call time, which is how host switches made by
the availability tracker reach in-flight call sites.
"""

from __future__ import annotations

import asyncio
import gzip
import json
import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from ..exceptions import (
    NetworkError,
    RequestTimeoutError,
    ResponseDecodeError,
    UnexpectedStatusError,
)
from ..observability.constants import REQUEST_RETRIES_TOTAL
from ..observability.protocols import MetricsCollectorProtocol
from ..protocols.message import ProtoMessage
from .auth import build_auth_headers
from .context import Context
from .options import RequestOptions
from .reporting import parse_req_type, report_request

logger = logging.getLogger(__name__)

CONTENT_TYPE_PROTOBUF = "application/x-protobuf"
CONTENT_TYPE_JSON = "application/json"
BACKOFF_JITTER_FACTOR = 0.1

M = TypeVar("M", bound=ProtoMessage)


def is_retryable(error: Exception) -> bool:
    """Network errors and 5xx answers are retried; other statuses are not."""
    if isinstance(error, UnexpectedStatusError):
        return error.status_code >= 500
    return isinstance(error, NetworkError)


class RequestDispatcher:
    """
    Builds, signs, sends and decodes requests.

    Every request body is gzip-compressed and signed over the compressed
    bytes. Responses are decompressed by httpx according to their
    Content-Encoding header.
    """

    def __init__(
        self,
        context: Context,
        metrics_collector: MetricsCollectorProtocol | None = None,
        backoff_base: float = 0.1,
        max_backoff: float = 2.0,
        before_request: Callable[[], None] | None = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            context: Client context providing credentials and the HTTP client
            metrics_collector: Optional collector for request telemetry
            backoff_base: First retry delay in seconds, doubled per attempt
            max_backoff: Cap on the retry delay in seconds
            before_request: Optional hook called before every request, used
                by clients to start host probing on first use
        """
        self._context = context
        self._metrics_collector = metrics_collector
        self._backoff_base = backoff_base
        self._max_backoff = max_backoff
        self._before_request = before_request

    # ==========================================================================
    # Public Interface
    # ==========================================================================

    async def do_pb_request(
        self,
        url: str,
        request: ProtoMessage,
        response: M,
        options: RequestOptions | None = None,
    ) -> M:
        """
        Send a protobuf message and parse the answer into ``response``.

        Returns:
            The ``response`` message, filled in

        Raises:
            NetworkError: Transport failure or non-200 status
            ResponseDecodeError: The answer could not be parsed
        """
        body = request.SerializeToString()
        content = await self._do_request(url, body, CONTENT_TYPE_PROTOBUF, options)
        try:
            response.ParseFromString(content)
        except Exception as e:
            logger.error(f"unmarshal response fail, err:{e} url:{url}")
            raise ResponseDecodeError(f"Cannot parse response from {url}: {e}") from e
        return response

    async def do_json_request(
        self,
        url: str,
        payload: Any,
        options: RequestOptions | None = None,
    ) -> Any:
        """
        Send a JSON payload and return the decoded JSON answer.

        Raises:
            NetworkError: Transport failure or non-200 status
            ResponseDecodeError: The answer is not valid JSON
        """
        body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        content = await self._do_request(url, body, CONTENT_TYPE_JSON, options)
        try:
            return json.loads(content)
        except ValueError as e:
            logger.error(f"unmarshal response fail, err:{e} url:{url}")
            raise ResponseDecodeError(f"Cannot parse response from {url}: {e}") from e

    def calculate_backoff(self, attempt: int) -> float:
        """
        Calculate exponential backoff delay.

        Args:
            attempt: Zero-based retry attempt

        Returns:
            Delay in seconds, capped at max_backoff, with a little jitter
        """
        delay = min(self._backoff_base * (2**attempt), self._max_backoff)
        jitter = delay * BACKOFF_JITTER_FACTOR * (time.time() % 1)
        return delay + jitter

    # ==========================================================================
    # Exchange
    # ==========================================================================

    async def _do_request(
        self,
        url: str,
        body: bytes,
        content_type: str,
        options: RequestOptions | None,
    ) -> bytes:
        options = options or RequestOptions()
        if self._before_request is not None:
            self._before_request()
        compressed = gzip.compress(body)
        timeout = options.timeout or self._context.config.request_timeout

        attempt = 0
        while True:
            headers = self._build_headers(options, compressed, content_type)
            try:
                return await self._send(url, compressed, headers, timeout)
            except NetworkError as e:
                if attempt >= options.retry_times or not is_retryable(e):
                    raise
                delay = self.calculate_backoff(attempt)
                attempt += 1
                logger.info(
                    f"Retrying request {options.request_id} to {url} "
                    f"(attempt {attempt}/{options.retry_times}) in {delay:.2f}s: {e}"
                )
                if self._metrics_collector is not None:
                    self._metrics_collector.inc_counter(
                        REQUEST_RETRIES_TOTAL, labels={"req_type": parse_req_type(url)}
                    )
                await asyncio.sleep(delay)

    def _build_headers(
        self, options: RequestOptions, body: bytes, content_type: str
    ) -> dict[str, str]:
        headers = {
            "Content-Encoding": "gzip",
            "Accept-Encoding": "gzip",
            "Content-Type": content_type,
            "Accept": content_type,
            "Request-Id": options.request_id,
        }
        headers.update(
            build_auth_headers(self._context.token, self._context.tenant_id, body)
        )
        headers.update(self._context.custom_headers)
        headers.update(options.headers)
        return headers

    async def _send(
        self,
        url: str,
        body: bytes,
        headers: dict[str, str],
        timeout: float,
    ) -> bytes:
        client = self._context.http_client
        start = time.monotonic()
        try:
            response = await client.post(
                url, content=body, headers=headers, timeout=timeout
            )
        except httpx.TimeoutException as e:
            report_request(self._metrics_collector, url, time.monotonic() - start, 0, e)
            logger.error(f"do http request timeout, url:{url} msg:{e}")
            raise RequestTimeoutError(f"Request to {url} timed out", url=url) from e
        except httpx.DecodingError as e:
            report_request(self._metrics_collector, url, time.monotonic() - start, 0, e)
            logger.error(f"decompress response fail, url:{url} err:{e}")
            raise ResponseDecodeError(f"Cannot decode response from {url}: {e}") from e
        except httpx.RequestError as e:
            report_request(self._metrics_collector, url, time.monotonic() - start, 0, e)
            logger.error(f"do http request occur error, url:{url} msg:{e}")
            raise NetworkError(f"Request to {url} failed: {e}", url=url) from e

        latency = time.monotonic() - start
        logger.debug(f"http url:{url}, cost:{latency * 1000:.1f}ms")
        report_request(self._metrics_collector, url, latency, response.status_code)

        if response.status_code != httpx.codes.OK:
            self._log_http_response(url, response)
            raise UnexpectedStatusError(
                f"http status not 200, got {response.status_code}",
                status_code=response.status_code,
                url=url,
                body=response.content,
            )
        return response.content

    def _log_http_response(self, url: str, response: httpx.Response) -> None:
        if response.content:
            logger.error(
                f"http status not 200, url:{url} code:{response.status_code} "
                f"body:\n{response.text}"
            )
            return
        logger.error(f"http status not 200, url:{url} code:{response.status_code}")


__all__ = [
    "CONTENT_TYPE_JSON",
    "CONTENT_TYPE_PROTOBUF",
    "RequestDispatcher",
    "is_retryable",
]
