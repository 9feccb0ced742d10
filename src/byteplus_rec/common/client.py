# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Client for the operation endpoints shared by every product line."""

from __future__ import annotations

import logging

from ..core.client import BaseClient
from ..core.dispatcher import M
from ..core.options import RequestOptions
from ..protocols.message import ProtoMessage
from .urls import CommonURL

logger = logging.getLogger(__name__)


class CommonClient(BaseClient):
    """
    Queries long-running import operations.

    Product-line clients inherit these operations; their URL holders extend
    CommonURL so the operation URLs follow host switches too.
    """

    urls: CommonURL

    def _build_urls(self, host: str) -> CommonURL:
        return CommonURL(self.context.schema, self.context.tenant, host)

    async def get_operation(
        self,
        request: ProtoMessage,
        response: M,
        options: RequestOptions | None = None,
    ) -> M:
        """Fetch one operation by name into ``response``."""
        await self.dispatcher.do_pb_request(
            self.urls.get_operation_url, request, response, options
        )
        logger.debug(f"[GetOperation] rsp:\n{response}")
        return response

    async def list_operations(
        self,
        request: ProtoMessage,
        response: M,
        options: RequestOptions | None = None,
    ) -> M:
        """List operations matching ``request`` into ``response``."""
        await self.dispatcher.do_pb_request(
            self.urls.list_operations_url, request, response, options
        )
        logger.debug(f"[ListOperations] rsp:\n{response}")
        return response


__all__ = ["CommonClient"]
