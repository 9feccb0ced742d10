# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client for the retail product line.

Requests and responses are protobuf messages generated by the caller from
the retail protocol definitions; this client only routes and validates them.
"""

from __future__ import annotations

import logging

from ..common.client import CommonClient
from ..core.client import (
    MAX_IMPORT_ITEM_COUNT,
    MAX_WRITE_ITEM_COUNT,
    check_item_count,
    count_items,
)
from ..core.dispatcher import M
from ..core.options import RequestOptions
from ..protocols.message import ProtoMessage
from .urls import RetailURL

logger = logging.getLogger(__name__)

# Repeated field holding the items of each write request
WRITE_ITEMS_FIELD = {
    "user": "users",
    "product": "products",
    "user_event": "user_events",
}

# Path to the inline items of each import request
IMPORT_ITEMS_PATH = {
    "user": "input_config.users_inline_source.users",
    "product": "input_config.products_inline_source.products",
    "user_event": "input_config.user_events_inline_source.user_events",
}


class RetailClient(CommonClient):
    """
    Retail data upload, prediction and impression acknowledgement.

    Example:
        async with RetailClient(config) as client:
            await client.write_users(request, WriteUsersResponse())
    """

    urls: RetailURL

    def _build_urls(self, host: str) -> RetailURL:
        return RetailURL(self.context.schema, self.context.tenant, host)

    # ==========================================================================
    # Data Upload
    # ==========================================================================

    async def _write(
        self,
        topic: str,
        request: ProtoMessage,
        response: M,
        options: RequestOptions | None,
    ) -> M:
        count = count_items(request, WRITE_ITEMS_FIELD[topic])
        check_item_count(count, MAX_WRITE_ITEM_COUNT)
        await self.dispatcher.do_pb_request(
            self.urls.upload_url(topic, "write"), request, response, options
        )
        logger.debug(f"[Write {topic}] rsp:\n{response}")
        return response

    async def _import(
        self,
        topic: str,
        request: ProtoMessage,
        response: M,
        options: RequestOptions | None,
    ) -> M:
        count = count_items(request, IMPORT_ITEMS_PATH[topic])
        check_item_count(count, MAX_IMPORT_ITEM_COUNT)
        await self.dispatcher.do_pb_request(
            self.urls.upload_url(topic, "import"), request, response, options
        )
        logger.debug(f"[Import {topic}] rsp:\n{response}")
        return response

    async def write_users(
        self, request: ProtoMessage, response: M, options: RequestOptions | None = None
    ) -> M:
        """Upload up to 100 users in real time."""
        return await self._write("user", request, response, options)

    async def import_users(
        self, request: ProtoMessage, response: M, options: RequestOptions | None = None
    ) -> M:
        """Import up to 10000 users offline. Returns an operation."""
        return await self._import("user", request, response, options)

    async def write_products(
        self, request: ProtoMessage, response: M, options: RequestOptions | None = None
    ) -> M:
        """Upload up to 100 products in real time."""
        return await self._write("product", request, response, options)

    async def import_products(
        self, request: ProtoMessage, response: M, options: RequestOptions | None = None
    ) -> M:
        """Import up to 10000 products offline. Returns an operation."""
        return await self._import("product", request, response, options)

    async def write_user_events(
        self, request: ProtoMessage, response: M, options: RequestOptions | None = None
    ) -> M:
        """Upload up to 100 user events in real time."""
        return await self._write("user_event", request, response, options)

    async def import_user_events(
        self, request: ProtoMessage, response: M, options: RequestOptions | None = None
    ) -> M:
        """Import up to 10000 user events offline. Returns an operation."""
        return await self._import("user_event", request, response, options)

    # ==========================================================================
    # Prediction
    # ==========================================================================

    async def predict(
        self,
        request: ProtoMessage,
        response: M,
        scene: str,
        options: RequestOptions | None = None,
    ) -> M:
        """Fetch recommendations for ``scene``."""
        await self.dispatcher.do_pb_request(
            self.urls.predict_url(scene), request, response, options
        )
        logger.debug(f"[Predict] rsp:\n{response}")
        return response

    async def ack_server_impressions(
        self, request: ProtoMessage, response: M, options: RequestOptions | None = None
    ) -> M:
        """Report the items actually shown to the user."""
        await self.dispatcher.do_pb_request(
            self.urls.ack_impression_url, request, response, options
        )
        logger.debug(f"[AckServerImpressions] rsp:\n{response}")
        return response


__all__ = ["RetailClient"]
