# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client for the general product line.

Data upload uses JSON lists of free-form records keyed by topic, while
prediction and callback use caller-generated protobuf messages.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Sequence
from typing import Any

from ..common.client import CommonClient
from ..core.client import MAX_IMPORT_ITEM_COUNT, MAX_WRITE_ITEM_COUNT, check_item_count
from ..core.dispatcher import M
from ..core.options import RequestOptions
from ..protocols.message import ProtoMessage
from .urls import GeneralURL

logger = logging.getLogger(__name__)

DEFAULT_PREDICT_SCENE = "default"


def done_dates_payload(dates: Sequence[datetime.date]) -> dict[str, Any]:
    """Build the done request body; no dates means yesterday."""
    if not dates:
        dates = [datetime.date.today() - datetime.timedelta(days=1)]
    return {
        "data_dates": [
            {"year": date.year, "month": date.month, "day": date.day}
            for date in dates
        ]
    }


class GeneralClient(CommonClient):
    """
    General data upload, prediction and callback.

    Example:
        async with GeneralClient(config) as client:
            await client.write_data([{"user_id": "1"}], topic="user")
    """

    urls: GeneralURL

    def _build_urls(self, host: str) -> GeneralURL:
        return GeneralURL(self.context.schema, self.context.tenant, host)

    # ==========================================================================
    # Data Upload
    # ==========================================================================

    async def write_data(
        self,
        data_list: list[dict[str, Any]],
        topic: str,
        options: RequestOptions | None = None,
    ) -> Any:
        """
        Upload records of ``topic`` in real time.

        More than 100 records is accepted with a warning; more than 10000
        is rejected.

        Raises:
            TooManyItemsError: More than 10000 records
        """
        if len(data_list) > MAX_WRITE_ITEM_COUNT:
            logger.warning(
                f"[WriteData] item count more than '{MAX_WRITE_ITEM_COUNT}'"
            )
        check_item_count(len(data_list), MAX_IMPORT_ITEM_COUNT)
        response = await self.dispatcher.do_json_request(
            self.urls.write_url(topic), data_list, options
        )
        logger.debug(f"[WriteData] rsp:\n{response}")
        return response

    async def import_data(
        self,
        data_list: list[dict[str, Any]],
        topic: str,
        options: RequestOptions | None = None,
    ) -> Any:
        """
        Import up to 10000 records of ``topic`` offline.

        Raises:
            TooManyItemsError: More than 10000 records
        """
        check_item_count(len(data_list), MAX_IMPORT_ITEM_COUNT)
        response = await self.dispatcher.do_json_request(
            self.urls.import_url(topic), data_list, options
        )
        logger.debug(f"[ImportData] rsp:\n{response}")
        return response

    async def done(
        self,
        dates: Sequence[datetime.date],
        topic: str,
        options: RequestOptions | None = None,
    ) -> Any:
        """Mark the data of ``dates`` (default: yesterday) as fully imported."""
        response = await self.dispatcher.do_json_request(
            self.urls.done_url(topic), done_dates_payload(dates), options
        )
        logger.debug(f"[Done] rsp:\n{response}")
        return response

    # ==========================================================================
    # Prediction
    # ==========================================================================

    async def predict(
        self,
        request: ProtoMessage,
        response: M,
        scene: str = DEFAULT_PREDICT_SCENE,
        options: RequestOptions | None = None,
    ) -> M:
        """Fetch recommendations for ``scene``."""
        await self.dispatcher.do_pb_request(
            self.urls.predict_url(scene or DEFAULT_PREDICT_SCENE),
            request,
            response,
            options,
        )
        logger.debug(f"[Predict] rsp:\n{response}")
        return response

    async def callback(
        self, request: ProtoMessage, response: M, options: RequestOptions | None = None
    ) -> M:
        """Report what was shown and interacted with after a prediction."""
        await self.dispatcher.do_pb_request(
            self.urls.callback_url, request, response, options
        )
        logger.debug(f"[Callback] rsp:\n{response}")
        return response


__all__ = ["DEFAULT_PREDICT_SCENE", "GeneralClient", "done_dates_payload"]
