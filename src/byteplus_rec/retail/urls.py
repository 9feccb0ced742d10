# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""URL holder for the retail product line."""

from __future__ import annotations

from ..common.urls import CommonURL, fill_template

# Example: https://rec-b.volcengineapi.com/predict/api/retail/demo/home
# "{{}}" survives str.format as the scene placeholder
PREDICT_URL_FORMAT = "{schema}://{host}/predict/api/retail/{tenant}/{{}}"

# Example: https://rec-b.volcengineapi.com/predict/api/retail/demo/ack_server_impressions
ACK_IMPRESSION_URL_FORMAT = (
    "{schema}://{host}/predict/api/retail/{tenant}/ack_server_impressions"
)

# Example: https://rec-b.volcengineapi.com/data/api/retail/demo/user?method=write
UPLOAD_URL_FORMAT = "{schema}://{host}/data/api/retail/{tenant}/{topic}?method={method}"

TOPICS = ("user", "product", "user_event")
UPLOAD_METHODS = ("write", "import")


class RetailURL(CommonURL):
    """
    URLs of the retail endpoints, plus the common operation URLs.

    Upload URLs are keyed ``<method>_<topic>``, e.g. ``write_user``.
    """

    def _generate(self, host: str) -> dict[str, str]:
        urls = super()._generate(host)
        fields = {"schema": self.schema, "host": host, "tenant": self.tenant}
        urls["predict"] = PREDICT_URL_FORMAT.format(**fields)
        urls["ack_impression"] = ACK_IMPRESSION_URL_FORMAT.format(**fields)
        for topic in TOPICS:
            for method in UPLOAD_METHODS:
                urls[f"{method}_{topic}"] = UPLOAD_URL_FORMAT.format(
                    **fields, topic=topic, method=method
                )
        return urls

    def predict_url(self, scene: str) -> str:
        return fill_template(self._urls["predict"], scene)

    @property
    def ack_impression_url(self) -> str:
        return self._urls["ack_impression"]

    def upload_url(self, topic: str, method: str) -> str:
        """Return the write or import URL of ``topic``."""
        return self._urls[f"{method}_{topic}"]


__all__ = ["RetailURL"]
