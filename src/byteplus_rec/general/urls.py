# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""URL holder for the general product line."""

from __future__ import annotations

from ..common.urls import CommonURL, fill_template

# "{{}}" is left as "{}" by str.format and filled per call (scene or topic)

# Example: https://rec-b.volcengineapi.com/predict/api/general_demo/home
PREDICT_URL_FORMAT = "{schema}://{host}/predict/api/{tenant}/{{}}"

# Example: https://rec-b.volcengineapi.com/predict/api/general_demo/callback
CALLBACK_URL_FORMAT = "{schema}://{host}/predict/api/{tenant}/callback"

# Example: https://rec-b.volcengineapi.com/data/api/general_demo/user?method=write
UPLOAD_URL_FORMAT = "{schema}://{host}/data/api/{tenant}/{{}}?method={method}"

# Example: https://rec-b.volcengineapi.com/data/api/general_demo/done?topic=user
DONE_URL_FORMAT = "{schema}://{host}/data/api/{tenant}/done?topic={{}}"


class GeneralURL(CommonURL):
    """URLs of the general endpoints, plus the common operation URLs."""

    def _generate(self, host: str) -> dict[str, str]:
        urls = super()._generate(host)
        fields = {"schema": self.schema, "host": host, "tenant": self.tenant}
        urls["predict"] = PREDICT_URL_FORMAT.format(**fields)
        urls["callback"] = CALLBACK_URL_FORMAT.format(**fields)
        urls["write"] = UPLOAD_URL_FORMAT.format(**fields, method="write")
        urls["import"] = UPLOAD_URL_FORMAT.format(**fields, method="import")
        urls["done"] = DONE_URL_FORMAT.format(**fields)
        return urls

    def predict_url(self, scene: str) -> str:
        return fill_template(self._urls["predict"], scene)

    @property
    def callback_url(self) -> str:
        return self._urls["callback"]

    def write_url(self, topic: str) -> str:
        return fill_template(self._urls["write"], topic)

    def import_url(self, topic: str) -> str:
        return fill_template(self._urls["import"], topic)

    def done_url(self, topic: str) -> str:
        return fill_template(self._urls["done"], topic)


__all__ = ["GeneralURL"]
