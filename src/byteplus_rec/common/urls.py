# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
URL holders shared by all product lines.

Every holder keeps its URLs in one read-only mapping that ``refresh``
replaces in a single assignment. Subclasses add their own URLs by
extending ``_generate``.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

# Example: https://rec-b.volcengineapi.com/data/api/retail_demo/operation?method=get
OPERATION_URL_FORMAT = "{schema}://{host}/data/api/{tenant}/operation?method={method}"

# Placeholder replaced per call in URL templates (scene, topic)
PLACEHOLDER = "{}"


class CommonURL:
    """
    URLs of the operation endpoints available to every tenant.

    Implements the URLRefresher protocol.
    """

    def __init__(self, schema: str, tenant: str, host: str):
        self.schema = schema
        self.tenant = tenant
        self._host = host
        self._urls: Mapping[str, str] = MappingProxyType(self._generate(host))

    def refresh(self, host: str) -> None:
        """Regenerate every URL for ``host`` and publish them together."""
        self._urls = MappingProxyType(self._generate(host))
        self._host = host

    def _generate(self, host: str) -> dict[str, str]:
        return {
            "get_operation": self._operation_url(host, "get"),
            "list_operations": self._operation_url(host, "list"),
        }

    def _operation_url(self, host: str, method: str) -> str:
        return OPERATION_URL_FORMAT.format(
            schema=self.schema, host=host, tenant=self.tenant, method=method
        )

    @property
    def host(self) -> str:
        """Host the published URLs point at."""
        return self._host

    def snapshot(self) -> Mapping[str, str]:
        """Return the currently published URLs."""
        return self._urls

    @property
    def get_operation_url(self) -> str:
        return self._urls["get_operation"]

    @property
    def list_operations_url(self) -> str:
        return self._urls["list_operations"]


def fill_template(template: str, value: str) -> str:
    """Substitute ``value`` for the placeholder of a URL template."""
    return template.replace(PLACEHOLDER, value)


__all__ = ["OPERATION_URL_FORMAT", "PLACEHOLDER", "CommonURL", "fill_template"]
