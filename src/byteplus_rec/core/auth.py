# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Tenant request signing.

The server verifies a SHA-256 signature over the token, the exact body
bytes sent, the tenant id, a second-level timestamp and a nonce. Requests
whose timestamp is more than a few seconds old are rejected.
"""

import hashlib
import time
import uuid


def calculate_signature(
    token: str, body: bytes, tenant_id: str, ts: str, nonce: str
) -> str:
    """Return the hex signature. The concatenation order is fixed."""
    sha = hashlib.sha256()
    sha.update(token.encode("utf-8"))
    sha.update(body)
    sha.update(tenant_id.encode("utf-8"))
    sha.update(ts.encode("utf-8"))
    sha.update(nonce.encode("utf-8"))
    return sha.hexdigest()


def build_auth_headers(token: str, tenant_id: str, body: bytes) -> dict[str, str]:
    """Return the Tenant-* headers signing ``body``."""
    ts = str(int(time.time()))
    nonce = uuid.uuid4().hex[:8]
    return {
        "Tenant-Id": tenant_id,
        "Tenant-Ts": ts,
        "Tenant-Nonce": nonce,
        "Tenant-Signature": calculate_signature(token, body, tenant_id, ts, nonce),
    }


__all__ = ["build_auth_headers", "calculate_signature"]
