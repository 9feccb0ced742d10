"""Tests for tenant request signing."""

import hashlib
from unittest.mock import patch

from byteplus_rec.core.auth import build_auth_headers, calculate_signature


class TestCalculateSignature:
    """Test the signature digest."""

    def test_concatenation_order(self):
        expected = hashlib.sha256(b"token" + b"body" + b"1001" + b"1700000000" + b"abcd1234")
        assert (
            calculate_signature("token", b"body", "1001", "1700000000", "abcd1234")
            == expected.hexdigest()
        )

    def test_changes_with_body(self):
        first = calculate_signature("t", b"a", "1", "1", "n")
        second = calculate_signature("t", b"b", "1", "1", "n")
        assert first != second


class TestBuildAuthHeaders:
    """Test the Tenant-* header set."""

    def test_header_names(self):
        headers = build_auth_headers("token", "1001", b"body")
        assert set(headers) == {
            "Tenant-Id",
            "Tenant-Ts",
            "Tenant-Nonce",
            "Tenant-Signature",
        }
        assert headers["Tenant-Id"] == "1001"

    def test_signature_verifies(self):
        headers = build_auth_headers("token", "1001", b"body")
        assert headers["Tenant-Signature"] == calculate_signature(
            "token", b"body", "1001", headers["Tenant-Ts"], headers["Tenant-Nonce"]
        )

    def test_timestamp_in_seconds(self):
        with patch("byteplus_rec.core.auth.time.time", return_value=1700000000.75):
            headers = build_auth_headers("token", "1001", b"")
        assert headers["Tenant-Ts"] == "1700000000"

    def test_nonce_is_short_and_fresh(self):
        first = build_auth_headers("token", "1001", b"")["Tenant-Nonce"]
        second = build_auth_headers("token", "1001", b"")["Tenant-Nonce"]
        assert len(first) == 8
        assert first != second
