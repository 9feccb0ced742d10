"""Tests for CommonURL."""

import pytest

from byteplus_rec.common.urls import PLACEHOLDER, CommonURL, fill_template


class TestCommonURL:
    def test_operation_urls(self):
        urls = CommonURL("https", "demo", "h1.example.com")
        assert (
            urls.get_operation_url
            == "https://h1.example.com/data/api/demo/operation?method=get"
        )
        assert (
            urls.list_operations_url
            == "https://h1.example.com/data/api/demo/operation?method=list"
        )

    def test_refresh_regenerates_every_url(self):
        urls = CommonURL("http", "demo", "h1")
        urls.refresh("h2")
        assert urls.host == "h2"
        assert all("//h2/" in url for url in urls.snapshot().values())

    def test_snapshot_survives_refresh(self):
        """A snapshot taken before a refresh is never mixed with new URLs."""
        urls = CommonURL("http", "demo", "h1")
        before = urls.snapshot()
        urls.refresh("h2")
        assert all("//h1/" in url for url in before.values())

    def test_snapshot_read_only(self):
        urls = CommonURL("http", "demo", "h1")
        with pytest.raises(TypeError):
            urls.snapshot()["get_operation"] = "x"  # type: ignore[index]


class TestFillTemplate:
    def test_placeholder_replaced(self):
        assert fill_template(f"http://h/predict/{PLACEHOLDER}", "home") == (
            "http://h/predict/home"
        )
