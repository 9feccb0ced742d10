"""Tests for RequestOptions."""

import pytest

from byteplus_rec.core.options import RequestOptions


class TestRequestOptions:
    def test_defaults(self):
        options = RequestOptions()
        assert options.timeout is None
        assert options.headers == {}
        assert options.retry_times == 0
        assert options.request_id

    def test_request_ids_are_unique(self):
        assert RequestOptions().request_id != RequestOptions().request_id

    def test_explicit_request_id(self):
        assert RequestOptions(request_id="req-1").request_id == "req-1"

    @pytest.mark.parametrize("kwargs", [{"timeout": 0}, {"retry_times": -1}])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            RequestOptions(**kwargs)
