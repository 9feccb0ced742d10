"""Tests for GeneralClient."""

import datetime
from unittest.mock import patch

import httpx
import pytest
from support import FakeMessage, RecordingHandler, decoded_json

from byteplus_rec.exceptions import TooManyItemsError
from byteplus_rec.general import GeneralClient
from byteplus_rec.general.client import done_dates_payload


@pytest.fixture
def handler():
    return RecordingHandler(httpx.Response(200, json={"status": {"code": 0}}))


class TestDoneDatesPayload:
    def test_explicit_dates(self):
        payload = done_dates_payload([datetime.date(2024, 3, 9)])
        assert payload == {"data_dates": [{"year": 2024, "month": 3, "day": 9}]}

    def test_defaults_to_yesterday(self):
        class FixedDate(datetime.date):
            @classmethod
            def today(cls):
                return cls(2024, 3, 1)

        with patch("byteplus_rec.general.client.datetime.date", FixedDate):
            payload = done_dates_payload([])
        assert payload == {"data_dates": [{"year": 2024, "month": 2, "day": 29}]}


class TestGeneralClientData:
    @pytest.mark.asyncio
    async def test_write_data(self, make_config, handler):
        records = [{"user_id": "1"}, {"user_id": "2"}]
        async with GeneralClient(make_config(), transport=handler.transport) as client:
            result = await client.write_data(records, topic="user")

        assert result == {"status": {"code": 0}}
        request = handler.requests[0]
        assert str(request.url) == (
            "http://h1.example.com/data/api/demo/user?method=write"
        )
        assert request.headers["Content-Type"] == "application/json"
        assert decoded_json(request) == records

    @pytest.mark.asyncio
    async def test_write_data_over_write_limit_warns(self, make_config, handler, caplog):
        records = [{"id": i} for i in range(101)]
        async with GeneralClient(make_config(), transport=handler.transport) as client:
            with caplog.at_level("WARNING", logger="byteplus_rec.general.client"):
                await client.write_data(records, topic="item")
        assert "item count more than" in caplog.text
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_write_data_over_import_limit(self, make_config, handler):
        records = [{}] * 10001
        async with GeneralClient(make_config(), transport=handler.transport) as client:
            with pytest.raises(TooManyItemsError):
                await client.write_data(records, topic="item")
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_import_data(self, make_config, handler):
        async with GeneralClient(make_config(), transport=handler.transport) as client:
            await client.import_data([{"id": 1}], topic="item")
        assert handler.requests[0].url.params["method"] == "import"

    @pytest.mark.asyncio
    async def test_done(self, make_config, handler):
        async with GeneralClient(make_config(), transport=handler.transport) as client:
            await client.done([datetime.date(2024, 1, 2)], topic="user")
        request = handler.requests[0]
        assert request.url.path == "/data/api/demo/done"
        assert request.url.params["topic"] == "user"
        assert decoded_json(request) == {
            "data_dates": [{"year": 2024, "month": 1, "day": 2}]
        }


class TestGeneralClientPredict:
    @pytest.mark.asyncio
    async def test_predict_scene(self, make_config, handler):
        async with GeneralClient(make_config(), transport=handler.transport) as client:
            await client.predict(FakeMessage(), FakeMessage(), scene="home")
        assert handler.requests[0].url.path == "/predict/api/demo/home"

    @pytest.mark.asyncio
    async def test_predict_default_scene(self, make_config, handler):
        async with GeneralClient(make_config(), transport=handler.transport) as client:
            await client.predict(FakeMessage(), FakeMessage())
        assert handler.requests[0].url.path == "/predict/api/demo/default"

    @pytest.mark.asyncio
    async def test_callback(self, make_config, handler):
        async with GeneralClient(make_config(), transport=handler.transport) as client:
            await client.callback(FakeMessage(b"cb"), FakeMessage())
        assert handler.requests[0].url.path == "/predict/api/demo/callback"
