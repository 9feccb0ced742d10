"""Tests for RetailClient."""

from types import SimpleNamespace

import httpx
import pytest
from support import FakeMessage, RecordingHandler

from byteplus_rec.exceptions import TooManyItemsError
from byteplus_rec.retail import RetailClient, RetailURL


def import_request(field: str, items: list) -> FakeMessage:
    inline = SimpleNamespace(**{field: items})
    return FakeMessage(
        b"import", input_config=SimpleNamespace(**{f"{field}_inline_source": inline})
    )


@pytest.fixture
def handler():
    return RecordingHandler(httpx.Response(200, content=b"done"))


class TestRetailClientWrite:
    @pytest.mark.asyncio
    async def test_write_users(self, make_config, handler):
        async with RetailClient(make_config(), transport=handler.transport) as client:
            response = await client.write_users(
                FakeMessage(b"users", users=[1, 2]), FakeMessage()
            )
        assert response.payload == b"done"
        assert str(handler.requests[0].url) == (
            "http://h1.example.com/data/api/retail/demo/user?method=write"
        )

    @pytest.mark.asyncio
    async def test_write_products_and_events(self, make_config, handler):
        async with RetailClient(make_config(), transport=handler.transport) as client:
            await client.write_products(FakeMessage(products=[1]), FakeMessage())
            await client.write_user_events(FakeMessage(user_events=[1]), FakeMessage())
        paths = [request.url.path for request in handler.requests]
        assert paths == [
            "/data/api/retail/demo/product",
            "/data/api/retail/demo/user_event",
        ]

    @pytest.mark.asyncio
    async def test_write_over_limit_not_sent(self, make_config, handler):
        async with RetailClient(make_config(), transport=handler.transport) as client:
            with pytest.raises(TooManyItemsError) as exc_info:
                await client.write_users(
                    FakeMessage(users=list(range(101))), FakeMessage()
                )
        assert exc_info.value.limit == 100
        assert handler.requests == []


class TestRetailClientImport:
    @pytest.mark.asyncio
    async def test_import_users(self, make_config, handler):
        async with RetailClient(make_config(), transport=handler.transport) as client:
            await client.import_users(import_request("users", [1, 2, 3]), FakeMessage())
        assert handler.requests[0].url.params["method"] == "import"
        assert handler.requests[0].url.path == "/data/api/retail/demo/user"

    @pytest.mark.asyncio
    async def test_import_products_and_events(self, make_config, handler):
        async with RetailClient(make_config(), transport=handler.transport) as client:
            await client.import_products(import_request("products", [1]), FakeMessage())
            await client.import_user_events(
                import_request("user_events", [1]), FakeMessage()
            )
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_import_over_limit(self, make_config, handler):
        async with RetailClient(make_config(), transport=handler.transport) as client:
            with pytest.raises(TooManyItemsError):
                await client.import_products(
                    import_request("products", [0] * 10001), FakeMessage()
                )
        assert handler.requests == []


class TestRetailClientPredict:
    @pytest.mark.asyncio
    async def test_predict(self, make_config, handler):
        async with RetailClient(make_config(), transport=handler.transport) as client:
            response = await client.predict(FakeMessage(b"q"), FakeMessage(), "home")
        assert response.payload == b"done"
        assert handler.requests[0].url.path == "/predict/api/retail/demo/home"

    @pytest.mark.asyncio
    async def test_ack_server_impressions(self, make_config, handler):
        async with RetailClient(make_config(), transport=handler.transport) as client:
            await client.ack_server_impressions(FakeMessage(), FakeMessage())
        assert handler.requests[0].url.path == (
            "/predict/api/retail/demo/ack_server_impressions"
        )

    @pytest.mark.asyncio
    async def test_requests_follow_host_switch(self, make_config, handler):
        client = RetailClient(
            make_config(hosts=["h1", "h2"]), transport=handler.transport
        )
        assert isinstance(client.urls, RetailURL)
        client.release()
        client.urls.refresh("h2")
        await client.predict(FakeMessage(), FakeMessage(), "home")
        assert handler.requests[0].url.host == "h2"
        await client.aclose()
