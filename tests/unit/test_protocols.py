"""Tests for the runtime-checkable protocols."""

from support import FakeMessage, RecordingRefresher

from byteplus_rec.common.urls import CommonURL
from byteplus_rec.protocols import ProtoMessage, URLRefresher


class TestURLRefresher:
    def test_url_holders_conform(self):
        assert isinstance(CommonURL("http", "demo", "h1"), URLRefresher)

    def test_duck_typed_refresher_conforms(self):
        assert isinstance(RecordingRefresher(), URLRefresher)

    def test_object_without_refresh_rejected(self):
        assert not isinstance(object(), URLRefresher)


class TestProtoMessage:
    def test_fake_message_conforms(self):
        assert isinstance(FakeMessage(), ProtoMessage)

    def test_plain_bytes_rejected(self):
        assert not isinstance(b"payload", ProtoMessage)
