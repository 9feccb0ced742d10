"""Tests for Prober."""

import asyncio
import logging

import httpx
import pytest
from support import RecordingHandler

from byteplus_rec.config import AvailabilityConfig
from byteplus_rec.core.context import Context
from byteplus_rec.core.prober import ProbeResult, Prober
from byteplus_rec.observability.collector import UnifiedMetricsCollector
from byteplus_rec.observability.constants import PROBE_LATENCY_SECONDS, PROBES_TOTAL


@pytest.fixture
def hosts():
    return ["h1.example.com", "h2.example.com"]


def make_prober(config, handler, collector=None, probe_timeout=0.2):
    context = Context(config, transport=httpx.MockTransport(handler))
    return Prober(
        context, AvailabilityConfig(probe_timeout=probe_timeout), collector
    )


class TestProberUrls:
    def test_ping_url(self, make_config, hosts):
        prober = make_prober(make_config(hosts=hosts), RecordingHandler())
        assert prober.ping_url("h2.example.com") == "http://h2.example.com/predict/api/ping"

    def test_https_ping_url(self, make_config, hosts):
        prober = make_prober(make_config(hosts=hosts, schema="https"), RecordingHandler())
        assert prober.ping_url("h1.example.com").startswith("https://")


class TestProbe:
    """Test single probe outcomes."""

    @pytest.mark.asyncio
    async def test_status_200_is_success(self, make_config, hosts):
        handler = RecordingHandler(httpx.Response(200))
        prober = make_prober(make_config(hosts=hosts), handler)
        result = await prober.probe("h1.example.com")
        assert isinstance(result, ProbeResult)
        assert result.success is True
        assert result.status_code == 200
        assert result.error is None
        assert handler.requests[0].method == "GET"
        assert handler.requests[0].url.path == "/predict/api/ping"
        await prober.aclose()

    @pytest.mark.asyncio
    async def test_non_200_is_failure(self, make_config, hosts):
        prober = make_prober(make_config(hosts=hosts), RecordingHandler(httpx.Response(500)))
        result = await prober.probe("h1.example.com")
        assert result.success is False
        assert result.status_code == 500
        await prober.aclose()

    @pytest.mark.asyncio
    async def test_transport_error_is_failure(self, make_config, hosts):
        handler = RecordingHandler(httpx.ConnectError("connection refused"))
        prober = make_prober(make_config(hosts=hosts), handler)
        result = await prober.probe("h1.example.com")
        assert result.success is False
        assert result.status_code is None
        assert "ConnectError" in result.error
        await prober.aclose()

    @pytest.mark.asyncio
    async def test_slow_host_times_out(self, make_config, hosts):
        async def slow(request):
            await asyncio.sleep(1.0)
            return httpx.Response(200)

        prober = make_prober(make_config(hosts=hosts), slow, probe_timeout=0.05)
        result = await prober.probe("h1.example.com")
        assert result.success is False
        assert result.error == "timeout"
        await prober.aclose()

    @pytest.mark.asyncio
    async def test_custom_and_host_headers_sent(self, make_config, hosts):
        handler = RecordingHandler()
        config = make_config(
            hosts=hosts, headers={"X-Env": "test"}, host_header="virtual.example.com"
        )
        prober = make_prober(config, handler)
        await prober.probe("h2.example.com")
        request = handler.requests[0]
        assert request.headers["x-env"] == "test"
        assert request.headers["host"] == "virtual.example.com"
        assert request.url.host == "h2.example.com"
        await prober.aclose()


class TestProberMetrics:
    @pytest.mark.asyncio
    async def test_outcomes_counted(self, make_config, hosts):
        collector = UnifiedMetricsCollector(enable_prometheus=False)
        handler = RecordingHandler(httpx.Response(200), httpx.Response(503))
        prober = make_prober(make_config(hosts=hosts), handler, collector)
        await prober.probe("h1.example.com")
        await prober.probe("h1.example.com")
        metrics = collector.get_metrics()
        counters = metrics["counters"][PROBES_TOTAL]
        assert counters["host=h1.example.com,outcome=success"] == 1
        assert counters["host=h1.example.com,outcome=failure"] == 1
        assert metrics["histograms"][PROBE_LATENCY_SECONDS]["host=h1.example.com"][
            "count"
        ] == 2
        await prober.aclose()

    @pytest.mark.asyncio
    async def test_non_transport_error_counted(self, make_config, hosts, caplog):
        collector = UnifiedMetricsCollector(enable_prometheus=False)
        handler = RecordingHandler(httpx.InvalidURL("invalid url"))
        prober = make_prober(make_config(hosts=hosts), handler, collector)
        with caplog.at_level(logging.WARNING):
            result = await prober.probe("h1.example.com")
        assert result.success is False
        assert "InvalidURL" in result.error
        counters = collector.get_metrics()["counters"][PROBES_TOTAL]
        assert counters["host=h1.example.com,outcome=failure"] == 1
        assert "ping fail" in caplog.text
        await prober.aclose()


class TestProberClose:
    @pytest.mark.asyncio
    async def test_aclose_closes_every_client(self, make_config, hosts):
        prober = make_prober(make_config(hosts=hosts), RecordingHandler())
        await prober.aclose()
        assert all(client.is_closed for client in prober._clients.values())
