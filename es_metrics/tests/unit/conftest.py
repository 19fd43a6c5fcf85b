"""
Conftest for unit tests.

Sets the reporter environment variables BEFORE any es_metrics import so that
pydantic settings never pick up a developer's local configuration, and
provides shared snapshot fixtures. No test here touches the network: HTTP is
faked with httpx.MockTransport.
"""

import sys
import os

os.environ["METRICS_ES_BULK_URL"] = "http://es.test:9200/_bulk"
os.environ["METRICS_ES_NODE_INFO_URL"] = "http://es.test:9200/"
os.environ["METRICS_ES_INDEX"] = "metrics"
os.environ["METRICS_ES_HOST_NAME"] = "test-host"

# Ensure the es_metrics package can be found
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", ".."))

from datetime import datetime, timezone

import httpx
import pytest

from es_metrics.domain.models import (
    CounterItem,
    CounterValue,
    HistogramValue,
    MeterItem,
    MeterValue,
    TimerValue,
)


@pytest.fixture(scope="session")
def anyio_backend():
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def fixed_now():
    """A fixed UTC instant used as the pass timestamp."""
    return datetime(2024, 3, 7, 10, 15, 30, 123400, tzinfo=timezone.utc)


@pytest.fixture
def counter_value():
    return CounterValue(
        count=10,
        items=(
            CounterItem("A", 7, 70.0),
            CounterItem("B", 3, 30.0),
        ),
    )


@pytest.fixture
def meter_value():
    return MeterValue(
        count=100,
        mean_rate=1.5,
        one_minute_rate=2.0,
        five_minute_rate=1.8,
        fifteen_minute_rate=1.2,
        items=(
            MeterItem(
                "GET",
                60.0,
                MeterValue(
                    count=60,
                    mean_rate=0.9,
                    one_minute_rate=1.2,
                    five_minute_rate=1.1,
                    fifteen_minute_rate=0.7,
                ),
            ),
        ),
    )


@pytest.fixture
def histogram_value():
    return HistogramValue(
        count=50,
        last_value=4.0,
        min=1.0,
        max=20.0,
        mean=5.5,
        std_dev=2.1,
        median=5.0,
        percentile_75=7.0,
        percentile_95=11.0,
        percentile_98=15.0,
        percentile_99=18.0,
        percentile_999=12.3,
        sample_size=50,
        last_user_value="user-42",
        max_user_value="user-7",
    )


@pytest.fixture
def timer_value(meter_value, histogram_value):
    return TimerValue(rate=meter_value, histogram=histogram_value, active_sessions=3)


def node_info_handler(version="2.3.1", status_code=200):
    """MockTransport handler answering the node info endpoint."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(
                status_code,
                json={
                    "name": "node-1",
                    "cluster_name": "elasticsearch",
                    "version": {"number": version},
                    "tagline": "You Know, for Search",
                },
            )
        return httpx.Response(200, json={"took": 1, "errors": False, "items": []})

    return handler


@pytest.fixture
def make_client():
    """Factory for httpx.Client instances backed by a MockTransport handler."""
    clients = []

    def _make(handler) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def es_handler():
    """Factory: es_handler(version="2.3.1", status_code=200) -> handler."""
    return node_info_handler
