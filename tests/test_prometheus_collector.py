# tests/test_prometheus_collector.py

"""
PrometheusCollector / PrometheusWorker 단위 테스트.

requests.Session은 Mock으로 대체한다.
"""

from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest
import requests

from forecast_engine.core.collector import AVG_NODE_CPU_USAGE, PrometheusCollector
from forecast_engine.core.collector.factory import get_collector, reset_collector
from forecast_engine.core.errors import (
    CollectionError,
    CollectorConnectionError,
    CollectorError,
    UnknownMetricTypeError,
)
from forecast_engine.models.common import MetricType


def _response(status_code=200, body=None):
    resp = Mock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.text = "" if body is None else str(body)
    resp.json.return_value = body
    return resp


def _vector(*pairs):
    return {
        "status": "success",
        "data": {
            "resultType": "vector",
            "result": [{"metric": {}, "value": [ts, value]} for ts, value in pairs],
        },
    }


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def collector(session):
    c = PrometheusCollector(session=session, query_timeout=2.0)
    c.set_server_address("http://prometheus:9090/", check=False)
    return c


def test_default_catalog_has_cpu_query():
    """기본 카탈로그에 평균 CPU 사용률 쿼리가 있다."""
    c = PrometheusCollector(session=Mock())

    assert "avg_node_cpu_usage (%)" in c.list_metric_types()
    assert "node_cpu_seconds_total" in c.metric_queries[AVG_NODE_CPU_USAGE]


def test_add_custom_metric_registers_and_overwrites(collector):
    mem = MetricType(name="avg_mem", unit="bytes")

    collector.add_custom_metric(mem, "avg(node_memory_Active_bytes)")
    collector.add_custom_metric(mem, "avg(node_memory_MemFree_bytes)")

    assert collector.metric_queries[mem] == "avg(node_memory_MemFree_bytes)"
    assert sorted(collector.list_metric_types()) == ["avg_mem (bytes)", "avg_node_cpu_usage (%)"]


def test_create_worker_unknown_type(collector):
    with pytest.raises(UnknownMetricTypeError):
        collector.create_worker(MetricType(name="nope", unit="%"))


def test_set_server_address_malformed():
    c = PrometheusCollector(session=Mock())

    for address in ["", "prometheus:9090", "ftp://prometheus", "http://"]:
        with pytest.raises(CollectorConnectionError):
            c.set_server_address(address, check=False)


def test_set_server_address_probe_ok(session):
    session.get.return_value = _response(200)
    c = PrometheusCollector(session=session)

    c.set_server_address("http://prometheus:9090")

    assert c.server_address == "http://prometheus:9090"
    assert session.get.call_args[0][0] == "http://prometheus:9090/-/ready"


def test_set_server_address_unreachable(session):
    session.get.side_effect = requests.exceptions.ConnectionError("refused")
    c = PrometheusCollector(session=session)

    with pytest.raises(CollectorConnectionError):
        c.set_server_address("http://prometheus:9090")
    assert c.server_address == ""


def test_set_server_address_not_ready(session):
    session.get.return_value = _response(503)
    c = PrometheusCollector(session=session)

    with pytest.raises(ConnectionError):
        c.set_server_address("http://prometheus:9090")


def test_collect_and_drain(collector, session):
    """collect 결과가 버퍼에 쌓이고 drain으로 한 번만 반환된다."""
    session.get.return_value = _response(200, _vector((1767225600, "42.5"), (1767225660, "43")))
    worker = collector.create_worker(AVG_NODE_CPU_USAGE)

    worker.collect()
    drained = worker.drain()

    assert [m.value for m in drained] == [42.5, 43.0]
    assert drained[0].timestamp == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert worker.drain() == []

    url = session.get.call_args[0][0]
    params = session.get.call_args[1]["params"]
    assert url == "http://prometheus:9090/api/v1/query"
    assert params["query"] == collector.metric_queries[AVG_NODE_CPU_USAGE]
    assert session.get.call_args[1]["timeout"] == 2.0


def test_collect_accumulates_until_drain(collector, session):
    session.get.return_value = _response(200, _vector((1767225600, "1")))
    worker = collector.create_worker(AVG_NODE_CPU_USAGE)

    worker.collect()
    worker.collect()

    assert len(worker.drain()) == 2


def test_collect_empty_result_is_not_error(collector, session):
    session.get.return_value = _response(200, _vector())
    worker = collector.create_worker(AVG_NODE_CPU_USAGE)

    worker.collect()

    assert worker.drain() == []


def test_collect_scalar_result(collector, session):
    body = {"status": "success", "data": {"resultType": "scalar", "result": [1767225600, "7"]}}
    session.get.return_value = _response(200, body)
    worker = collector.create_worker(AVG_NODE_CPU_USAGE)

    worker.collect()

    assert [m.value for m in worker.drain()] == [7.0]


@pytest.mark.parametrize(
    "response",
    [
        _response(400, {"status": "error", "error": "parse error"}),
        _response(200, {"status": "error", "error": "bad query"}),
        _response(200, {"status": "success", "data": {"resultType": "matrix", "result": []}}),
        _response(200, {"status": "success", "data": {"resultType": "vector", "result": [{"value": ["x", "y"]}]}}),
        _response(200, {"status": "success"}),
    ],
)
def test_collect_failure_leaves_buffer_untouched(collector, session, response):
    """실패한 collect는 CollectionError를 올리고 기존 버퍼를 건드리지 않는다."""
    worker = collector.create_worker(AVG_NODE_CPU_USAGE)
    session.get.return_value = _response(200, _vector((1767225600, "1")))
    worker.collect()

    session.get.return_value = response
    with pytest.raises(CollectionError):
        worker.collect()

    assert len(worker.drain()) == 1


def test_collect_transport_error(collector, session):
    session.get.side_effect = requests.exceptions.Timeout("slow")
    worker = collector.create_worker(AVG_NODE_CPU_USAGE)

    with pytest.raises(CollectionError):
        worker.collect()


def test_collect_invalid_json(collector, session):
    resp = _response(200)
    resp.json.side_effect = ValueError("not json")
    session.get.return_value = resp
    worker = collector.create_worker(AVG_NODE_CPU_USAGE)

    with pytest.raises(CollectionError):
        worker.collect()


def test_collect_without_server_address():
    c = PrometheusCollector(session=Mock())
    worker = c.create_worker(AVG_NODE_CPU_USAGE)

    with pytest.raises(CollectionError):
        worker.collect()


def test_get_collector_unknown_backend():
    reset_collector()
    with patch("forecast_engine.core.collector.factory.settings") as mock_settings:
        mock_settings.COLLECTOR_BACKEND = "influx"
        mock_settings.PROMETHEUS_URL = "http://localhost:9090"
        with pytest.raises(CollectorError):
            get_collector()
    reset_collector()


@patch("forecast_engine.core.collector.factory.PrometheusCollector")
def test_get_collector_is_cached(mock_collector_cls):
    reset_collector()
    first = get_collector()
    second = get_collector()

    assert first is second
    mock_collector_cls.return_value.set_server_address.assert_called_once()
    reset_collector()
