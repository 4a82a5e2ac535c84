# forecast_engine/core/collector/prometheus.py

"""
PrometheusCollector.

역할:
- MetricType -> PromQL 쿼리 매핑을 관리한다.
- 메트릭 타입별 PrometheusWorker를 만들어 준다.
  Worker는 /api/v1/query (instant query)를 호출해서 결과 샘플을 버퍼에 쌓는다.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import requests

from forecast_engine.config.settings import settings
from forecast_engine.core.errors import CollectionError, CollectorConnectionError
from forecast_engine.models.common import MetricType, TimestampedMetric
from .base import MetricCollector, Worker

logger = logging.getLogger(__name__)

AVG_NODE_CPU_USAGE = MetricType(name="avg_node_cpu_usage", unit="%")

_DEFAULT_QUERIES: Dict[MetricType, str] = {
    AVG_NODE_CPU_USAGE: '100 - (avg(irate(node_cpu_seconds_total{mode="idle"}[30m])) * 100)',
}


class PrometheusWorker(Worker):
    def __init__(
        self,
        query: str,
        *,
        base_url: str,
        session: requests.Session,
        timeout: float,
    ):
        super().__init__()
        self.query = query
        self.base_url = base_url
        self.session = session
        self.timeout = timeout

    def collect(self) -> None:
        if not self.base_url:
            raise CollectionError("Prometheus 서버 주소가 설정되지 않음")

        params = {"query": self.query, "time": f"{time.time():.3f}"}
        try:
            resp = self.session.get(
                f"{self.base_url}/api/v1/query",
                params=params,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise CollectionError(f"Prometheus 조회 실패: {exc}") from exc

        if not resp.ok:
            raise CollectionError(f"Prometheus 조회 실패 ({resp.status_code}): {resp.text}")

        try:
            body = resp.json()
        except ValueError as exc:
            raise CollectionError(f"Prometheus 응답 파싱 실패: {exc}") from exc

        samples = _parse_query_result(body)
        # 파싱까지 끝난 뒤에만 버퍼에 반영
        self._buffer.extend(samples)
        logger.debug("collected %d samples for %s", len(samples), self.query)


def _parse_query_result(body: Any) -> List[TimestampedMetric]:
    if not isinstance(body, dict) or body.get("status") != "success":
        error = body.get("error") if isinstance(body, dict) else body
        raise CollectionError(f"Prometheus 쿼리 실패: {error}")

    try:
        data = body["data"]
        result_type = data["resultType"]
        if result_type == "vector":
            pairs = [item["value"] for item in data["result"]]
        elif result_type == "scalar":
            pairs = [data["result"]]
        else:
            raise CollectionError(f"지원하지 않는 resultType: {result_type}")

        return [
            TimestampedMetric(
                value=float(value),
                timestamp=datetime.fromtimestamp(float(ts), tz=timezone.utc),
            )
            for ts, value in pairs
        ]
    except (KeyError, TypeError, ValueError) as exc:
        raise CollectionError(f"Prometheus 응답 형식 오류: {exc}") from exc


class PrometheusCollector(MetricCollector):
    """Prometheus HTTP API를 사용하는 수집기."""

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        query_timeout: Optional[float] = None,
    ) -> None:
        super().__init__()
        self.metric_queries = dict(_DEFAULT_QUERIES)
        self.session = session or requests.Session()
        self.query_timeout = query_timeout or settings.COLLECTOR_QUERY_TIMEOUT

    def set_server_address(self, address: str, *, check: bool = True) -> None:
        parsed = urlparse(address or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise CollectorConnectionError(f"잘못된 Prometheus 주소: {address!r}")

        base_url = address.rstrip("/")
        if check:
            try:
                resp = self.session.get(f"{base_url}/-/ready", timeout=self.query_timeout)
            except requests.exceptions.RequestException as exc:
                raise CollectorConnectionError(f"Prometheus 서버에 연결할 수 없습니다: {base_url}") from exc
            if not resp.ok:
                raise CollectorConnectionError(
                    f"Prometheus 서버가 준비되지 않음 ({resp.status_code}): {base_url}"
                )

        self.server_address = base_url
        logger.info("Prometheus server address set: %s", base_url)

    def _new_worker(self, query: str) -> PrometheusWorker:
        return PrometheusWorker(
            query,
            base_url=self.server_address,
            session=self.session,
            timeout=self.query_timeout,
        )
