from abc import ABC, abstractmethod
from typing import Dict, List

from forecast_engine.core.errors import UnknownMetricTypeError
from forecast_engine.models.common import MetricType, TimestampedMetric


class Worker(ABC):
    """메트릭 타입 하나에 대한 수집 버퍼"""

    def __init__(self) -> None:
        self._buffer: List[TimestampedMetric] = []

    @abstractmethod
    def collect(self) -> None:
        """지금 시점 기준으로 쿼리를 실행하고 결과를 버퍼에 쌓는다. 실패 시 버퍼는 그대로."""
        pass

    def drain(self) -> List[TimestampedMetric]:
        """버퍼 복사본을 반환하고 버퍼를 비운다. 각 샘플은 정확히 한 번만 반환된다."""
        drained, self._buffer = self._buffer, []
        return drained


class MetricCollector(ABC):
    """백엔드별 시계열 수집기 인터페이스"""

    def __init__(self) -> None:
        self.server_address: str = ""
        self.metric_queries: Dict[MetricType, str] = {}

    @abstractmethod
    def set_server_address(self, address: str) -> None:
        """백엔드 주소를 설정/검증한다. 실패 시 CollectorConnectionError."""
        pass

    @abstractmethod
    def _new_worker(self, query: str) -> Worker:
        pass

    def list_metric_types(self) -> List[str]:
        return [str(metric_type) for metric_type in self.metric_queries]

    def add_custom_metric(self, metric_type: MetricType, query: str) -> None:
        # 쿼리 문법 검증은 첫 collect 때로 미룬다
        self.metric_queries[metric_type] = query

    def create_worker(self, metric_type: MetricType) -> Worker:
        query = self.metric_queries.get(metric_type)
        if query is None:
            raise UnknownMetricTypeError(f"등록되지 않은 메트릭 타입: {metric_type}")
        return self._new_worker(query)
