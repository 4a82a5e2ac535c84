"""
Collector Package
시계열 메트릭 수집을 위한 추상화 레이어
"""

from .base import MetricCollector, Worker
from .prometheus import AVG_NODE_CPU_USAGE, PrometheusCollector, PrometheusWorker
from .factory import get_collector, reset_collector

__all__ = [
    "MetricCollector",
    "Worker",
    "PrometheusCollector",
    "PrometheusWorker",
    "AVG_NODE_CPU_USAGE",
    "get_collector",
    "reset_collector",
]
