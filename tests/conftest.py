# tests/conftest.py

"""
pytest 설정 및 공통 fixture.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# 프로젝트 루트를 PYTHONPATH에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from forecast_engine.core.algorithm.base import AlgorithmRunner  # noqa: E402
from forecast_engine.models.common import TimestampedMetric  # noqa: E402


class StubRunner(AlgorithmRunner):
    """호출 횟수/요청을 기록하고 미리 정한 응답을 돌려주는 runner."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def run(self, algorithm_path, payload, timeout_ms):
        self.calls.append((algorithm_path, payload, timeout_ms))
        response = self.responses.get(algorithm_path, b'{"value": 0}')
        if isinstance(response, Exception):
            raise response
        return response


BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_samples(count, start=0):
    """1분 간격 샘플 생성 (value == 인덱스)."""
    return [
        TimestampedMetric(value=float(i), timestamp=BASE_TIME + timedelta(minutes=i))
        for i in range(start, start + count)
    ]


@pytest.fixture
def stub_runner():
    return StubRunner()
