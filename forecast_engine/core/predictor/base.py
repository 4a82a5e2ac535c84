# forecast_engine/core/predictor/base.py

"""
Predictor interface definition.

역할:
- 모든 알고리즘 계열(GRU, Linear 등)이 동일한 호출 방식
  (prepare / prune_history / train / predict / identify)을 갖도록 강제한다.
- 컨트롤 루프는 어떤 predictor가 오더라도 같은 순서로 호출한다:
  prepare -> prune_history -> (필요 시) train -> predict

동시성:
- predictor 인스턴스는 스케일링 대상 하나의 컨트롤 루프만 사용한다 (single writer).
  내부 history는 동시 접근에 안전하지 않다.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ValidationError

from forecast_engine.config.settings import settings
from forecast_engine.core.algorithm.base import AlgorithmRunner
from forecast_engine.core.errors import AlgorithmError, SerializationError
from forecast_engine.core.history import MetricHistory
from forecast_engine.models.common import (
    AlgorithmResult,
    ModelConfig,
    TimestampedMetric,
)

logger = logging.getLogger(__name__)


class PredictorState(str, Enum):
    EMPTY = "Empty"
    ACCUMULATING = "Accumulating"
    TRAINABLE = "Trainable"
    TRAINED = "Trained"


class BasePredictor(ABC):
    """
    Base class for all predictors.

    family 태그는 구현체마다 고정이며 factory 레지스트리 키로 쓰인다.
    trained 플래그는 참고용이다. predict()는 이를 전제조건으로 검사하지 않으며,
    학습 여부에 따른 호출 판단은 컨트롤 루프의 몫이다.
    """

    family: str = ""

    def __init__(self, model: ModelConfig, runner: AlgorithmRunner):
        self.model = model
        self.runner = runner
        self.metric_history = MetricHistory()
        self.trained = False
        self.last_trained_at: Optional[datetime] = None

    def prepare(self, samples: Iterable[TimestampedMetric]) -> None:
        """새로 수집된 샘플을 MetricHistory 뒤에 붙인다."""
        self.metric_history.extend(samples)

    def identify(self) -> str:
        return self.family

    @property
    def timeout_ms(self) -> int:
        if self.model.calculation_timeout is not None:
            return self.model.calculation_timeout
        return settings.DEFAULT_CALCULATION_TIMEOUT_MS

    @property
    def state(self) -> PredictorState:
        if self.trained:
            return PredictorState.TRAINED
        if self._has_training_history():
            return PredictorState.TRAINABLE
        if self._has_history():
            return PredictorState.ACCUMULATING
        return PredictorState.EMPTY

    def _has_history(self) -> bool:
        return len(self.metric_history) > 0

    @abstractmethod
    def prune_history(self) -> None:
        """history를 설정된 윈도우 크기로 제한한다. 설정이 없으면 MissingConfigError."""
        ...

    @abstractmethod
    def train(self) -> None:
        ...

    @abstractmethod
    def predict(self) -> int:
        """
        Returns
        -------
        int
            예측된 replica 수.
        """
        ...

    @abstractmethod
    def _has_training_history(self) -> bool:
        ...

    # ------------------------------------------------------------------
    # 알고리즘 유닛 호출
    # ------------------------------------------------------------------
    def _invoke(self, algorithm_path: str, request: BaseModel) -> AlgorithmResult:
        # 내부에서 만든 요청이므로 직렬화 실패는 프로그래밍 오류로 보고 그대로 올린다
        payload = request.model_dump_json(by_alias=True).encode("utf-8")
        try:
            raw = self.runner.run(algorithm_path, payload, self.timeout_ms)
        except AlgorithmError:
            logger.exception("[%s] algorithm failed: %s", self.family, algorithm_path)
            raise
        return parse_result(raw)


def parse_result(raw: bytes) -> AlgorithmResult:
    """알고리즘 유닛 stdout을 AlgorithmResult로 변환한다."""
    try:
        return AlgorithmResult.model_validate_json(raw)
    except ValidationError as exc:
        raise SerializationError(f"알고리즘 결과 파싱 실패: {raw[:200]!r}") from exc
