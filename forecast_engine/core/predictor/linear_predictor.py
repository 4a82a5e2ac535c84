# forecast_engine/core/predictor/linear_predictor.py

"""
LinearPredictor.

역할:
- 과거 replica 결정 기록(ReplicaHistory)에 선형 회귀를 적용해 다음 replica 수를 예측한다.
- 회귀는 예측 호출마다 유닛 안에서 새로 맞추므로 별도 학습 유닛이 없다.
  train()은 설정/데이터 확인 후 준비 완료로 표시만 한다.
- prune 시 MetricHistory는 FIFO, ReplicaHistory는 최신순 정렬 후 잘라낸다.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from forecast_engine.config.settings import settings
from forecast_engine.core.algorithm.base import AlgorithmRunner
from forecast_engine.core.errors import InsufficientHistoryError, MissingConfigError
from forecast_engine.core.history import ReplicaHistory
from forecast_engine.core.predictor.base import BasePredictor
from forecast_engine.models.common import (
    TYPE_LINEAR,
    LinearConfig,
    ModelConfig,
    ReplicaPredictRequest,
    TimestampedReplicas,
)

logger = logging.getLogger(__name__)

_MIN_POINTS = 2


class LinearPredictor(BasePredictor):
    family = TYPE_LINEAR

    def __init__(
        self,
        model: ModelConfig,
        runner: AlgorithmRunner,
        *,
        predict_unit: Optional[str] = None,
    ):
        super().__init__(model, runner)
        self.predict_unit = predict_unit or settings.LINEAR_PREDICT_UNIT
        self.replica_history = ReplicaHistory()

    def record_replicas(self, entries: Iterable[TimestampedReplicas]) -> None:
        self.replica_history.extend(entries)

    def _config(self) -> LinearConfig:
        if self.model.linear is None:
            raise MissingConfigError("no Linear configuration provided for model")
        return self.model.linear

    def _has_training_history(self) -> bool:
        return self.model.linear is not None and len(self.replica_history) >= _MIN_POINTS

    def _has_history(self) -> bool:
        return len(self.metric_history) > 0 or len(self.replica_history) > 0

    def prune_history(self) -> None:
        cfg = self._config()
        self.metric_history.prune(cfg.history_size)
        removed = self.replica_history.prune(cfg.history_size)
        if removed:
            logger.debug("[Linear] pruned %d replica entries (keep=%d)", removed, cfg.history_size)

    def train(self) -> None:
        self._config()
        if len(self.replica_history) < _MIN_POINTS:
            raise InsufficientHistoryError(_MIN_POINTS, len(self.replica_history), "train")
        self.trained = True
        self.last_trained_at = datetime.now(timezone.utc)

    def predict(self) -> int:
        cfg = self._config()
        if len(self.replica_history) < _MIN_POINTS:
            raise InsufficientHistoryError(_MIN_POINTS, len(self.replica_history), "predict")

        request = ReplicaPredictRequest(
            look_ahead=cfg.look_ahead,
            replica_history=self.replica_history.newest(cfg.history_size),
        )
        return self._invoke(self.predict_unit, request).value
