from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from forecast_engine.config.settings import settings
from forecast_engine.core.algorithm.base import AlgorithmRunner
from forecast_engine.core.errors import InsufficientHistoryError, MissingConfigError
from forecast_engine.core.predictor.base import BasePredictor
from forecast_engine.models.common import (
    TYPE_GRU,
    GRUConfig,
    ModelConfig,
    PredictRequest,
    TrainRequest,
)

logger = logging.getLogger(__name__)


class GRUPredictor(BasePredictor):
    """GRU(순환 신경망) 계열. 학습(train)과 예측(predict) 유닛을 따로 호출한다."""

    family = TYPE_GRU

    def __init__(
        self,
        model: ModelConfig,
        runner: AlgorithmRunner,
        *,
        train_unit: Optional[str] = None,
        predict_unit: Optional[str] = None,
    ):
        super().__init__(model, runner)
        self.train_unit = train_unit or settings.GRU_TRAIN_UNIT
        self.predict_unit = predict_unit or settings.GRU_PREDICT_UNIT

    def _config(self) -> GRUConfig:
        if self.model.gru is None:
            raise MissingConfigError("no GRU configuration provided for model")
        return self.model.gru

    def _has_training_history(self) -> bool:
        cfg = self.model.gru
        return cfg is not None and len(self.metric_history) >= cfg.train_size

    def prune_history(self) -> None:
        cfg = self._config()
        removed = self.metric_history.prune(cfg.predict_size)
        if removed:
            logger.debug("[GRU] pruned %d samples (keep=%d)", removed, cfg.predict_size)

    def train(self) -> None:
        cfg = self._config()
        if len(self.metric_history) < cfg.train_size:
            raise InsufficientHistoryError(cfg.train_size, len(self.metric_history), "train")

        request = TrainRequest(
            look_ahead=cfg.look_ahead,
            train_history=self.metric_history.to_list(),
        )
        result = self._invoke(self.train_unit, request)

        self.trained = True if result.trained is None else result.trained
        self.last_trained_at = datetime.now(timezone.utc)
        logger.info("[GRU] trained on %d samples (ready=%s)", len(request.train_history), self.trained)

    def predict(self) -> int:
        cfg = self._config()
        if len(self.metric_history) < cfg.predict_size:
            raise InsufficientHistoryError(cfg.predict_size, len(self.metric_history), "predict")

        request = PredictRequest(
            look_ahead=cfg.look_ahead,
            predict_history=self.metric_history.latest(cfg.predict_size),
        )
        result = self._invoke(self.predict_unit, request)
        if result.trained is not None:
            self.trained = result.trained
        return result.value

    def is_training_due(self, now: Optional[datetime] = None) -> bool:
        """
        학습 시점 판단용 헬퍼 (강제하지 않음).

        학습 윈도우만큼 history가 쌓였고, 아직 학습한 적이 없거나
        update_interval이 지났으면 True.
        """
        cfg = self._config()
        if len(self.metric_history) < cfg.train_size:
            return False
        if self.last_trained_at is None or cfg.update_interval is None:
            return self.last_trained_at is None
        now = now or datetime.now(timezone.utc)
        return now - self.last_trained_at >= timedelta(milliseconds=cfg.update_interval)
