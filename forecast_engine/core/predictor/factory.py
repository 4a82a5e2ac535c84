# forecast_engine/core/predictor/factory.py

"""
Predictor factory / registry.

역할:
- ModelConfig.type(알고리즘 계열 태그)을 보고 알맞은 Predictor 구현체를 만든다.
- 새 계열은 register_family()로 등록한다. 이 레지스트리가 유일한 확장 지점이다.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from forecast_engine.core.algorithm.base import AlgorithmRunner
from forecast_engine.core.algorithm.python_runner import PythonAlgorithmRunner
from forecast_engine.core.errors import UnsupportedFamilyError
from forecast_engine.models.common import TYPE_GRU, TYPE_LINEAR, ModelConfig
from .base import BasePredictor
from .gru_predictor import GRUPredictor
from .linear_predictor import LinearPredictor

logger = logging.getLogger(__name__)

PredictorConstructor = Callable[[ModelConfig, AlgorithmRunner], BasePredictor]

_REGISTRY: Dict[str, PredictorConstructor] = {
    TYPE_GRU: GRUPredictor,
    TYPE_LINEAR: LinearPredictor,
}


def register_family(tag: str, constructor: PredictorConstructor) -> None:
    """알고리즘 계열 등록 (같은 태그면 덮어쓴다)."""
    _REGISTRY[tag] = constructor


def supported_families() -> List[str]:
    return sorted(_REGISTRY)


def new_predictor(
    model: ModelConfig,
    runner: Optional[AlgorithmRunner] = None,
) -> Optional[BasePredictor]:
    """
    model.type에 맞는 Predictor를 생성한다.

    등록되지 않은 계열이면 None을 반환한다 (호출 측에서 UnsupportedFamily로 처리).
    """
    constructor = _REGISTRY.get(model.type)
    if constructor is None:
        logger.warning("unsupported model type: %s", model.type)
        return None
    return constructor(model, runner or PythonAlgorithmRunner())


def require_predictor(
    model: ModelConfig,
    runner: Optional[AlgorithmRunner] = None,
) -> BasePredictor:
    predictor = new_predictor(model, runner)
    if predictor is None:
        raise UnsupportedFamilyError(
            f"unsupported model type: {model.type} (supported: {', '.join(supported_families())})"
        )
    return predictor
