"""
Predictor Package
알고리즘 계열별 예측기와 factory
"""

from .base import BasePredictor, PredictorState
from .gru_predictor import GRUPredictor
from .linear_predictor import LinearPredictor
from .factory import new_predictor, register_family, require_predictor, supported_families

__all__ = [
    "BasePredictor",
    "PredictorState",
    "GRUPredictor",
    "LinearPredictor",
    "new_predictor",
    "register_family",
    "require_predictor",
    "supported_families",
]
