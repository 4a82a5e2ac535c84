# 예측기/수집기/알고리즘 유닛 사이에서 공통으로 쓰이는 스키마 모아둔 곳

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

TYPE_GRU = "GRU"
TYPE_LINEAR = "Linear"


@dataclass(frozen=True)
class MetricType:
    """무엇을 측정하는지 식별한다 (쿼리 방식과는 분리). dict key로 사용."""
    name: str
    unit: str

    def __str__(self) -> str:
        return f"{self.name} ({self.unit})"


class TimestampedMetric(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: float
    timestamp: datetime


class TimestampedReplicas(BaseModel):
    model_config = ConfigDict(frozen=True)

    replicas: int = Field(ge=0)
    time: datetime


class GRUConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    train_size: int = Field(alias="trainSize", gt=0)
    predict_size: int = Field(alias="predictSize", gt=0)
    look_ahead: int = Field(alias="lookAhead", ge=0)  # ms
    update_interval: Optional[int] = Field(default=None, alias="updateInterval", gt=0)  # ms

    @model_validator(mode="after")
    def _check_windows(self) -> "GRUConfig":
        if self.predict_size > self.train_size:
            raise ValueError(
                f"predictSize({self.predict_size})는 trainSize({self.train_size}) 이하여야 함"
            )
        return self


class LinearConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    history_size: int = Field(alias="historySize", ge=2)  # 회귀선에 최소 2점 필요
    look_ahead: int = Field(alias="lookAhead", ge=0)  # ms


class ModelConfig(BaseModel):
    """스케일링 대상 하나에 붙는 모델 설정. type으로 알고리즘 계열을 고른다."""
    model_config = ConfigDict(populate_by_name=True)

    type: str
    gru: Optional[GRUConfig] = Field(default=None, alias="GRU")
    linear: Optional[LinearConfig] = Field(default=None, alias="Linear")
    calculation_timeout: Optional[int] = Field(default=None, alias="calculationTimeout", gt=0)  # ms


# ----------------------------------------------------------------------
# 알고리즘 유닛 wire 포맷 (stdin/stdout JSON)
# ----------------------------------------------------------------------
class TrainRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    look_ahead: int = Field(alias="lookAhead")
    train_history: list[TimestampedMetric] = Field(alias="trainHistory")


class PredictRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    look_ahead: int = Field(alias="lookAhead")
    predict_history: list[TimestampedMetric] = Field(alias="predictHistory")


class ReplicaPredictRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    look_ahead: int = Field(alias="lookAhead")
    replica_history: list[TimestampedReplicas] = Field(alias="replicaHistory")


class AlgorithmResult(BaseModel):
    # 외부 유닛 출력이므로 타입 변환 없이 엄격하게 검증
    model_config = ConfigDict(strict=True)

    value: int = Field(ge=-(2**31), le=2**31 - 1)  # int32 replica 수
    trained: Optional[bool] = None
