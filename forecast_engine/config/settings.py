# forecast_engine/config/settings.py
from pydantic_settings import BaseSettings
from pydantic import AnyHttpUrl


class Settings(BaseSettings):
    # 일반
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # 메트릭 수집기
    COLLECTOR_BACKEND: str = "prometheus"
    PROMETHEUS_URL: AnyHttpUrl = "http://localhost:9090"
    COLLECTOR_QUERY_TIMEOUT: float = 10.0  # 초

    # 알고리즘 실행 (외부 프로세스)
    ALGORITHM_PYTHON: str = "python3"
    GRU_TRAIN_UNIT: str = "algorithms/gru/train.py"
    GRU_PREDICT_UNIT: str = "algorithms/gru/predict.py"
    LINEAR_PREDICT_UNIT: str = "algorithms/linear_regression/linear_regression.py"
    DEFAULT_CALCULATION_TIMEOUT_MS: int = 30000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
