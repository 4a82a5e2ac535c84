from forecast_engine.config.settings import settings
from forecast_engine.core.errors import CollectorError
from .prometheus import PrometheusCollector


_collector_instance = None


def _create_collector(backend: str, server_address: str):
    backend = backend.strip().lower()

    if backend == "prometheus":
        collector = PrometheusCollector()
        collector.set_server_address(server_address)
        return collector

    raise CollectorError(f"Unknown collector backend: {backend}")


def get_collector():
    """글로벌 수집기 인스턴스 반환 (settings 기반으로 최초 1회 생성)"""
    global _collector_instance

    if _collector_instance is None:
        _collector_instance = _create_collector(
            settings.COLLECTOR_BACKEND,
            str(settings.PROMETHEUS_URL),
        )

    return _collector_instance


def reset_collector() -> None:
    global _collector_instance
    _collector_instance = None
