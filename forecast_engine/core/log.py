# forecast_engine/core/log.py

"""
로깅 설정.

각 모듈은 logging.getLogger(__name__)으로 로거를 가져다 쓰고,
프로세스 진입점(컨트롤 루프)에서 configure_logging()을 한 번 호출한다.
"""

import logging
from typing import Optional

from forecast_engine.config.settings import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """settings.LOG_LEVEL(또는 인자로 받은 level)로 루트 로거를 설정한다."""
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=_FORMAT)
