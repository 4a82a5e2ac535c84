# forecast_engine/core/algorithm/python_runner.py

"""
PythonAlgorithmRunner.

역할:
- 알고리즘 유닛(파이썬 스크립트)을 별도 프로세스로 띄우고 JSON payload를 stdin으로 전달한다.
- stdout 전체를 결과로 돌려준다. 유닛은 상태를 갖지 않는다.
- timeout 초과 시 프로세스를 kill 하고 AlgorithmTimeoutError를 올린다.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from typing import Optional

from forecast_engine.config.settings import settings
from forecast_engine.core.errors import AlgorithmExecutionError, AlgorithmTimeoutError
from .base import AlgorithmRunner

logger = logging.getLogger(__name__)

_CLEANUP_TIMEOUT = 1.0  # 초


class PythonAlgorithmRunner(AlgorithmRunner):
    def __init__(self, interpreter: Optional[str] = None):
        self.interpreter = interpreter or settings.ALGORITHM_PYTHON

    def run(self, algorithm_path: str, payload: bytes, timeout_ms: int) -> bytes:
        cmd = [self.interpreter, algorithm_path]
        logger.debug("algorithm start: %s (timeout=%dms)", algorithm_path, timeout_ms)

        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=True,  # 유닛이 띄운 하위 프로세스까지 한 그룹으로 정리
            )
        except OSError as exc:
            raise AlgorithmExecutionError(algorithm_path, None, str(exc)) from exc

        try:
            stdout, stderr = proc.communicate(input=payload, timeout=timeout_ms / 1000.0)
        except subprocess.TimeoutExpired as exc:
            logger.warning("algorithm timeout: %s (%dms)", algorithm_path, timeout_ms)
            _kill_process_group(proc)
            raise AlgorithmTimeoutError(algorithm_path, timeout_ms) from exc
        except BaseException:
            _kill_process_group(proc)
            raise

        if proc.returncode != 0:
            output = (stderr or stdout or b"").decode("utf-8", errors="replace")
            raise AlgorithmExecutionError(algorithm_path, proc.returncode, output)

        return stdout


def _kill_process_group(proc: subprocess.Popen) -> None:
    """유닛 프로세스 그룹 전체를 SIGKILL 하고 파이프를 회수한다."""
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    try:
        proc.communicate(timeout=_CLEANUP_TIMEOUT)
    except subprocess.TimeoutExpired:
        # 그룹을 벗어난 하위 프로세스가 파이프를 잡고 있는 경우
        logger.warning("algorithm pipes still open after kill: pid=%d", proc.pid)
