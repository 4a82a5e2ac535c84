"""
Algorithm Package
외부 알고리즘 유닛 실행 추상화 레이어
"""

from .base import AlgorithmRunner
from .python_runner import PythonAlgorithmRunner

__all__ = [
    "AlgorithmRunner",
    "PythonAlgorithmRunner",
]
