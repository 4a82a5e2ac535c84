from abc import ABC, abstractmethod


class AlgorithmRunner(ABC):
    """외부 알고리즘 유닛 실행 인터페이스"""

    @abstractmethod
    def run(self, algorithm_path: str, payload: bytes, timeout_ms: int) -> bytes:
        """
        algorithm_path 유닛을 독립 프로세스로 실행하고 표준출력 전체를 반환한다.

        Raises
        ------
        AlgorithmTimeoutError
            timeout_ms 안에 끝나지 않은 경우 (프로세스는 종료시킨다).
        AlgorithmExecutionError
            비정상 종료한 경우.
        """
        ...
