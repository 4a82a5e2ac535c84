class PredictionError(RuntimeError):
    """Generic prediction failure."""
    pass


class MissingConfigError(PredictionError):
    """No family configuration attached to the model for the predictor's type."""
    pass


class InsufficientHistoryError(PredictionError):
    """History holds fewer samples than the operation requires."""

    def __init__(self, required: int, available: int, operation: str = ""):
        self.required = required
        self.available = available
        self.operation = operation
        prefix = f"{operation}: " if operation else ""
        super().__init__(f"{prefix}데이터 부족: {available} < {required}")


class UnsupportedFamilyError(LookupError):
    """No predictor registered for the requested algorithm family."""
    pass


class CollectorError(RuntimeError):
    """Errors related to metric collectors (Prometheus 등)."""
    pass


class UnknownMetricTypeError(CollectorError, LookupError):
    """Metric type was never registered with the collector."""
    pass


class CollectorConnectionError(CollectorError, ConnectionError):
    """Collector backend is unreachable or its address is malformed."""
    pass


class CollectionError(CollectorError):
    """Query execution against the backend failed."""
    pass


class AlgorithmError(RuntimeError):
    """Algorithm unit invocation failed."""
    pass


class AlgorithmTimeoutError(AlgorithmError, TimeoutError):
    def __init__(self, algorithm_path: str, timeout_ms: int):
        self.algorithm_path = algorithm_path
        self.timeout_ms = timeout_ms
        super().__init__(f"{algorithm_path} 실행 시간 초과 ({timeout_ms}ms)")


class AlgorithmExecutionError(AlgorithmError):
    """Unit exited abnormally. output에 stderr(없으면 stdout) 내용을 담는다."""

    def __init__(self, algorithm_path: str, returncode: int | None, output: str = ""):
        self.algorithm_path = algorithm_path
        self.returncode = returncode
        self.output = output
        detail = f": {output.strip()}" if output.strip() else ""
        super().__init__(f"{algorithm_path} 실행 실패 (exit={returncode}){detail}")


class SerializationError(ValueError):
    """Malformed algorithm request/response payload."""
    pass
