# forecast_engine/core/history.py

"""
Bounded history containers.

역할:
- MetricHistory: 수집된 메트릭을 시간순(삽입순)으로 보관한다.
  prune 시 가장 오래된 쪽에서만 제거(FIFO)하고 순서는 절대 바꾸지 않는다.
- ReplicaHistory: 과거 replica 결정 기록. prune 시 최신순 정렬 후 뒤쪽(오래된 것)을 잘라낸다.
  삽입 순서가 시간순이 아닐 수 있는 알고리즘 계열을 위해 정렬 후 자르는 방식을 유지한다.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Iterator, List

from forecast_engine.models.common import TimestampedMetric, TimestampedReplicas


class MetricHistory:
    def __init__(self, samples: Iterable[TimestampedMetric] = ()):
        self._items: Deque[TimestampedMetric] = deque(samples)

    def extend(self, samples: Iterable[TimestampedMetric]) -> None:
        self._items.extend(samples)

    def prune(self, size: int) -> int:
        """len <= size가 될 때까지 앞에서부터 제거하고, 제거한 개수를 반환한다."""
        if size < 0:
            raise ValueError("size 값은 0 이상이어야 함")
        removed = 0
        while len(self._items) > size:
            self._items.popleft()
            removed += 1
        return removed

    def latest(self, n: int) -> List[TimestampedMetric]:
        """가장 최근 n개를 시간순으로 반환한다."""
        if n <= 0:
            return []
        start = max(0, len(self._items) - n)
        return [self._items[i] for i in range(start, len(self._items))]

    def to_list(self) -> List[TimestampedMetric]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TimestampedMetric]:
        return iter(self._items)


class ReplicaHistory:
    def __init__(self, entries: Iterable[TimestampedReplicas] = ()):
        self._items: List[TimestampedReplicas] = list(entries)

    def extend(self, entries: Iterable[TimestampedReplicas]) -> None:
        self._items.extend(entries)

    def prune(self, size: int) -> int:
        """
        최신순으로 정렬한 뒤 size 개만 남긴다.

        정렬은 안정 정렬이므로 같은 시각의 항목은 삽입 순서를 유지한다.
        """
        if size < 0:
            raise ValueError("size 값은 0 이상이어야 함")
        self._items.sort(key=lambda entry: entry.time, reverse=True)
        removed = max(0, len(self._items) - size)
        del self._items[size:]
        return removed

    def newest(self, n: int) -> List[TimestampedReplicas]:
        """최신순 n개 (내부 순서는 바꾸지 않음)."""
        return sorted(self._items, key=lambda entry: entry.time, reverse=True)[: max(n, 0)]

    def to_list(self) -> List[TimestampedReplicas]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TimestampedReplicas]:
        return iter(self._items)
