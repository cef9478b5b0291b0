"""Bounded sample history backing the dashboard chart."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from robobat.constants import HISTORY_CAPACITY
from robobat.simulation.models import HistorySample


class HistoryBuffer:
    """FIFO of the most recent samples, oldest first.

    Appending past capacity evicts from the front. There is no other way
    to remove samples; readers get immutable snapshots.
    """

    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._samples: deque[HistorySample] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._samples.maxlen or 0

    def append(self, sample: HistorySample) -> None:
        self._samples.append(sample)

    @property
    def samples(self) -> tuple[HistorySample, ...]:
        """All samples in chronological order."""
        return tuple(self._samples)

    @property
    def latest(self) -> HistorySample | None:
        return self._samples[-1] if self._samples else None

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[HistorySample]:
        return iter(self.samples)
