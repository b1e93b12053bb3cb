"""Bounded sliding window of metric samples.

The generator never retains history. The dashboard keeps recent samples in
a SlidingWindow whose capacity is derived from the selected retention
(``floor(minutes * 60000 / interval_ms)``). Appending beyond capacity
evicts the oldest sample, which keeps memory flat under indefinite live
operation.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator

import pandas as pd

from infrawatch.metrics.generator import sample_count
from infrawatch.metrics.sample import (
    DEFAULT_ERROR_RATE_THRESHOLD,
    METRIC_FIELDS,
    MetricSample,
)


class SlidingWindow:
    """Oldest-first evicting buffer of MetricSamples.

    Args:
        max_samples: Capacity. Zero is allowed and retains nothing.

    Raises:
        ValueError: If max_samples is negative.
    """

    def __init__(self, max_samples: int):
        if max_samples < 0:
            raise ValueError(f"max_samples must be non-negative, got {max_samples}")
        self._samples: deque[MetricSample] = deque(maxlen=max_samples)

    @classmethod
    def for_retention(cls, minutes: float, interval_ms: int) -> SlidingWindow:
        """Window sized to hold ``minutes`` of samples at ``interval_ms``."""
        return cls(sample_count(minutes, interval_ms))

    @property
    def max_samples(self) -> int:
        return self._samples.maxlen or 0

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[MetricSample]:
        return iter(self._samples)

    def append(self, sample: MetricSample) -> None:
        self._samples.append(sample)

    def extend(self, samples: Iterable[MetricSample]) -> None:
        self._samples.extend(samples)

    def replace(self, samples: Iterable[MetricSample]) -> None:
        """Discard the current contents and load ``samples`` (newest kept)."""
        self._samples.clear()
        self._samples.extend(samples)

    def resize(self, max_samples: int) -> None:
        """Change capacity, keeping the newest samples that still fit."""
        if max_samples < 0:
            raise ValueError(f"max_samples must be non-negative, got {max_samples}")
        self._samples = deque(self._samples, maxlen=max_samples)

    def clear(self) -> None:
        self._samples.clear()

    @property
    def samples(self) -> tuple[MetricSample, ...]:
        """Immutable copy of the contents, oldest first."""
        return tuple(self._samples)

    @property
    def latest(self) -> MetricSample | None:
        return self._samples[-1] if self._samples else None

    def error_alerts(
        self, threshold: float = DEFAULT_ERROR_RATE_THRESHOLD
    ) -> list[MetricSample]:
        """Samples whose error rate is above ``threshold``."""
        return [s for s in self._samples if s.is_error_alert(threshold)]

    def to_dataframe(self) -> pd.DataFrame:
        """Contents as a DataFrame indexed by UTC sample time.

        Columns are ``timestamp`` followed by every metric field.
        """
        columns = ["timestamp", *METRIC_FIELDS]
        df = pd.DataFrame([s.to_dict() for s in self._samples], columns=columns)
        df.index = pd.DatetimeIndex(
            pd.to_datetime(df["timestamp"].astype("int64"), unit="ms", utc=True)
        )
        df.index.name = "time"
        return df
