from __future__ import annotations

import math
import numbers
from typing import Iterable, Sequence

import numpy as np

from wsbench.metrics.models import StreamStats

REPORT_PERCENTILES: tuple[float, ...] = (50, 66, 75, 80, 90, 95, 98, 99, 100)


class SampleStream:
    """Append-only collection of numeric samples.

    Every sample is retained, so memory grows with the run; order statistics
    sort the retained values once per query.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[float] = ()) -> None:
        self._values: list[float] = []
        for value in values:
            self.push(value)

    def __len__(self) -> int:
        return len(self._values)

    def push(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            msg = f"Samples must be real numbers, got {value!r}"
            raise TypeError(msg)
        value = float(value)
        if value < 0 or not math.isfinite(value):
            msg = f"Samples must be finite non-negative numbers, got {value}"
            raise ValueError(msg)
        self._values.append(value)

    def percentiles(self, qs: Sequence[float]) -> dict[float, float]:
        if not self._values or not qs:
            return {}
        results = np.percentile(self._values, list(qs))
        return {float(q): float(v) for q, v in zip(qs, results)}

    def percentile(self, q: float) -> float | None:
        return self.percentiles([q]).get(float(q))

    def median(self) -> float | None:
        if not self._values:
            return None
        return float(np.median(self._values))

    def stats(self, qs: Sequence[float] = REPORT_PERCENTILES) -> StreamStats:
        if not self._values:
            return StreamStats(0, None, None, None, None, None)
        values = np.asarray(self._values)
        return StreamStats(
            count=len(values),
            minimum=float(values.min()),
            maximum=float(values.max()),
            mean=float(values.mean()),
            stddev=float(values.std()),
            median=float(np.median(values)),
            percentiles=self.percentiles(qs),
        )
