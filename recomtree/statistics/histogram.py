"""Online histogram with running moments."""

from __future__ import annotations

import math

import numpy as np


class Histogram:
    """Fixed-width histogram over ``[min_value, max_value)``.

    Values outside the range land in the underflow/overflow counters but
    still contribute to the mean and standard deviation, which are kept
    with Welford's update.
    """

    def __init__(self, bins: int, min_value: float, max_value: float) -> None:
        if bins < 1:
            raise ValueError("bins must be at least 1")
        if max_value <= min_value:
            raise ValueError("max_value must exceed min_value")
        self.bins = int(bins)
        self.min_value = float(min_value)
        self.max_value = float(max_value)
        self.bin_width = (self.max_value - self.min_value) / self.bins
        self.clear()

    def clear(self) -> None:
        self.counts = np.zeros(self.bins, dtype=np.int64)
        self.underflow = 0
        self.overflow = 0
        self._count = 0
        self._mean = 0.0
        self._m2 = 0.0

    def add_value(self, value: float) -> None:
        value = float(value)
        if value < self.min_value:
            self.underflow += 1
        elif value >= self.max_value:
            self.overflow += 1
        else:
            index = int((value - self.min_value) / self.bin_width)
            self.counts[min(index, self.bins - 1)] += 1

        self._count += 1
        delta = value - self._mean
        self._mean += delta / self._count
        self._m2 += delta * (value - self._mean)

    def get_count(self) -> int:
        return self._count

    def get_mean(self) -> float:
        """Mean of all added values, or NaN if empty."""
        return self._mean if self._count else math.nan

    def get_stdev(self) -> float:
        """Population standard deviation of all added values, or NaN if empty."""
        if not self._count:
            return math.nan
        return math.sqrt(self._m2 / self._count)

    def bin_edges(self) -> np.ndarray:
        return np.linspace(self.min_value, self.max_value, self.bins + 1)

    def frequencies(self) -> np.ndarray:
        """In-range counts normalised by the total number of values."""
        if not self._count:
            return np.zeros(self.bins, dtype=np.float64)
        return self.counts / float(self._count)
