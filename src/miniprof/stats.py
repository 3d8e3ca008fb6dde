# MIT License (see LICENSE)
"""
Running statistics for one instrumented segment.

The mean is updated sample by sample instead of dividing a running sum at
the end. Raw samples are kept because the mean absolute deviation is taken
against the final mean, which is only known once every sample is in.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np


@dataclass
class SegmentStats:
    """
    Accumulates duration samples (integer nanoseconds) for one segment key.

    Attributes:
        count: Number of samples folded in.
        mean: Running arithmetic mean in nanoseconds.
        min: Smallest sample seen.
        max: Largest sample seen.
        samples: Every sample in fold order.

    Frame records only create an accumulator together with its first sample
    (see `first`), so a stored accumulator always has count >= 1.
    """
    count: int = 0
    mean: float = 0.0
    min: int = 0
    max: int = 0
    samples: list[int] = field(default_factory=list)

    @classmethod
    def first(cls, sample: int) -> "SegmentStats":
        """Create an accumulator holding a single sample."""
        stats = cls()
        stats.fold(sample)
        return stats

    @classmethod
    def from_samples(cls, samples: Iterable[int]) -> "SegmentStats":
        """Fold every sample of an iterable, in order."""
        stats = cls()
        for s in samples:
            stats.fold(s)
        return stats

    def fold(self, sample: int) -> None:
        """
        Incorporate one more duration.

        Raises:
            ValueError: If sample is negative.
        """
        sample = int(sample)
        if sample < 0:
            raise ValueError(f"duration must be non-negative, got {sample}")
        self.count += 1
        if self.count == 1:
            self.mean = float(sample)
            self.min = sample
            self.max = sample
        else:
            self.mean += (sample - self.mean) / self.count
            if sample < self.min:
                self.min = sample
            if sample > self.max:
                self.max = sample
        self.samples.append(sample)

    @property
    def total(self) -> float:
        """Aggregate time spent in the segment: count * mean."""
        return self.count * self.mean

    @property
    def mean_absolute_deviation(self) -> float:
        """
        Mean of |sample - mean| over all samples, against the final mean.

        Raises:
            ValueError: If no sample has been folded yet.
        """
        if self.count == 0:
            raise ValueError("mean absolute deviation of an empty accumulator")
        arr = np.asarray(self.samples, dtype=np.float64)
        return float(np.mean(np.abs(arr - self.mean)))
