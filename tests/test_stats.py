import numpy as np
import pytest

from miniprof.stats import SegmentStats


def test_three_samples():
    """100, 200, 300 ns: mean 200, MAD 66.67, range 100..300."""
    s = SegmentStats.from_samples([100, 200, 300])
    assert s.count == 3
    assert s.mean == pytest.approx(200.0)
    assert s.mean_absolute_deviation == pytest.approx(200.0 / 3)
    assert s.min == 100
    assert s.max == 300
    assert s.total == pytest.approx(600.0)


def test_incremental_state_valid_after_each_fold():
    s = SegmentStats.first(50)
    assert (s.count, s.mean, s.min, s.max) == (1, 50.0, 50, 50)
    s.fold(10)
    assert (s.count, s.min, s.max) == (2, 10, 50)
    assert s.mean == pytest.approx(30.0)
    s.fold(90)
    assert (s.count, s.min, s.max) == (3, 10, 90)
    assert s.mean == pytest.approx(50.0)


def test_matches_two_pass_reference():
    """Mean and MAD agree with a direct computation over the same samples."""
    rng = np.random.default_rng(12345)
    samples = rng.integers(0, 5_000_000, size=2000)
    s = SegmentStats.from_samples(samples.tolist())

    mean = samples.sum() / len(samples)
    mad = np.abs(samples - mean).sum() / len(samples)

    assert s.count == len(samples)
    assert s.min == samples.min()
    assert s.max == samples.max()
    assert s.mean == pytest.approx(mean, rel=1e-9)
    assert s.mean_absolute_deviation == pytest.approx(mad, rel=1e-9)


def test_order_independent():
    rng = np.random.default_rng(7)
    samples = rng.integers(0, 10_000, size=500).tolist()
    shuffled = list(samples)
    rng.shuffle(shuffled)

    a = SegmentStats.from_samples(samples)
    b = SegmentStats.from_samples(shuffled)
    assert a.mean == pytest.approx(b.mean, rel=1e-9)
    assert a.mean_absolute_deviation == pytest.approx(b.mean_absolute_deviation, rel=1e-9)
    assert (a.min, a.max, a.count) == (b.min, b.max, b.count)


def test_mad_uses_final_mean():
    """
    A streaming MAD against intermediate means gives a different answer for
    a skewed sequence; the accumulator must not.
    """
    samples = [0, 0, 0, 1000]
    s = SegmentStats.from_samples(samples)
    # final mean 250 -> |d| = 250, 250, 250, 750
    assert s.mean_absolute_deviation == pytest.approx(375.0)


def test_large_durations():
    """Hour-long samples fold without overflow or precision loss in min/max."""
    hour = 3_600 * 10**9
    s = SegmentStats.from_samples([hour] * 1000 + [hour + 1])
    assert s.max == hour + 1
    assert s.mean == pytest.approx(hour, rel=1e-12)


def test_negative_sample_rejected():
    s = SegmentStats.first(10)
    with pytest.raises(ValueError):
        s.fold(-1)
    assert s.count == 1


def test_empty_accumulator_has_no_mad():
    with pytest.raises(ValueError):
        SegmentStats().mean_absolute_deviation
