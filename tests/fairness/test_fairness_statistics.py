import numpy as np
import pytest

from fairjack.fairness.pcg import PcgRng
from fairjack.fairness.statistics import (
    audit_range_uniformity,
    audit_shuffle_positions,
    position_counts,
    sequential_seeds,
)


class Constant:
    """Shuffle source that never moves a card."""

    def randrange(self, start, stop=None):
        return stop - 1 if stop is not None else start - 1


def constant_factory(seed):
    return Constant()


def test_sequential_seeds_are_distinct():
    seeds = list(sequential_seeds(50))
    assert len(set(seeds)) == 50
    assert list(sequential_seeds(3, start=10)) == [PcgRng(i, i).to_seed() for i in range(10, 13)]


def test_position_counts_shape_and_totals():
    counts = position_counts(sequential_seeds(20), decks=2)
    assert counts.shape == (104, 104)
    assert np.all(counts.sum(axis=0) == 20)
    assert np.all(counts.sum(axis=1) == 20)


def test_identity_shuffle_counts_on_the_diagonal():
    counts = position_counts(sequential_seeds(5), rng_factory=constant_factory)
    assert np.array_equal(counts, np.eye(52, dtype=np.int64) * 5)


def test_pcg_shuffle_passes_position_audit():
    report = audit_shuffle_positions(sequential_seeds(2000))
    assert report.passed
    assert report.samples == 2000
    assert report.dof == 51 * 51


def test_stuck_shuffle_fails_position_audit():
    report = audit_shuffle_positions(sequential_seeds(200), rng_factory=constant_factory)
    assert not report.passed
    assert report.p_value < 1e-6


def test_position_audit_needs_samples():
    with pytest.raises(ValueError):
        audit_shuffle_positions([])


def test_range_uniformity():
    report = audit_range_uniformity(PcgRng(17, 3), 6, 6000)
    assert report.passed
    assert report.dof == 5
    assert report.to_dict()["samples"] == 6000


def test_biased_range_fails():
    class Lopsided:
        def randrange(self, bound):
            return 0

    report = audit_range_uniformity(Lopsided(), 6, 600)
    assert not report.passed


def test_range_needs_two_buckets():
    with pytest.raises(ValueError):
        audit_range_uniformity(PcgRng(1), 1, 10)
