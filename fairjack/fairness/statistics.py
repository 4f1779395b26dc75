"""
Statistical audit of the shuffle.

A fair shuffle puts every card in every position equally often. These checks
run many seeded shuffles (or many bounded draws) and test the observed counts
against the uniform expectation with a chi-square test, so a biased shuffle
or a broken generator shows up as a vanishing p-value.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import numpy as np
import scipy.stats as stats

from fairjack.common.deck import Deck
from fairjack.fairness.pcg import PcgRng, Seed

DEFAULT_SIGNIFICANCE = 0.001


@dataclass
class UniformityReport:
    """
    Outcome of a chi-square uniformity test.

    Attributes:
        statistic: The chi-square statistic
        p_value: Probability of a statistic at least this large under uniformity
        dof: Degrees of freedom
        samples: Number of shuffles or draws that were counted
        passed: Whether the p-value is at or above the significance level
    """

    statistic: float
    p_value: float
    dof: int
    samples: int
    passed: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary."""
        return {
            "statistic": self.statistic,
            "p_value": self.p_value,
            "dof": self.dof,
            "samples": self.samples,
            "passed": self.passed,
        }


def position_counts(seeds: Iterable[Seed], decks: int = 1, rng_factory=PcgRng.from_seed) -> np.ndarray:
    """
    Count how often each card of a fresh deck lands in each position.

    Returns:
        A square matrix; row ``i`` is the card at index ``i`` of an unshuffled
        deck, column ``j`` the position it ended up in.
    """
    size = Deck(decks).size
    counts = np.zeros((size, size), dtype=np.int64)
    origin = np.arange(size)
    for seed in seeds:
        deck = Deck(cards=list(range(size)))
        deck.shuffle(rng_factory(seed))
        counts[np.asarray(deck.cards), origin] += 1
    return counts


def audit_shuffle_positions(
    seeds: Iterable[Seed],
    decks: int = 1,
    significance: float = DEFAULT_SIGNIFICANCE,
    rng_factory=PcgRng.from_seed,
) -> UniformityReport:
    """
    Test independence of card and final position over many shuffles.

    Args:
        seeds: One seed per shuffle
        decks: Number of 52-card decks per shuffle
        significance: Level below which the shuffle is reported as biased
        rng_factory: Builds a shuffle source from a seed
    """
    counts = position_counts(seeds, decks, rng_factory)
    samples = int(counts[:, 0].sum())
    if samples == 0:
        raise ValueError("At least one shuffle is needed for an audit")
    statistic, p_value, dof, _ = stats.chi2_contingency(counts, correction=False)
    return UniformityReport(
        statistic=float(statistic),
        p_value=float(p_value),
        dof=int(dof),
        samples=samples,
        passed=bool(p_value >= significance),
    )


def audit_range_uniformity(
    rng: PcgRng,
    bound: int,
    samples: int,
    significance: float = DEFAULT_SIGNIFICANCE,
) -> UniformityReport:
    """
    Test that ``rng.randrange(bound)`` hits every bucket equally often.
    """
    if bound < 2:
        raise ValueError("Need at least two buckets")
    draws = np.fromiter((rng.randrange(bound) for _ in range(samples)), dtype=np.int64, count=samples)
    observed = np.bincount(draws, minlength=bound)
    statistic, p_value = stats.chisquare(observed)
    return UniformityReport(
        statistic=float(statistic),
        p_value=float(p_value),
        dof=bound - 1,
        samples=samples,
        passed=bool(p_value >= significance),
    )


def sequential_seeds(count: int, start: int = 0, sequence: Optional[int] = None):
    """
    Derive ``count`` distinct seeds from consecutive generator seeds.
    """
    for i in range(start, start + count):
        yield PcgRng(i, i if sequence is None else sequence).to_seed()
