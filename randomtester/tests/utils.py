"""Utility helpers shared by the hypothesis tests."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from scipy import stats


def median(values: np.ndarray) -> float:
    """Middle value for odd sizes, mean of the two central values otherwise."""

    ordered = np.sort(values)
    n = ordered.size
    middle = n // 2
    if n % 2:
        return float(ordered[middle])
    return (float(ordered[middle - 1]) + float(ordered[middle])) / 2.0


def count_runs(labels: Sequence[int]) -> int:
    """Return the number of maximal blocks of identical labels."""

    if len(labels) == 0:
        return 0
    return 1 + sum(1 for idx in range(1, len(labels)) if labels[idx] != labels[idx - 1])


def chi_square_sf(statistic: float, degrees_of_freedom: int) -> float:
    """Upper tail probability of the chi-square distribution."""

    if statistic <= 0:
        return 1.0
    return clamp_probability(stats.chi2.sf(statistic, degrees_of_freedom))


def kolmogorov_sf(statistic: float, sample_size: int) -> float:
    """Asymptotic Kolmogorov tail probability for the KS statistic ``D``.

    Stephens' correction ``sqrt(n) + 0.12 + 0.11 / sqrt(n)`` keeps the
    approximation usable for small samples.  It does not make a single sample
    uninformative: for ``n = 1`` a mid-range value gives ``D = 0.5`` and a
    p-value near 0.84, while a value at the lower edge of the range gives
    ``D = 1`` and ``kstwobign.sf(1.23)``, roughly 0.097.
    """

    root_n = math.sqrt(sample_size)
    scaled = (root_n + 0.12 + 0.11 / root_n) * statistic
    return clamp_probability(stats.kstwobign.sf(scaled))


def two_tailed_normal_p(z: float) -> float:
    """Two-tailed standard normal tail probability at ``|z|``."""

    if math.isinf(z):
        return 0.0
    return clamp_probability(math.erfc(abs(z) / math.sqrt(2)))


def clamp_probability(value: float) -> float:
    return max(0.0, min(1.0, float(value)))
