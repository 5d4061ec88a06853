"""Concrete implementations of the hypothesis tests and serial statistics."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..errors import InvalidArgumentError
from ..sequence import SampleSequence
from .base import DEFAULT_BINS, ChiSquareResult, HypothesisTest, RunsResult, TestResult
from .utils import chi_square_sf, count_runs, kolmogorov_sf, median, two_tailed_normal_p


@dataclass
class _BaseTest(HypothesisTest):
    name: str

    def run(self, data: SampleSequence) -> TestResult:  # pragma: no cover - abstract
        raise NotImplementedError


class KolmogorovSmirnovTest(_BaseTest):
    """Two-sided KS test against the uniform distribution over the declared range.

    The theoretical CDF at sample ``x`` is ``(x - min) / (max - min + 1)``;
    ``D`` is the largest deviation measured both just before and just after
    each step of the empirical CDF.
    """

    def __init__(self) -> None:
        super().__init__(name="kolmogorov_smirnov")

    def run(self, data: SampleSequence) -> TestResult:
        ordered = np.sort(data.as_array()).astype(float)
        n = ordered.size
        theoretical = (ordered - data.min_value) / data.span
        ranks = np.arange(1, n + 1, dtype=float)
        after = np.abs(ranks / n - theoretical)
        before = np.abs((ranks - 1) / n - theoretical)
        statistic = float(max(after.max(), before.max()))
        p_value = kolmogorov_sf(statistic, n)
        details = f"KS statistic D={statistic:.4f} on {n} samples."
        return TestResult(statistic=statistic, p_value=p_value, details=details)


class ChiSquareTest(_BaseTest):
    """Goodness-of-fit against a uniform histogram with ``bins`` equal-width cells."""

    def __init__(self, bins: int = DEFAULT_BINS) -> None:
        super().__init__(name="chi_square")
        self.bins = max(2, int(bins))

    def run(self, data: SampleSequence) -> ChiSquareResult:
        values = data.as_array()
        width = data.span / self.bins
        indices = np.floor((values - data.min_value) / width).astype(np.int64)
        # Samples outside the declared range land in the edge bins.
        indices = np.clip(indices, 0, self.bins - 1)
        observed = np.bincount(indices, minlength=self.bins)
        expected = values.size / self.bins
        statistic = float(np.sum((observed - expected) ** 2) / expected)
        p_value = chi_square_sf(statistic, self.bins - 1)
        details = f"Chi-square statistic {statistic:.2f} across {self.bins} bins."
        return ChiSquareResult(
            statistic=statistic,
            p_value=p_value,
            details=details,
            bins=self.bins,
            observed=tuple(int(count) for count in observed),
        )


class RunsTest(_BaseTest):
    """Wald–Wolfowitz runs test around the sample median."""

    def __init__(self) -> None:
        super().__init__(name="runs")

    def run(self, data: SampleSequence) -> RunsResult:
        values = data.as_array()
        n = values.size
        centre = median(values)
        labels = (values >= centre).astype(np.int8).tolist()
        above = sum(labels)
        below = n - above
        runs = count_runs(labels)

        if above == 0 or below == 0:
            return RunsResult(
                statistic=math.inf,
                p_value=0.0,
                details=f"All {n} samples fall on one side of the median {centre:g}.",
                runs=runs,
                above=above,
                below=below,
                median=centre,
                expected_runs=1.0,
            )

        product = 2.0 * above * below
        expected = product / n + 1
        variance = product * (product - n) / (n**2 * (n - 1))
        if variance <= 0:
            # Only reachable with one sample on each side, where runs == expected.
            z = 0.0
        else:
            z = abs(runs - expected) / math.sqrt(variance)
        p_value = two_tailed_normal_p(z)
        details = f"Observed {runs} runs with expectation {expected:.2f} (z={z:.3f})."
        return RunsResult(
            statistic=z,
            p_value=p_value,
            details=details,
            runs=runs,
            above=above,
            below=below,
            median=centre,
            expected_runs=expected,
        )


def serial_autocorrelation(values: np.ndarray, lag: int) -> float:
    """Lag-``lag`` autocorrelation of ``values``; zero for a constant sequence."""

    n = values.size
    if lag <= 0 or lag >= n:
        raise InvalidArgumentError(f"Lag must be in the range 1 .. {n - 1}, got {lag}.")
    deviations = values.astype(float) - values.mean()
    variance = float(np.dot(deviations, deviations))
    if variance == 0:
        return 0.0
    covariance = float(np.dot(deviations[:-lag], deviations[lag:]))
    return max(-1.0, min(1.0, covariance / variance))


__all__ = [
    "ChiSquareTest",
    "KolmogorovSmirnovTest",
    "RunsTest",
    "serial_autocorrelation",
]
