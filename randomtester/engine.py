"""Randomness testing engine for integer sample sequences.

:class:`RandomnessTester` validates a sequence once and answers queries about
it: Kolmogorov–Smirnov, binned chi-square and Wald–Wolfowitz runs hypothesis
tests, serial autocorrelation, and fingerprint/pattern helpers.

The three hypothesis tests are memoised per instance.  Each cache slot is
filled on first use and never invalidated; chi-square results are keyed by
bin count.  Concurrent readers may race to fill a slot, which is harmless
because every computation is deterministic.

p-values come from the exact tail of the reference distribution (chi-square
and Kolmogorov via SciPy, normal via :func:`math.erfc`).  A test *passes*
when ``p_value > alpha``.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from . import patterns
from .sequence import SampleSequence
from .tests.base import (
    DEFAULT_BINS,
    DEFAULT_SIGNIFICANCE_LEVEL,
    ChiSquareResult,
    RunsResult,
    TestResult,
)
from .tests.statistical import (
    ChiSquareTest,
    KolmogorovSmirnovTest,
    RunsTest,
    serial_autocorrelation,
)

LOGGER = logging.getLogger(__name__)


class RandomnessTester:
    """Statistical checks over one sequence and its declared inclusive range."""

    def __init__(self, sequence: Iterable[int], min_value: int, max_value: int) -> None:
        self._data = SampleSequence.from_values(sequence, min_value, max_value)
        self._array = self._data.as_array()
        self._ks: Optional[TestResult] = None
        self._runs: Optional[RunsResult] = None
        self._chi_square: Dict[int, ChiSquareResult] = {}

    # ------------------------------------------------------------------
    # Validated state
    # ------------------------------------------------------------------
    @property
    def data(self) -> SampleSequence:
        return self._data

    @property
    def sequence(self) -> Tuple[int, ...]:
        return self._data.values

    @property
    def min_value(self) -> int:
        return self._data.min_value

    @property
    def max_value(self) -> int:
        return self._data.max_value

    def __len__(self) -> int:
        return self._data.size

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n={self._data.size}, "
            f"range=[{self.min_value}, {self.max_value}])"
        )

    # ------------------------------------------------------------------
    # Kolmogorov–Smirnov
    # ------------------------------------------------------------------
    def ks_result(self) -> TestResult:
        if self._ks is None:
            self._ks = KolmogorovSmirnovTest().run(self._data)
            LOGGER.debug("Computed KS test: %s", self._ks.details)
        return self._ks

    def ks_statistic(self) -> float:
        return self.ks_result().statistic

    def ks_p_value(self) -> float:
        return self.ks_result().p_value

    def kolmogorov_smirnov(
        self, alpha: float = DEFAULT_SIGNIFICANCE_LEVEL
    ) -> Tuple[float, float, bool]:
        """Return ``(D, p_value, passed)`` for the uniformity KS test."""

        result = self.ks_result()
        return result.statistic, result.p_value, result.passed(alpha)

    def kolmogorov_smirnov_test(self, alpha: float = DEFAULT_SIGNIFICANCE_LEVEL) -> bool:
        return self.ks_result().passed(alpha)

    # ------------------------------------------------------------------
    # Chi-square
    # ------------------------------------------------------------------
    def chi_square_result(self, bins: int = DEFAULT_BINS) -> ChiSquareResult:
        """Chi-square result for ``bins`` cells; values below 2 are raised to 2."""

        key = max(2, int(bins))
        cached = self._chi_square.get(key)
        if cached is None:
            cached = ChiSquareTest(bins=key).run(self._data)
            self._chi_square[key] = cached
            LOGGER.debug("Computed chi-square test: %s", cached.details)
        return cached

    def chi_square_statistic(self, bins: int = DEFAULT_BINS) -> float:
        return self.chi_square_result(bins).statistic

    def chi_square_p_value(self, bins: int = DEFAULT_BINS) -> float:
        return self.chi_square_result(bins).p_value

    def chi_square(
        self, bins: int = DEFAULT_BINS, alpha: float = DEFAULT_SIGNIFICANCE_LEVEL
    ) -> Tuple[float, float, bool]:
        """Return ``(statistic, p_value, passed)`` for the binned chi-square test."""

        result = self.chi_square_result(bins)
        return result.statistic, result.p_value, result.passed(alpha)

    def chi_square_test(
        self, bins: int = DEFAULT_BINS, alpha: float = DEFAULT_SIGNIFICANCE_LEVEL
    ) -> bool:
        return self.chi_square_result(bins).passed(alpha)

    # ------------------------------------------------------------------
    # Wald–Wolfowitz runs
    # ------------------------------------------------------------------
    def runs_result(self) -> RunsResult:
        if self._runs is None:
            self._runs = RunsTest().run(self._data)
            LOGGER.debug("Computed runs test: %s", self._runs.details)
        return self._runs

    def runs_z(self) -> float:
        return self.runs_result().statistic

    def runs_p_value(self) -> float:
        return self.runs_result().p_value

    def runs(self, alpha: float = DEFAULT_SIGNIFICANCE_LEVEL) -> Tuple[float, float, bool]:
        """Return ``(z, p_value, passed)`` for the runs test."""

        result = self.runs_result()
        return result.statistic, result.p_value, result.passed(alpha)

    def runs_test(self, alpha: float = DEFAULT_SIGNIFICANCE_LEVEL) -> bool:
        return self.runs_result().passed(alpha)

    # ------------------------------------------------------------------
    # Serial statistics and fingerprints
    # ------------------------------------------------------------------
    def autocorrelation(self, lag: int = 1) -> float:
        """Pearson-style autocorrelation at ``lag`` (``1 <= lag < n``)."""

        return serial_autocorrelation(self._array, lag)

    def crc32(self) -> int:
        return patterns.crc32_fingerprint(self._data.values)

    def find_pattern(self, pattern: Sequence[int]) -> int:
        """First index where ``pattern`` occurs contiguously, or ``-1``."""

        return patterns.find_pattern(self._data.values, pattern)

    def duplicate_positions(self) -> Dict[int, List[int]]:
        return patterns.duplicate_positions(self._data.values)

    def longest_repeat_run(self) -> int:
        return patterns.longest_repeat_run(self._data.values)

    def count_out_of_range(self) -> int:
        """Number of samples lying outside the declared range."""

        return self._data.count_out_of_range()


__all__ = ["RandomnessTester"]
