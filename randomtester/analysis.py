"""Utilities for gathering engine results into a single analysis summary.

:class:`randomtester.engine.RandomnessTester` answers individual queries; this
module runs the configured hypothesis tests through one engine instance,
collects the descriptive statistics alongside them and decides the overall
verdict.

Two thresholds matter here:

``alpha``
    The per-test significance level.  A test is considered to *pass* when
    ``p_value > alpha``.  Defaults to :data:`DEFAULT_SIGNIFICANCE_LEVEL`.

``overall verdict``
    The sequence is reported as random only when every enabled hypothesis
    test passes.  Autocorrelation, longest run and the CRC-32 fingerprint are
    descriptive and never affect the verdict.

Notes are attached to the summary metadata when the input needs extra
scrutiny, for example when samples fall outside the declared range or a
configured lag does not fit the sequence length.  Reporting layers render
these notes verbatim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence, Tuple

from .engine import RandomnessTester
from .tests.base import DEFAULT_BINS, DEFAULT_SIGNIFICANCE_LEVEL, validate_alpha
from .tests.factory import DEFAULT_TESTS, TestRunner

LOGGER = logging.getLogger(__name__)

OUT_OF_RANGE_NOTE = (
    "{count} of {total} samples lie outside the declared range [{low}, {high}]; "
    "they were counted in the edge bins of the chi-square histogram."
)
"""Note attached when the declared range does not cover every sample."""

SKIPPED_LAG_NOTE = "Autocorrelation at lag {lag} skipped: sequence has only {total} samples."
"""Note attached when a configured lag is not smaller than the sequence size."""


@dataclass(frozen=True)
class HypothesisOutcome:
    """Outcome of a single hypothesis test evaluated at ``threshold``."""

    name: str
    statistic: float
    p_value: float
    passed: bool
    threshold: float
    details: str


@dataclass(frozen=True)
class AnalysisSummary:
    """Aggregate view of every statistic computed for one sequence."""

    count: int
    min_value: int
    max_value: int
    passed: bool
    threshold: float
    tests: Tuple[HypothesisOutcome, ...]
    autocorrelations: Tuple[Tuple[int, float], ...]
    longest_run: int
    crc32: int
    duplicated_values: int
    metadata: Tuple[str, ...] = field(default_factory=tuple)


def analyse_sequence(
    tester: RandomnessTester,
    tests: Sequence[Tuple[str, TestRunner]] | None = None,
    *,
    alpha: float = DEFAULT_SIGNIFICANCE_LEVEL,
    bins: int = DEFAULT_BINS,
    lags: Iterable[int] = (1,),
) -> AnalysisSummary:
    """Run ``tests`` through ``tester`` and summarise the results.

    Parameters
    ----------
    tester:
        Engine built for the sequence under analysis.  Its cached results are
        reused, so callers may keep querying it afterwards at no extra cost.
    tests:
        Sequence of ``(name, runner)`` pairs, as returned by
        :func:`randomtester.tests.factory.build_test_suite`.  Defaults to every
        registered test.
    alpha:
        Per-test significance level.
    bins:
        Bin count for the chi-square test.
    lags:
        Autocorrelation lags to report.  Lags that do not fit the sequence are
        skipped with a note.
    """

    validate_alpha(alpha)
    active = list(tests) if tests is not None else list(DEFAULT_TESTS.items())
    total = len(tester)
    metadata: list[str] = []

    outside = tester.count_out_of_range()
    if outside:
        metadata.append(
            OUT_OF_RANGE_NOTE.format(
                count=outside, total=total, low=tester.min_value, high=tester.max_value
            )
        )

    outcomes: list[HypothesisOutcome] = []
    for name, runner in active:
        result = runner(tester, bins)
        outcomes.append(
            HypothesisOutcome(
                name=name,
                statistic=result.statistic,
                p_value=result.p_value,
                passed=result.passed(alpha),
                threshold=alpha,
                details=result.details,
            )
        )
        LOGGER.debug("Test %s: p=%.4f", name, result.p_value)

    autocorrelations: list[Tuple[int, float]] = []
    for lag in lags:
        if lag >= total:
            metadata.append(SKIPPED_LAG_NOTE.format(lag=lag, total=total))
            continue
        autocorrelations.append((lag, tester.autocorrelation(lag)))

    passed = bool(outcomes) and all(outcome.passed for outcome in outcomes)
    return AnalysisSummary(
        count=total,
        min_value=tester.min_value,
        max_value=tester.max_value,
        passed=passed,
        threshold=alpha,
        tests=tuple(outcomes),
        autocorrelations=tuple(autocorrelations),
        longest_run=tester.longest_repeat_run(),
        crc32=tester.crc32(),
        duplicated_values=len(tester.duplicate_positions()),
        metadata=tuple(metadata),
    )


__all__ = [
    "DEFAULT_SIGNIFICANCE_LEVEL",
    "OUT_OF_RANGE_NOTE",
    "SKIPPED_LAG_NOTE",
    "AnalysisSummary",
    "HypothesisOutcome",
    "analyse_sequence",
]
