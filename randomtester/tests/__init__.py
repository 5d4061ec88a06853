"""Statistical hypothesis tests package."""

from .base import (
    DEFAULT_BINS,
    DEFAULT_SIGNIFICANCE_LEVEL,
    ChiSquareResult,
    HypothesisTest,
    RunsResult,
    TestResult,
)
from .statistical import (
    ChiSquareTest,
    KolmogorovSmirnovTest,
    RunsTest,
    serial_autocorrelation,
)

__all__ = [
    "ChiSquareResult",
    "ChiSquareTest",
    "DEFAULT_BINS",
    "DEFAULT_SIGNIFICANCE_LEVEL",
    "HypothesisTest",
    "KolmogorovSmirnovTest",
    "RunsResult",
    "RunsTest",
    "TestResult",
    "serial_autocorrelation",
]
