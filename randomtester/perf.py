"""Performance helpers for benchmarking and profiling the analysis pipeline."""

from __future__ import annotations

import cProfile
import io
import pstats
import statistics
import timeit
from contextlib import contextmanager
from typing import Callable, Iterator, Mapping, Sequence

from .analysis import analyse_sequence
from .app import RandomTesterApp
from .engine import RandomnessTester


def benchmark_analysis(
    samples: Sequence[int], min_value: int, max_value: int, *, repeat: int = 5
) -> Mapping[str, float]:
    """Benchmark a full :func:`analyse_sequence` run on a fresh engine each time."""

    cached_samples = tuple(samples)
    timer = timeit.Timer(
        lambda: analyse_sequence(RandomnessTester(cached_samples, min_value, max_value))
    )
    return _summarise(timer.repeat(repeat=repeat, number=1))


def benchmark_cached_queries(tester: RandomnessTester, *, repeat: int = 5) -> Mapping[str, float]:
    """Benchmark repeated hypothesis-test queries served from ``tester``'s cache."""

    tester.ks_result()
    tester.chi_square_result()
    tester.runs_result()

    def queries() -> None:
        tester.ks_p_value()
        tester.chi_square_p_value()
        tester.runs_p_value()

    timer = timeit.Timer(queries)
    return _summarise(timer.repeat(repeat=repeat, number=1))


@contextmanager
def capture_profile(
    app: RandomTesterApp | None = None,
) -> Iterator[tuple[RandomTesterApp, Callable[[int], str]]]:
    """Context manager capturing profiling data for manual inspection.

    The yielded tuple contains the :class:`RandomTesterApp` instance to use
    for the profiled operations and a callable that returns a formatted profile
    summary when invoked.
    """

    profiler = cProfile.Profile()
    target_app = app or RandomTesterApp()
    profiler.enable()

    def exporter(limit: int = 25) -> str:
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.strip_dirs().sort_stats("cumulative").print_stats(limit)
        return stream.getvalue()

    try:
        yield target_app, exporter
    finally:
        profiler.disable()


def _summarise(runs: Sequence[float]) -> Mapping[str, float]:
    return {
        "min": min(runs),
        "max": max(runs),
        "mean": statistics.fmean(runs),
    }


__all__ = ["benchmark_analysis", "benchmark_cached_queries", "capture_profile"]
