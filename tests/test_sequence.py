"""Tests for input validation in :mod:`randomtester.sequence` and the engine."""

from __future__ import annotations

import numpy as np
import pytest

from randomtester.engine import RandomnessTester
from randomtester.errors import InvalidInputError
from randomtester.sequence import SampleSequence


def test_empty_sequence_is_rejected() -> None:
    with pytest.raises(InvalidInputError):
        RandomnessTester([], 0, 255)


@pytest.mark.parametrize(("low", "high"), [(5, 5), (10, 3)])
def test_invalid_range_is_rejected(low: int, high: int) -> None:
    with pytest.raises(InvalidInputError):
        RandomnessTester([1, 2, 3], low, high)


def test_engine_keeps_independent_copy() -> None:
    samples = [1, 2, 3]
    tester = RandomnessTester(samples, 0, 10)

    samples.append(4)
    samples[0] = 9

    assert tester.sequence == (1, 2, 3)
    assert len(tester) == 3


def test_numpy_integers_are_accepted() -> None:
    tester = RandomnessTester(np.array([3, 1, 2], dtype=np.uint8), 0, 255)

    assert tester.sequence == (3, 1, 2)
    assert all(type(value) is int for value in tester.sequence)


def test_non_integer_samples_are_rejected() -> None:
    with pytest.raises(InvalidInputError):
        SampleSequence.from_values(["a", "b"], 0, 10)


@pytest.mark.parametrize("samples", [[1.7, 2.9], [1, "2"], [True, False], [np.float64(3.0)]])
def test_non_integral_samples_are_not_truncated(samples: list) -> None:
    with pytest.raises(InvalidInputError):
        RandomnessTester(samples, 0, 10)


@pytest.mark.parametrize(("low", "high"), [(0.2, 1.9), ("0", 10), (0, 10.0)])
def test_non_integral_range_bounds_are_rejected(low: object, high: object) -> None:
    with pytest.raises(InvalidInputError):
        RandomnessTester([1, 2], low, high)


def test_numpy_integer_range_bounds_are_accepted() -> None:
    tester = RandomnessTester([1, 2], np.int64(0), np.uint8(9))

    assert (tester.min_value, tester.max_value) == (0, 9)
    assert type(tester.max_value) is int


@pytest.mark.parametrize(
    ("samples", "low", "high"),
    [([2**70, 1], 0, 2**71), ([-(2**63) - 1, 0], -(2**64), 10), ([1, 2], 0, 2**63)],
)
def test_values_beyond_int64_are_rejected(samples: list[int], low: int, high: int) -> None:
    with pytest.raises(InvalidInputError, match="64-bit"):
        RandomnessTester(samples, low, high)


def test_int64_extremes_are_accepted() -> None:
    tester = RandomnessTester([-(2**63), 2**63 - 1], -(2**63), 2**63 - 1)

    assert tester.sequence == (-(2**63), 2**63 - 1)


def test_sample_sequence_reports_span_and_out_of_range_count() -> None:
    data = SampleSequence.from_values([-1, 0, 5, 10, 11], 0, 10)

    assert data.size == 5
    assert data.span == 11
    assert data.count_out_of_range() == 2


def test_array_view_is_read_only() -> None:
    data = SampleSequence.from_values([1, 2, 3], 0, 10)

    with pytest.raises(ValueError):
        data.as_array()[0] = 5
