"""Validated, immutable sample sequences."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from .errors import InvalidInputError

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)


@dataclass(frozen=True)
class SampleSequence:
    """Integer samples together with the inclusive range they are drawn from.

    The range is declared by the caller and is not checked against the
    samples themselves.
    """

    values: Tuple[int, ...]
    min_value: int
    max_value: int

    def __post_init__(self) -> None:
        if not self.values:
            raise InvalidInputError("Sample sequence must not be empty.")
        if self.min_value >= self.max_value:
            raise InvalidInputError(
                f"Declared range is invalid: min ({self.min_value}) must be less than "
                f"max ({self.max_value})."
            )
        for bound in (self.min_value, self.max_value, min(self.values), max(self.values)):
            if not INT64_MIN <= bound <= INT64_MAX:
                raise InvalidInputError(
                    f"Value {bound} is outside the supported 64-bit range "
                    f"[{INT64_MIN}, {INT64_MAX}]."
                )

    @classmethod
    def from_values(
        cls, values: Iterable[int], min_value: int, max_value: int
    ) -> "SampleSequence":
        """Copy ``values`` into a new validated sequence."""

        copied = tuple(_as_integer(value, "Sample") for value in values)
        return cls(
            values=copied,
            min_value=_as_integer(min_value, "Range minimum"),
            max_value=_as_integer(max_value, "Range maximum"),
        )

    @property
    def size(self) -> int:
        return len(self.values)

    @property
    def span(self) -> int:
        """Number of distinct integers in the declared range."""

        return self.max_value - self.min_value + 1

    def as_array(self) -> np.ndarray:
        """Return a read-only ``int64`` array holding the samples."""

        array = np.asarray(self.values, dtype=np.int64)
        array.setflags(write=False)
        return array

    def count_out_of_range(self) -> int:
        array = self.as_array()
        return int(np.count_nonzero((array < self.min_value) | (array > self.max_value)))


def _as_integer(value: object, label: str) -> int:
    # bool subclasses int but is not a sample.
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInputError(f"{label} {value!r} is not an integer.")
    return int(value)


__all__ = ["SampleSequence"]
