"""Fingerprint and pattern helpers over integer sample sequences."""

from __future__ import annotations

import zlib
from collections import defaultdict
from typing import Dict, List, Sequence

from .errors import InvalidArgumentError

NOT_FOUND = -1
"""Sentinel returned by :func:`find_pattern` when there is no match."""


def crc32_fingerprint(values: Sequence[int]) -> int:
    """CRC-32 over the low byte of every sample, in order.

    Not a cryptographic digest; it only tags a sequence compactly.
    """

    return zlib.crc32(bytes(value & 0xFF for value in values))


def find_pattern(values: Sequence[int], pattern: Sequence[int]) -> int:
    """Index of the first contiguous occurrence of ``pattern`` or ``NOT_FOUND``."""

    needle = tuple(pattern)
    if not needle:
        raise InvalidArgumentError("Pattern must contain at least one value.")
    size = len(needle)
    first = needle[0]
    for start in range(len(values) - size + 1):
        if values[start] == first and tuple(values[start : start + size]) == needle:
            return start
    return NOT_FOUND


def duplicate_positions(values: Sequence[int]) -> Dict[int, List[int]]:
    """Map every value seen at least twice to the ordered indices it occurs at."""

    positions: Dict[int, List[int]] = defaultdict(list)
    for index, value in enumerate(values):
        positions[value].append(index)
    return {value: indices for value, indices in positions.items() if len(indices) > 1}


def longest_repeat_run(values: Sequence[int]) -> int:
    """Length of the longest block of equal adjacent values."""

    if not values:
        return 0
    longest = current = 1
    for previous, value in zip(values, values[1:]):
        if value == previous:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


__all__ = [
    "NOT_FOUND",
    "crc32_fingerprint",
    "duplicate_positions",
    "find_pattern",
    "longest_repeat_run",
]
