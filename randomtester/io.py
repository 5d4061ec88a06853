"""Input helpers for reading integer sample files."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Tuple

from .errors import (
    EmptyInputFileError,
    InputTooLargeError,
    InvalidInputError,
    MissingFileError,
)

DEFAULT_MAX_ENTRIES = 100_000

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
SEPARATOR_PATTERN = re.compile(r"[\s,;]+")


def read_input_file(
    path: Path | str, *, max_entries: int | None = DEFAULT_MAX_ENTRIES
) -> Tuple[int, ...]:
    """Read integer samples from ``path`` using UTF-8 encoding.

    Samples may be separated by whitespace, commas or semicolons and spread
    over any number of lines. Blank lines are ignored.
    """

    candidate = _normalise_path(path)
    if not candidate.exists():
        raise MissingFileError(f"Input file not found: {candidate}")
    try:
        with candidate.open("r", encoding="utf-8") as handle:
            samples = parse_samples(handle)
    except OSError as exc:  # pragma: no cover - filesystem guard
        raise MissingFileError(f"Could not read input file: {candidate}") from exc
    except UnicodeDecodeError as exc:
        raise InvalidInputError(f"Input file '{candidate}' is not valid UTF-8.") from exc

    if not samples:
        raise EmptyInputFileError(f"Input file '{candidate}' does not contain any samples.")
    if max_entries is not None and len(samples) > max_entries:
        raise InputTooLargeError(
            f"Input file '{candidate}' has {len(samples)} samples, exceeding the allowed "
            f"maximum of {max_entries}."
        )
    return samples


def parse_samples(lines: Iterable[str]) -> Tuple[int, ...]:
    """Parse integer tokens from ``lines``, reporting the first bad token."""

    samples: List[int] = []
    for line_number, line in enumerate(lines, start=1):
        for token in SEPARATOR_PATTERN.split(line.strip()):
            if not token:
                continue
            if not INTEGER_PATTERN.fullmatch(token):
                raise InvalidInputError(f"Line {line_number}: '{token}' is not an integer.")
            samples.append(int(token))
    return tuple(samples)


def _normalise_path(path: Path | str) -> Path:
    return Path(path).expanduser().resolve()


__all__ = ["DEFAULT_MAX_ENTRIES", "parse_samples", "read_input_file"]
