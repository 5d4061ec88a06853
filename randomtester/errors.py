"""Custom exceptions for the sequence randomness tester."""

from __future__ import annotations


class RandomTesterError(Exception):
    """Base error type for randomness tester failures."""


class MissingFileError(RandomTesterError):
    """Raised when a required input or configuration file could not be read."""


class InvalidConfigurationError(RandomTesterError):
    """Raised when the configuration file is malformed or invalid."""


class InvalidInputError(RandomTesterError):
    """Raised when a sample sequence or its declared range is unusable."""


class EmptyInputFileError(InvalidInputError):
    """Raised when the input file does not contain any samples."""


class InputTooLargeError(InvalidInputError):
    """Raised when the input file exceeds the supported number of samples."""


class InvalidArgumentError(RandomTesterError):
    """Raised when a query receives a parameter outside its domain."""
