# kp_bench/exceptions.py
"""Errors raised by the knapsack components."""


class KnapsackError(Exception):
    """Base class for every error raised by kp_bench."""


class InvalidInstanceError(KnapsackError, ValueError):
    """Raised when values, weights or capacity do not describe a valid instance."""


class StoreSizeError(KnapsackError, ValueError):
    """Raised when a value store is created with a non-positive table size."""


class EmptyHeapError(KnapsackError, IndexError):
    """Raised when the maximum is extracted from an empty heap."""
