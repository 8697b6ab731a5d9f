# src/series_sum/errors.py
"""Exception hierarchy for series_sum.

SeriesSumError is the root. Exceptions raised by a producer itself are not
wrapped; they reach the caller unchanged.
"""


class SeriesSumError(Exception):
    """Root exception for the package."""


class InvalidArgument(SeriesSumError, TypeError, ValueError):
    """Producer or options rejected before any term is consumed."""


class ProducerFailure(SeriesSumError, TypeError):
    """Producer returned something that is not a real number, or ran out of terms early."""
