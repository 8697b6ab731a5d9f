# src/series_sum/__init__.py
"""
series_sum: sum infinite (or caller-bounded) series term by term.

    from series_sum import sum_series
    sum_series(next_term)                         # until |term| < machine epsilon
    sum_series(next_term, {"maxTerms": 10})       # exactly ten terms
"""
from series_sum.accumulator import SeriesResult
from series_sum.errors import InvalidArgument, ProducerFailure, SeriesSumError
from series_sum.options import DEFAULT_TOLERANCE, MAX_TERMS, SeriesOptions
from series_sum.series import sum_series, sum_series_detailed

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_TOLERANCE",
    "MAX_TERMS",
    "InvalidArgument",
    "ProducerFailure",
    "SeriesOptions",
    "SeriesResult",
    "SeriesSumError",
    "sum_series",
    "sum_series_detailed",
]
