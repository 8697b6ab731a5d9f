# src/series_sum/series.py
from __future__ import annotations

from typing import Any

from series_sum.accumulator import SeriesResult, accumulate
from series_sum.options import OptionsLike, resolve_options, validate_producer
from series_sum.terms import Producer, term_source


def sum_series_detailed(producer: Producer, options: OptionsLike = None, **overrides: Any) -> SeriesResult:
    """
    Sum the series produced by `producer` and report how accumulation ended.
    Producer and options are validated before the first term is requested.
    """
    validate_producer(producer)
    opts = resolve_options(options, **overrides)
    return accumulate(term_source(producer), opts)


def sum_series(producer: Producer, options: OptionsLike = None, **overrides: Any) -> float:
    """
    Sum of the series whose successive terms come from calling `producer`.

    >>> def counter():
    ...     k = 0
    ...     def next_term():
    ...         nonlocal k
    ...         k += 1
    ...         return k
    ...     return next_term
    >>> sum_series(counter(), max_terms=3)
    6.0
    """
    return sum_series_detailed(producer, options, **overrides).value
