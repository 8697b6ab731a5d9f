# src/series_sum/terms.py
"""
Term sources: uniform, lazy, single-pass views over a term producer.

Two interchangeable strategies:
  • cooperative_terms : a generator; suspends after each yielded term and the
                        consumer decides when to resume.
  • DirectTermSource  : an iterator whose __next__ calls the producer directly.

Both pass every term through _as_term, so for the same producer they hand the
accumulator exactly the same floats. A producer may be a zero-argument callable
or an iterator (e.g. a generator object); StopIteration from either ends the
source.
"""
from __future__ import annotations

import logging
import math
import numbers
from typing import Any, Callable, Iterator, Optional, Union

from series_sum import capability
from series_sum.errors import ProducerFailure

logger = logging.getLogger(__name__)

Producer = Union[Callable[[], float], Iterator[float]]


def _as_term(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ProducerFailure("producer returned a non-real term: %r" % (value,))
    try:
        term = float(value)
    except OverflowError as e:
        raise ProducerFailure("producer returned a term too large for a float") from e
    if not math.isfinite(term):
        raise ProducerFailure("producer returned a non-finite term: %r" % (term,))
    return term


def _next_callable(producer: Producer) -> Callable[[], Any]:
    if callable(producer):
        return producer
    return producer.__next__


def cooperative_terms(producer: Producer) -> Iterator[float]:
    step = _next_callable(producer)
    while True:
        try:
            value = step()
        except StopIteration:
            return
        yield _as_term(value)


class DirectTermSource:
    """Iterator that calls the producer on every __next__; no suspension."""

    def __init__(self, producer: Producer) -> None:
        self._step = _next_callable(producer)

    def __iter__(self) -> "DirectTermSource":
        return self

    def __next__(self) -> float:
        return _as_term(self._step())


def term_source(producer: Producer, cooperative: Optional[bool] = None) -> Iterator[float]:
    """
    Wrap `producer` in a term source. cooperative=None defers to the
    capability flag resolved at import time.
    """
    if cooperative is None:
        cooperative = capability.GENERATORS_SUPPORTED
    logger.debug("term source strategy: %s", "cooperative" if cooperative else "direct")
    if cooperative:
        return cooperative_terms(producer)
    return DirectTermSource(producer)
