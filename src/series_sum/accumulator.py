# src/series_sum/accumulator.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from series_sum.errors import ProducerFailure
from series_sum.options import SeriesOptions

logger = logging.getLogger(__name__)

CONVERGED = "converged"
MAX_TERMS_REACHED = "max_terms"
SAFETY_CAP = "safety_cap"
EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class SeriesResult:
    value: float
    terms: int
    stop_reason: str
    last_term: Optional[float]


def _converged(term: float, total: float, opts: SeriesOptions) -> bool:
    if opts.relative:
        return abs(term) <= abs(opts.tolerance * total)
    return abs(term) < opts.tolerance


def accumulate(terms: Iterator[float], opts: SeriesOptions) -> SeriesResult:
    """
    Consume `terms` until one stop condition fires and return the sum.

    With opts.max_terms set, exactly that many terms are summed regardless of
    their size. Otherwise accumulation stops on the first term passing the
    tolerance test, or at MAX_TERMS. Options are assumed validated; errors
    raised while producing a term propagate with no partial result.
    """
    total = opts.initial_value
    limit = opts.term_limit
    count = 0
    term = None

    for term in terms:
        total += term
        count += 1
        if opts.exact_count:
            if count >= limit:
                reason = MAX_TERMS_REACHED
                break
        elif _converged(term, total, opts):
            reason = CONVERGED
            break
        elif count >= limit:
            reason = SAFETY_CAP
            break
    else:
        if opts.exact_count:
            raise ProducerFailure("producer ran out after %d of %d terms" % (count, limit))
        reason = EXHAUSTED

    logger.debug("stopped after %d term(s): %s (sum=%r)", count, reason, total)
    return SeriesResult(value=total, terms=count, stop_reason=reason, last_term=term)
