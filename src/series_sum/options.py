# src/series_sum/options.py
from __future__ import annotations

import math
import numbers
import sys
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Union

from series_sum.errors import InvalidArgument

DEFAULT_TOLERANCE = sys.float_info.epsilon
MAX_TERMS = 1_000_000  # safety cap when the caller gives no max_terms

# mapping key -> field name; camelCase spellings are accepted as aliases
_KEYS = {
    "initialValue": "initial_value",
    "initial_value": "initial_value",
    "tolerance": "tolerance",
    "maxTerms": "max_terms",
    "max_terms": "max_terms",
    "relative": "relative",
}


@dataclass(frozen=True)
class SeriesOptions:
    """
    Options for one summation call.

    max_terms=None means the caller did not ask for a term count: accumulation
    stops on the tolerance test or at MAX_TERMS. An explicit max_terms switches
    to exact-count mode and the tolerance is not consulted.
    """
    initial_value: float = 0.0
    tolerance: float = DEFAULT_TOLERANCE
    max_terms: Optional[int] = None
    relative: bool = False

    @property
    def exact_count(self) -> bool:
        return self.max_terms is not None

    @property
    def term_limit(self) -> int:
        return MAX_TERMS if self.max_terms is None else self.max_terms


OptionsLike = Union[SeriesOptions, Mapping[str, Any], None]


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _as_float(value: Any) -> Optional[float]:
    """float(value) for a real value; None when not real or too large for a float."""
    if not _is_real(value):
        return None
    try:
        return float(value)
    except OverflowError:
        return None


def validate_options(opts: SeriesOptions) -> SeriesOptions:
    """Check ranges and types; returns a copy with numeric fields as floats."""
    initial_value = _as_float(opts.initial_value)
    if initial_value is None or not math.isfinite(initial_value):
        raise InvalidArgument("initial_value must be a finite real number; got %r" % (opts.initial_value,))
    tolerance = _as_float(opts.tolerance)
    if tolerance is None or math.isnan(tolerance) or tolerance < 0:
        raise InvalidArgument("tolerance must be a nonnegative real number; got %r" % (opts.tolerance,))
    if opts.max_terms is not None:
        if not isinstance(opts.max_terms, numbers.Integral) or isinstance(opts.max_terms, bool):
            raise InvalidArgument("max_terms must be a positive integer; got %r" % (opts.max_terms,))
        if opts.max_terms <= 0:
            raise InvalidArgument("max_terms must be a positive integer; got %r" % (opts.max_terms,))
    if not isinstance(opts.relative, bool):
        raise InvalidArgument("relative must be a bool; got %r" % (opts.relative,))
    return replace(
        opts,
        initial_value=initial_value,
        tolerance=tolerance,
        max_terms=None if opts.max_terms is None else int(opts.max_terms),
    )


def resolve_options(options: OptionsLike = None, **overrides: Any) -> SeriesOptions:
    """
    Build validated SeriesOptions from a SeriesOptions, a mapping or nothing.
    Unknown mapping keys are ignored. Keyword overrides (snake_case) win.
    """
    if options is None:
        fields: dict = {}
    elif isinstance(options, SeriesOptions):
        fields = {
            "initial_value": options.initial_value,
            "tolerance": options.tolerance,
            "max_terms": options.max_terms,
            "relative": options.relative,
        }
    elif isinstance(options, Mapping):
        fields = {_KEYS[k]: v for k, v in options.items() if k in _KEYS}
    else:
        raise InvalidArgument("options must be a mapping or SeriesOptions; got %s" % type(options).__name__)

    for key, value in overrides.items():
        if key not in SeriesOptions.__dataclass_fields__:
            raise InvalidArgument("unknown option %r" % key)
        fields[key] = value

    return validate_options(SeriesOptions(**fields))


def validate_producer(producer: Any) -> None:
    if callable(producer):
        return
    if hasattr(producer, "__next__"):
        return
    raise InvalidArgument("producer must be callable or an iterator; got %s" % type(producer).__name__)
