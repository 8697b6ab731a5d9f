import math
import sys
from fractions import Fraction

import pytest

from series_sum.errors import InvalidArgument, ProducerFailure, SeriesSumError
from series_sum.options import (
    DEFAULT_TOLERANCE,
    MAX_TERMS,
    SeriesOptions,
    resolve_options,
    validate_producer,
)


def test_defaults():
    opts = resolve_options()
    assert opts.initial_value == 0.0
    assert opts.tolerance == DEFAULT_TOLERANCE == sys.float_info.epsilon
    assert opts.max_terms is None
    assert opts.relative is False
    assert not opts.exact_count
    assert opts.term_limit == MAX_TERMS == 1_000_000


def test_camel_case_mapping_keys():
    opts = resolve_options({"initialValue": 2, "maxTerms": 5, "tolerance": 1e-8})
    assert opts.initial_value == 2.0
    assert isinstance(opts.initial_value, float)
    assert opts.max_terms == 5
    assert opts.exact_count
    assert opts.term_limit == 5
    assert opts.tolerance == 1e-8


def test_snake_case_mapping_keys():
    opts = resolve_options({"initial_value": Fraction(1, 4), "max_terms": 7})
    assert opts.initial_value == 0.25
    assert opts.max_terms == 7


def test_unknown_mapping_keys_ignored():
    opts = resolve_options({"foo": "bar", "maxTerms": 2})
    assert opts.max_terms == 2


def test_unknown_keyword_rejected():
    with pytest.raises(InvalidArgument):
        resolve_options(foo=1)


def test_options_frozen():
    opts = SeriesOptions()
    with pytest.raises(AttributeError):
        opts.tolerance = 1.0


def test_zero_tolerance_allowed():
    assert resolve_options(tolerance=0).tolerance == 0.0


@pytest.mark.parametrize("value", [-1e-3, math.nan, "0.1", None, 10 ** 400])
def test_bad_tolerance(value):
    with pytest.raises(InvalidArgument):
        resolve_options(tolerance=value)


@pytest.mark.parametrize("value", [0, -3, 2.5, True, "3"])
def test_bad_max_terms(value):
    with pytest.raises(InvalidArgument):
        resolve_options(max_terms=value)


@pytest.mark.parametrize("value", ["2", math.inf, math.nan, None, 10 ** 400, -10 ** 400])
def test_bad_initial_value(value):
    with pytest.raises(InvalidArgument):
        resolve_options(initial_value=value)


def test_bad_relative():
    with pytest.raises(InvalidArgument):
        resolve_options(relative=1)


def test_bad_options_type():
    with pytest.raises(InvalidArgument):
        resolve_options([("maxTerms", 3)])


def test_validate_producer():
    validate_producer(lambda: 1.0)
    validate_producer(iter([1.0]))
    with pytest.raises(InvalidArgument):
        validate_producer([1.0, 2.0])


def test_error_hierarchy():
    assert issubclass(InvalidArgument, SeriesSumError)
    assert issubclass(InvalidArgument, ValueError)
    assert issubclass(InvalidArgument, TypeError)
    assert issubclass(ProducerFailure, SeriesSumError)
    assert issubclass(ProducerFailure, TypeError)
