import pytest

from series_sum import options as options_module
from series_sum.accumulator import (
    CONVERGED,
    EXHAUSTED,
    MAX_TERMS_REACHED,
    SAFETY_CAP,
    accumulate,
)
from series_sum.errors import ProducerFailure
from series_sum.options import SeriesOptions


def test_converged_on_small_term():
    result = accumulate(iter([1.0, 0.5, 1e-20, 7.0]), SeriesOptions())
    assert result.value == 1.5 + 1e-20
    assert result.terms == 3
    assert result.stop_reason == CONVERGED
    assert result.last_term == 1e-20


def test_tolerance_is_strict():
    result = accumulate(iter([0.5, 0.25, 0.125]), SeriesOptions(tolerance=0.25))
    assert result.terms == 3
    assert result.stop_reason == CONVERGED


def test_exact_count_ignores_tolerance():
    result = accumulate(iter([0.0] * 10), SeriesOptions(max_terms=4, tolerance=1.0))
    assert result.terms == 4
    assert result.stop_reason == MAX_TERMS_REACHED


def test_initial_value_seeds_sum():
    result = accumulate(iter([1.0, 2.0, 3.0]), SeriesOptions(initial_value=10.0, max_terms=3))
    assert result.value == 16.0


def test_relative_criterion():
    # |term| <= tol * |sum|
    opts = SeriesOptions(tolerance=0.1, relative=True)
    result = accumulate(iter([100.0, 20.0, 11.0, 5.0]), opts)
    assert result.terms == 3
    assert result.value == 131.0


def test_safety_cap(monkeypatch):
    monkeypatch.setattr(options_module, "MAX_TERMS", 50)
    result = accumulate(iter([1.0] * 100), SeriesOptions())
    assert result.terms == 50
    assert result.value == 50.0
    assert result.stop_reason == SAFETY_CAP


def test_convergence_wins_on_the_capped_term(monkeypatch):
    monkeypatch.setattr(options_module, "MAX_TERMS", 3)
    result = accumulate(iter([1.0, 1.0, 0.0]), SeriesOptions())
    assert result.stop_reason == CONVERGED


def test_explicit_max_terms_beyond_safety_cap(monkeypatch):
    monkeypatch.setattr(options_module, "MAX_TERMS", 5)
    result = accumulate(iter([1.0] * 8), SeriesOptions(max_terms=8))
    assert result.terms == 8


def test_exhausted_source():
    result = accumulate(iter([3.0, 4.0]), SeriesOptions())
    assert result.value == 7.0
    assert result.stop_reason == EXHAUSTED


def test_empty_source():
    result = accumulate(iter([]), SeriesOptions(initial_value=2.0))
    assert result.value == 2.0
    assert result.terms == 0
    assert result.last_term is None


def test_exhausted_in_exact_count_mode():
    with pytest.raises(ProducerFailure):
        accumulate(iter([1.0]), SeriesOptions(max_terms=2))
