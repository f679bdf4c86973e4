"""Tests for problems — the fixed equation table."""

from __future__ import annotations

import pytest
import sympy as sp

from expressions import X, parse_expression
from problems import PROBLEMS, UnknownProblemError, get_problem

SAMPLE_POINTS = [-1.5, 0.0, 0.7, 2.0, 3.3, 5.0]


@pytest.mark.parametrize("key", sorted(PROBLEMS))
def test_f_matches_formula(key):
    problem = get_problem(key)
    reference = sp.lambdify(X, parse_expression(problem.formula), "math")
    for x in SAMPLE_POINTS:
        assert problem.f(x) == pytest.approx(reference(x), rel=1e-12, abs=1e-12)


@pytest.mark.parametrize("key", sorted(PROBLEMS))
def test_df_matches_derivative_of_formula(key):
    problem = get_problem(key)
    derivative = sp.lambdify(X, sp.diff(parse_expression(problem.formula), X), "math")
    for x in SAMPLE_POINTS:
        assert problem.df(x) == pytest.approx(derivative(x), rel=1e-9, abs=1e-9)


@pytest.mark.parametrize("key", sorted(PROBLEMS))
def test_suggested_interval_brackets_a_root(key):
    problem = get_problem(key)
    a, b = problem.interval
    assert a < b
    assert problem.f(a) * problem.f(b) < 0
    assert a < problem.suggested_x0 < b


def test_keys():
    assert list(PROBLEMS) == ["p1", "p2", "p3", "p4"]


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        PROBLEMS["p5"] = PROBLEMS["p1"]


def test_unknown_problem():
    with pytest.raises(UnknownProblemError, match="p9"):
        get_problem("p9")


def test_display_is_single_line():
    text = get_problem("p1").display()
    assert "\n" not in text
    assert "exp(0.8*x)" in text
