"""Tests for expressions — shorthand normalisation and safe evaluation."""

from __future__ import annotations

import math

import pytest

from expressions import (
    ExpressionParseError,
    FunctionEvaluationError,
    canonical,
    make_function,
    preprocess_expression,
    pretty,
)

CASES = [
    # typed, normalised
    ("x^3 - x - 2", "x**3-x-2"),
    ("3x - 6", "3*x-6"),
    ("sinx - 0.5", "sin(x)-0.5"),
    ("xsinx - 1", "x*sin(x)-1"),
    ("4(x+1)", "4*(x+1)"),
    ("x(x+1)", "x*(x+1)"),
    ("(x+1)(x-1)", "(x+1)*(x-1)"),
    ("e^(0.8x)", "e**(0.8*x)"),
    ("e^x - 3", "e**x-3"),
    ("e^x^2", "e**x**2"),
    ("e^-x", "e**-x"),
    ("2cos(x)", "2*cos(x)"),
    ("x^2*exp(-0.5x)", "x**2*exp(-0.5*x)"),
]


@pytest.mark.parametrize("typed, expected", CASES)
def test_preprocess(typed, expected):
    assert preprocess_expression(typed) == expected


@pytest.mark.parametrize(
    "typed, x, expected",
    [
        ("x^3 - e^(0.8x) - 20", 3.0, 27 - math.exp(2.4) - 20),
        ("3sin(0.5x) - 0.5x + 2", 2.0, 3 * math.sin(1.0) + 1),
        ("ln(x)", math.e, 1.0),
        ("sqrt(x) + pi", 4.0, 2 + math.pi),
        ("5", 123.0, 5.0),
        ("e^x^2", 3.0, math.exp(9)),
        ("e^-x", 1.0, math.exp(-1)),
        ("2e^(0.5x)", 2.0, 2 * math.e),
    ],
)
def test_make_function(typed, x, expected):
    assert make_function(typed)(x) == pytest.approx(expected)


@pytest.mark.parametrize("typed", ["", "   ", "x +* 2", "y + 1", "x ="])
def test_parse_errors(typed):
    with pytest.raises(ExpressionParseError):
        make_function(typed)


@pytest.mark.parametrize(
    "typed, x",
    [
        ("sqrt(x)", -1.0),
        ("ln(x)", 0.0),
        ("1/x", 0.0),
        ("e^x", 1000.0),
    ],
)
def test_evaluation_errors(typed, x):
    f = make_function(typed)
    with pytest.raises(FunctionEvaluationError):
        f(x)


def test_evaluation_error_is_value_error():
    with pytest.raises(ValueError):
        make_function("sqrt(x)")(-4.0)


def test_canonical_and_pretty():
    assert canonical("3x - 6") == "3*x - 6"
    assert "x" in pretty("x^2 - 2")
