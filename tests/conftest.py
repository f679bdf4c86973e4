"""Shared test fixtures."""

from __future__ import annotations

import pytest

from problems import get_problem


@pytest.fixture
def p1():
    """x^3 - e^(0.8x) - 20, single root near 3.2 inside [3, 4]."""
    return get_problem("p1")


@pytest.fixture
def p2():
    """3sin(0.5x) - 0.5x + 2, single real root near 5.7."""
    return get_problem("p2")
