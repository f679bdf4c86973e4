"""Fixed table of the equations offered to students, each with its hand-written derivative."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Tuple

import math

import expressions


class UnknownProblemError(KeyError):
    pass


@dataclass(frozen=True)
class Problem:
    key: str
    formula: str
    f: Callable[[float], float]
    df: Callable[[float], float]
    interval: Tuple[float, float]

    @property
    def suggested_x0(self) -> float:
        a, b = self.interval
        return (a + b) / 2

    def display(self) -> str:
        return expressions.canonical(self.formula)


# ---------------- EVALUATORS ----------------
def _p1(x: float) -> float:
    return x ** 3 - math.exp(0.8 * x) - 20


def _dp1(x: float) -> float:
    return 3 * x ** 2 - 0.8 * math.exp(0.8 * x)


def _p2(x: float) -> float:
    return 3 * math.sin(0.5 * x) - 0.5 * x + 2


def _dp2(x: float) -> float:
    return 1.5 * math.cos(0.5 * x) - 0.5


def _p3(x: float) -> float:
    return x ** 3 - x ** 2 * math.exp(-0.5 * x) - 3 * x + 1


def _dp3(x: float) -> float:
    e = math.exp(-0.5 * x)
    return 3 * x ** 2 - 3 - 2 * x * e + 0.5 * x ** 2 * e


def _p4(x: float) -> float:
    return math.cos(x) ** 2 - 0.5 * x * math.exp(0.3 * x) + 5


def _dp4(x: float) -> float:
    e = math.exp(0.3 * x)
    return -math.sin(2 * x) - 0.5 * e - 0.15 * x * e


_PROBLEMS: Dict[str, Problem] = {
    p.key: p
    for p in (
        Problem("p1", "x^3 - e^(0.8x) - 20", _p1, _dp1, (3.0, 4.0)),
        Problem("p2", "3sin(0.5x) - 0.5x + 2", _p2, _dp2, (5.0, 6.0)),
        Problem("p3", "x^3 - x^2*e^(-0.5x) - 3x + 1", _p3, _dp3, (1.0, 2.0)),
        Problem("p4", "cos(x)^2 - 0.5x*e^(0.3x) + 5", _p4, _dp4, (3.0, 4.0)),
    )
}

# read-only view, safe to share between concurrent callers
PROBLEMS: Mapping[str, Problem] = MappingProxyType(_PROBLEMS)


def get_problem(key: str) -> Problem:
    try:
        return PROBLEMS[key]
    except KeyError:
        raise UnknownProblemError(f"Unknown problem {key!r}; choose one of {', '.join(PROBLEMS)}") from None
