"""
Result and iteration-trace model shared by the three root-finding methods.

Every solver returns a ``Result``:
 - ``root``        best estimate, or None after a hard failure
 - ``iterations``  ordered rows, one per completed loop pass
 - ``failure``     optional ``Failure`` reason

Row types differ per method; each carries a ``HEADERS`` tuple in the same
order as its fields so a table can be laid out without knowing the method.
"""

from dataclasses import astuple, dataclass, field, fields
from enum import Enum
from typing import ClassVar, List, Optional, Tuple, Union


class Method(str, Enum):
    BISECTION = "bisection"
    NEWTON = "newton"
    SECANT = "secant"


class Status(str, Enum):
    CONVERGED = "converged"
    MAX_ITERATIONS = "max_iterations"
    FAILED = "failed"


class Failure(str, Enum):
    """Terminal failure reasons. Only MAX_ITERATIONS keeps a root."""

    INVALID_BRACKET = "invalid bracket: no sign change"
    DERIVATIVE_NEAR_ZERO = "derivative near zero"
    DENOMINATOR_NEAR_ZERO = "denominator near zero"
    MAX_ITERATIONS = "iteration cap reached"

    @property
    def is_hard(self) -> bool:
        return self is not Failure.MAX_ITERATIONS


# ---------------- ITERATION ROWS ----------------
@dataclass(frozen=True)
class BisectionRow:
    HEADERS: ClassVar[Tuple[str, ...]] = ("k", "a", "b", "c_k", "f(c_k)", "Relative error (%)")

    k: int
    a: float
    b: float
    c: float
    fc: float
    error: Optional[float] = None


@dataclass(frozen=True)
class NewtonRow:
    HEADERS: ClassVar[Tuple[str, ...]] = ("k", "x_k", "f(x_k)", "f'(x_k)", "x_{k+1}", "Relative error (%)")

    k: int
    xk: float
    fxk: float
    dfxk: float
    x_new: float
    error: Optional[float] = None


@dataclass(frozen=True)
class SecantRow:
    HEADERS: ClassVar[Tuple[str, ...]] = (
        "k", "x_{k-1}", "x_k", "f(x_{k-1})", "f(x_k)", "x_{k+1}", "Relative error (%)"
    )

    k: int
    x_prev: float
    x_curr: float
    f_prev: float
    f_curr: float
    x_new: float
    error: Optional[float] = None


IterationRow = Union[BisectionRow, NewtonRow, SecantRow]

ROW_TYPES = {
    Method.BISECTION: BisectionRow,
    Method.NEWTON: NewtonRow,
    Method.SECANT: SecantRow,
}


def row_values(row: IterationRow) -> Tuple:
    """Field values in header order."""
    return astuple(row)


def row_field_names(row_type) -> Tuple[str, ...]:
    return tuple(f.name for f in fields(row_type))


def headers_for(method: Union[Method, str]) -> Tuple[str, ...]:
    return ROW_TYPES[Method(method)].HEADERS


# ---------------- RESULT ----------------
@dataclass
class Result:
    method: Method
    root: Optional[float] = None
    iterations: List[IterationRow] = field(default_factory=list)
    failure: Optional[Failure] = None

    @property
    def status(self) -> Status:
        if self.failure is None:
            return Status.CONVERGED
        if self.failure is Failure.MAX_ITERATIONS:
            return Status.MAX_ITERATIONS
        return Status.FAILED

    @property
    def converged(self) -> bool:
        return self.status is Status.CONVERGED

    @property
    def iteration_count(self) -> int:
        return len(self.iterations)

    @property
    def headers(self) -> Tuple[str, ...]:
        return headers_for(self.method)

    @property
    def final_error(self) -> Optional[float]:
        if not self.iterations:
            return None
        return self.iterations[-1].error

    def message(self, digits: int = 8) -> str:
        """One-line status text for a front end."""
        if self.status is Status.CONVERGED:
            return f"Root found: {self.root:.{digits}f} (iterations: {self.iteration_count})"
        if self.status is Status.MAX_ITERATIONS:
            return (
                f"Stopped: {self.failure.value}. "
                f"Best estimate: {self.root:.{digits}f} (iterations: {self.iteration_count})"
            )
        return f"Method failed: {self.failure.value}."
