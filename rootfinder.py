"""
Root-finding backend

Features:
 - Bisection, Newton-Raphson and secant iterations with one stopping rule:
     relative error |(x_new - x_old) / x_new| * 100 < tolerance (percent),
     checked from the second iteration on and skipped when x_new == 0
 - Hard cap of MAX_ITER iterations; reaching it keeps the best estimate
 - Numerical guards reported as failures instead of producing NaN/Inf:
     * bisection: f(a) * f(b) >= 0
     * Newton-Raphson: |f'(x_k)| < DERIVATIVE_EPS
     * secant: |f(x_k) - f(x_{k-1})| < DENOMINATOR_EPS
 - Full iteration table for every run

Errors raised by f or df are not caught here.
"""

from typing import Callable, List, Optional, Union

import logging
import math
import numbers

from config import DENOMINATOR_EPS, DERIVATIVE_EPS, MAX_ITER
from expressions import FunctionEvaluationError
from results import BisectionRow, Failure, Method, NewtonRow, Result, SecantRow

logger = logging.getLogger(__name__)

Func = Callable[[float], float]


class InvalidToleranceError(ValueError):
    """Tolerance must be a number greater than zero."""


class UnknownMethodError(ValueError):
    pass


class MissingParameterError(TypeError):
    """A method was called without one of its starting values."""


def relative_error(new: float, old: float) -> Optional[float]:
    """Percent change from old to new, or None when new is exactly zero."""
    if new == 0:
        return None
    return abs((new - old) / new) * 100


def validate_tolerance(tol_percent) -> float:
    """Check a caller-supplied tolerance before any method runs."""
    if isinstance(tol_percent, bool):
        raise InvalidToleranceError(f"Tolerance must be numeric, got {tol_percent!r}")
    if not isinstance(tol_percent, numbers.Real):
        try:
            tol_percent = float(tol_percent)
        except (TypeError, ValueError):
            raise InvalidToleranceError(f"Tolerance must be numeric, got {tol_percent!r}") from None
    tol = float(tol_percent)
    if math.isnan(tol) or tol <= 0:
        raise InvalidToleranceError(f"Tolerance must be greater than zero, got {tol_percent!r}")
    return tol


# ---------------- BISECTION ----------------
def bisection(f: Func, a: float, b: float, tol_percent: float) -> Result:
    """
    Halve [a, b] until the midpoint moves less than tol_percent percent.

    Each row keeps the bracket as it was when the midpoint was taken.
    Fails immediately (no rows, no root) when f(a) and f(b) share a sign or one is zero.
    """
    result = Result(Method.BISECTION)
    if f(a) * f(b) >= 0:
        result.failure = Failure.INVALID_BRACKET
        logger.warning("bisection: no sign change on [%s, %s]", a, b)
        return result

    c = c_prev = 0.0
    for k in range(1, MAX_ITER + 1):
        c = (a + b) / 2
        fc = f(c)

        err = relative_error(c, c_prev) if k > 1 else None
        result.iterations.append(BisectionRow(k, a, b, c, fc, err))
        logger.debug("bisection k=%d a=%r b=%r c=%r f(c)=%r err=%s", k, a, b, c, fc, err)
        if err is not None and err < tol_percent:
            result.root = c
            logger.info("bisection converged to %r after %d iterations", c, k)
            return result

        if f(a) * fc < 0:
            b = c
        else:
            a = c
        c_prev = c

    result.root = c
    result.failure = Failure.MAX_ITERATIONS
    logger.info("bisection stopped at the %d iteration cap, best estimate %r", MAX_ITER, c)
    return result


# ---------------- NEWTON-RAPHSON ----------------
def newton_raphson(f: Func, df: Func, x0: float, tol_percent: float) -> Result:
    """
    x_{k+1} = x_k - f(x_k) / f'(x_k)

    Stops with DERIVATIVE_NEAR_ZERO (keeping the rows so far) when |f'(x_k)| < DERIVATIVE_EPS.
    """
    result = Result(Method.NEWTON)
    xk = x0
    for k in range(1, MAX_ITER + 1):
        fxk = f(xk)
        dfxk = df(xk)
        if abs(dfxk) < DERIVATIVE_EPS:
            result.failure = Failure.DERIVATIVE_NEAR_ZERO
            logger.warning("newton: f'(%r) = %r at iteration %d", xk, dfxk, k)
            return result

        x_new = xk - fxk / dfxk
        err = relative_error(x_new, xk) if k > 1 else None
        result.iterations.append(NewtonRow(k, xk, fxk, dfxk, x_new, err))
        logger.debug("newton k=%d x=%r f=%r df=%r x_new=%r err=%s", k, xk, fxk, dfxk, x_new, err)
        if err is not None and err < tol_percent:
            result.root = x_new
            logger.info("newton converged to %r after %d iterations", x_new, k)
            return result
        xk = x_new

    result.root = xk
    result.failure = Failure.MAX_ITERATIONS
    logger.info("newton stopped at the %d iteration cap, best estimate %r", MAX_ITER, xk)
    return result


# ---------------- SECANT ----------------
def secant(f: Func, x_prev: float, x_curr: float, tol_percent: float) -> Result:
    """
    Newton-Raphson with the derivative replaced by the slope through the last two points.

    Stops with DENOMINATOR_NEAR_ZERO when f(x_k) and f(x_{k-1}) are within DENOMINATOR_EPS.
    """
    result = Result(Method.SECANT)
    for k in range(1, MAX_ITER + 1):
        f_prev = f(x_prev)
        f_curr = f(x_curr)
        if abs(f_curr - f_prev) < DENOMINATOR_EPS:
            result.failure = Failure.DENOMINATOR_NEAR_ZERO
            logger.warning("secant: f(%r) and f(%r) nearly equal at iteration %d", x_prev, x_curr, k)
            return result

        x_new = x_curr - f_curr * (x_curr - x_prev) / (f_curr - f_prev)
        err = relative_error(x_new, x_curr) if k > 1 else None
        result.iterations.append(SecantRow(k, x_prev, x_curr, f_prev, f_curr, x_new, err))
        logger.debug("secant k=%d x_prev=%r x_curr=%r x_new=%r err=%s", k, x_prev, x_curr, x_new, err)
        if err is not None and err < tol_percent:
            result.root = x_new
            logger.info("secant converged to %r after %d iterations", x_new, k)
            return result
        x_prev, x_curr = x_curr, x_new

    result.root = x_curr
    result.failure = Failure.MAX_ITERATIONS
    logger.info("secant stopped at the %d iteration cap, best estimate %r", MAX_ITER, x_curr)
    return result


# ---------------- DISPATCH ----------------
def run_method(
    method: Union[Method, str],
    f: Func,
    tol_percent,
    *,
    df: Optional[Func] = None,
    a: Optional[float] = None,
    b: Optional[float] = None,
    x0: Optional[float] = None,
    x_prev: Optional[float] = None,
    x_curr: Optional[float] = None,
) -> Result:
    """
    Validate the tolerance, pick the method and run it.

    Errors coming out of f or df are re-raised as FunctionEvaluationError so a
    front end can tell them apart from the method's own failures.
    """
    try:
        method = Method(method)
    except ValueError:
        raise UnknownMethodError(f"Unknown method {method!r}; choose one of {[m.value for m in Method]}") from None
    tol = validate_tolerance(tol_percent)

    missing: List[str] = []
    if method is Method.BISECTION:
        missing = [n for n, v in (("a", a), ("b", b)) if v is None]
    elif method is Method.NEWTON:
        missing = [n for n, v in (("df", df), ("x0", x0)) if v is None]
    else:
        missing = [n for n, v in (("x_prev", x_prev), ("x_curr", x_curr)) if v is None]
    if missing:
        raise MissingParameterError(f"{method.value} needs {', '.join(missing)}")

    try:
        if method is Method.BISECTION:
            return bisection(f, a, b, tol)
        if method is Method.NEWTON:
            return newton_raphson(f, df, x0, tol)
        return secant(f, x_prev, x_curr, tol)
    except FunctionEvaluationError:
        raise
    except (ArithmeticError, ValueError, TypeError) as exc:
        raise FunctionEvaluationError(f"{method.value}: function evaluation failed: {exc}") from exc
