"""
Turn typed formulas into numeric callables.

Features:
 - Shorthand normalisation so classroom notation parses:
     x^3      -> x**3
     3x       -> 3*x
     sinx     -> sin(x)
     4(x+1)   -> 4*(x+1)
     e^(0.8x) -> e**(0.8*x)
 - Parsing with SymPy restricted to a fixed table of names
 - Compilation with sympy.lambdify to plain ``math`` calls
 - Evaluation guard: complex, NaN or infinite values raise FunctionEvaluationError

No derivative is ever computed here; Newton-Raphson callers pass df themselves.
"""

from typing import Any, Callable, Dict

import logging
import math
import re

import sympy as sp

logger = logging.getLogger(__name__)

X = sp.Symbol("x", real=True)

# longer names first so "asin" is not read as "a" + "sin"
_FUNCTIONS = (
    "asinh", "acosh", "atanh",
    "asin", "acos", "atan",
    "sinh", "cosh", "tanh",
    "sin", "cos", "tan",
    "sqrt", "exp", "log", "ln",
)

_SYMPY_NAMES: Dict[str, Any] = {
    "sin": sp.sin, "cos": sp.cos, "tan": sp.tan,
    "asin": sp.asin, "acos": sp.acos, "atan": sp.atan,
    "sinh": sp.sinh, "cosh": sp.cosh, "tanh": sp.tanh,
    "asinh": sp.asinh, "acosh": sp.acosh, "atanh": sp.atanh,
    "exp": sp.exp, "log": sp.log, "ln": sp.log, "sqrt": sp.sqrt,
    "abs": sp.Abs, "pi": sp.pi, "e": sp.E, "E": sp.E,
    "x": X,
}


class ExpressionParseError(ValueError):
    """Raised when a typed formula cannot be turned into a function of x."""


class FunctionEvaluationError(ValueError):
    """Raised when a parsed function cannot produce a finite real value."""


# ---------------- PREPROCESSOR ----------------
def preprocess_expression(expr: str) -> str:
    """Rewrite shorthand notation into something sympify accepts."""
    s = re.sub(r"\s+", "", expr)
    # "e" stays Euler's number, so e**x**2 and e**-x keep Python precedence
    s = s.replace("^", "**")

    # xsinx -> x*sinx ; the x inside "exp" is left alone
    s = re.sub(r"(?<![A-Za-z_])x(?=[A-Za-z])", "x*", s)

    # sinx / sin2.5 -> sin(x) / sin(2.5)
    for fn in _FUNCTIONS:
        s = re.sub(rf"(?<![A-Za-z_]){fn}(?!\()(x|\d+(?:\.\d+)?)", rf"{fn}(\1)", s)

    # implicit products: 3x, 3(, )x, )(, 2sin, x(, x2
    s = re.sub(r"(?<=[0-9\)])(?=[A-Za-z\(])", "*", s)
    s = re.sub(r"(?<![A-Za-z_])x(?=[\(0-9])", "x*", s)
    return s


def parse_expression(expr: str) -> sp.Expr:
    """Parse a typed formula into a SymPy expression in the single variable x."""
    if not expr or not expr.strip():
        raise ExpressionParseError("Function expression cannot be empty.")
    processed = preprocess_expression(expr)
    try:
        parsed = sp.sympify(processed, locals=_SYMPY_NAMES)
    except (sp.SympifyError, SyntaxError, TypeError) as exc:
        raise ExpressionParseError(f"Invalid function expression {expr!r} (read as {processed!r})") from exc

    if not isinstance(parsed, sp.Expr):
        raise ExpressionParseError(f"{expr!r} is not a numeric expression")
    extra = parsed.free_symbols - {X}
    if extra:
        names = ", ".join(sorted(str(s) for s in extra))
        raise ExpressionParseError(f"Unknown names in {expr!r}: {names}")
    logger.debug("parsed %r as %s", expr, parsed)
    return parsed


# ---------------- MAKE FUNCTION ----------------
def make_function(expr: str) -> Callable[[float], float]:
    """Build a float -> float callable from a typed formula."""
    parsed = parse_expression(expr)
    compiled = sp.lambdify(X, parsed, modules="math")

    def f(x: float) -> float:
        try:
            raw = compiled(x)
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise FunctionEvaluationError(f"Function evaluation error at x={x}: {exc}") from exc
        if isinstance(raw, complex):
            raise FunctionEvaluationError(f"Function returned complex value at x={x}: {raw}")
        val = float(raw)
        if math.isnan(val) or math.isinf(val):
            raise FunctionEvaluationError(f"Function produced non-finite value at x={x}: {val}")
        return val

    f.__doc__ = f"f(x) = {parsed}"
    return f


def canonical(expr: str) -> str:
    """Single-line normalised form, e.g. ``x**3 - exp(0.8*x) - 20``."""
    return sp.sstr(parse_expression(expr))


def pretty(expr: str) -> str:
    """Multi-line unicode rendering for terminals."""
    return sp.pretty(parse_expression(expr), use_unicode=True, wrap_line=False)
