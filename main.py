"""
Command-line interface for the root-finding project.
"""
from pathlib import Path
from typing import Callable, NoReturn, Optional

import logging

import typer

import expressions
import utils
from config import DEFAULT_TOLERANCE, DISPLAY_DIGITS, setup_logging
from expressions import ExpressionParseError, FunctionEvaluationError
from problems import PROBLEMS, UnknownProblemError, get_problem
from results import Method, Result, Status
from rootfinder import InvalidToleranceError, MissingParameterError, UnknownMethodError, run_method

logger = logging.getLogger(__name__)

app = typer.Typer(help="Bisection, Newton-Raphson and secant root finding")

EXIT_INPUT_ERROR = 1
EXIT_EVALUATION_ERROR = 2
EXIT_METHOD_FAILED = 3


def print_iterations_table(result: Result) -> None:
    if not result.iterations:
        typer.echo("\n(No iterations recorded.)")
        return

    width = 16 * len(result.headers)
    typer.echo("\n" + "=" * width)
    typer.echo(" ".join(f"{h:<15}" for h in result.headers))
    typer.echo("-" * width)
    for cells in utils.format_rows(result):
        typer.echo(" ".join(f"{c:<15}" for c in cells))
    typer.echo("=" * width)


def _fail(message: str, code: int) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING... (default: $LOG_LEVEL)"),
):
    """Find roots of f(x) = 0 and show every iteration."""
    setup_logging(log_level)


@app.command("problems")
def list_problems():
    """List the predefined equations."""
    typer.echo(f"{'ID':<5} {'Suggested interval':<20} f(x)")
    typer.echo("-" * 70)
    for key, problem in PROBLEMS.items():
        a, b = problem.interval
        typer.echo(f"{key:<5} {f'[{a:g}, {b:g}]':<20} {problem.display()}")


@app.command()
def solve(
    method: Method = typer.Argument(..., help="bisection, newton or secant"),
    problem: Optional[str] = typer.Option(None, "--problem", "-p", help="Predefined equation id (default p1)"),
    expr: Optional[str] = typer.Option(None, "--expr", help="Custom f(x), e.g. 'x^3 - 2x - 5'"),
    dexpr: Optional[str] = typer.Option(None, "--dexpr", help="Derivative of --expr (Newton only)"),
    a: Optional[float] = typer.Option(None, "-a", help="Bisection: lower end"),
    b: Optional[float] = typer.Option(None, "-b", help="Bisection: upper end"),
    x0: Optional[float] = typer.Option(None, "--x0", help="Newton: initial guess"),
    x_prev: Optional[float] = typer.Option(None, "--x-prev", help="Secant: x_{k-1}"),
    x_curr: Optional[float] = typer.Option(None, "--x-curr", help="Secant: x_k"),
    tol: float = typer.Option(DEFAULT_TOLERANCE, "--tol", help="Relative error tolerance in percent"),
    csv_path: Optional[Path] = typer.Option(None, "--csv", help="Write the iteration table to this CSV file"),
):
    """Run one method and print the root and its iteration table."""
    df: Optional[Callable[[float], float]] = None
    try:
        if expr is not None:
            if problem is not None:
                _fail("use either --problem or --expr, not both", EXIT_INPUT_ERROR)
            f = expressions.make_function(expr)
            if dexpr is not None:
                df = expressions.make_function(dexpr)
            title = expressions.canonical(expr)
        else:
            chosen = get_problem(problem or "p1")
            f, df = chosen.f, chosen.df
            title = chosen.display()
            lo, hi = chosen.interval
            if method is Method.BISECTION:
                a = lo if a is None else a
                b = hi if b is None else b
            elif method is Method.NEWTON:
                x0 = chosen.suggested_x0 if x0 is None else x0
            else:
                x_prev = lo if x_prev is None else x_prev
                x_curr = hi if x_curr is None else x_curr
    except (ExpressionParseError, UnknownProblemError) as exc:
        _fail(str(exc.args[0]) if exc.args else str(exc), EXIT_INPUT_ERROR)

    typer.echo(f"f(x) = {title}")
    typer.echo(f"Method: {method.value}, tolerance: {tol:g} %")

    try:
        result = run_method(method, f, tol, df=df, a=a, b=b, x0=x0, x_prev=x_prev, x_curr=x_curr)
    except (InvalidToleranceError, UnknownMethodError, MissingParameterError) as exc:
        _fail(str(exc), EXIT_INPUT_ERROR)
    except FunctionEvaluationError as exc:
        logger.error("evaluation error: %s", exc)
        _fail(f"evaluation error: {exc}", EXIT_EVALUATION_ERROR)

    typer.echo(result.message(DISPLAY_DIGITS))
    print_iterations_table(result)

    if csv_path is not None and result.iterations:
        utils.save_iterations_to_csv(result, str(csv_path))
        typer.echo(f"Iterations saved to {csv_path}")

    if result.status is Status.FAILED:
        raise typer.Exit(EXIT_METHOD_FAILED)


if __name__ == "__main__":
    app()
