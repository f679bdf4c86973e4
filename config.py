"""Numerical constants and logging setup shared by the solvers and the CLI."""

from typing import Optional

import logging
import math
import os

logger = logging.getLogger(__name__)

# hard cap on loop passes for every method
MAX_ITER = 100

# |f'(x)| below this stops Newton-Raphson
DERIVATIVE_EPS = 1e-10

# |f(x_k) - f(x_{k-1})| below this stops the secant method
DENOMINATOR_EPS = 1e-10

# relative error threshold in percent
FALLBACK_TOLERANCE = 0.5


def _tolerance_from_env() -> float:
    raw = os.environ.get("ROOTFINDER_TOLERANCE")
    if raw is None:
        return FALLBACK_TOLERANCE
    try:
        value = float(raw)
    except ValueError:
        value = float("nan")
    if not value > 0 or math.isinf(value):
        logger.warning("ignoring ROOTFINDER_TOLERANCE=%r, using %s", raw, FALLBACK_TOLERANCE)
        return FALLBACK_TOLERANCE
    return value


DEFAULT_TOLERANCE = _tolerance_from_env()

# decimals shown in tables and status lines
DISPLAY_DIGITS = 8

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> int:
    """Configure root logging once for the CLI. Level comes from LOG_LEVEL when not given."""
    name = (level or os.environ.get("LOG_LEVEL", "WARNING")).upper()
    resolved = getattr(logging, name, None)
    if not isinstance(resolved, int):
        resolved = logging.WARNING
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logger.debug("logging configured at %s", logging.getLevelName(resolved))
    return resolved
