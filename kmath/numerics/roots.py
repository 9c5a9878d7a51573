"""
Root finding algorithms.

Three independent methods:

- :func:`bisection` - halves a sign-changing bracket
- :func:`false_position` - narrows a bracket using the secant chord
- :func:`newton_raphson` - tangent iteration from a guess, needs an exact derivative

Each returns the root as a float and raises instead of returning a partial
result. Tolerances and the default step budget come from
:mod:`kmath.core.config` and may be overridden per call.
"""

from __future__ import annotations

import math
from typing import Any, Tuple, Union

from ..core.config import get_settings
from ..core.errors import (
    DivisionByZeroError,
    InvalidBracketError,
    NotConvergedError,
    NotDifferentiableError,
)
from ..core.logging import get_context_logger
from ..function.function import ScalarFunction, as_function, is_differentiable
from ..interval import SampledInterval

ROOT_EPSILON = 1e-12
INTERVAL_EPSILON = 1e-24

Bracket = Union[SampledInterval, Tuple[float, float]]


def _bracket_bounds(bracket: Any) -> tuple[float, float]:
    if hasattr(bracket, "min") and hasattr(bracket, "max"):
        a, b = float(bracket.min()), float(bracket.max())
    else:
        a, b = (float(v) for v in bracket)
    if a > b:
        a, b = b, a
    return a, b


def _check_bracket(f: ScalarFunction, a: float, b: float) -> tuple[float, float]:
    fa = f.evaluate(a)
    fb = f.evaluate(b)
    if not fa * fb < 0.0:
        raise InvalidBracketError(a, b, fa, fb)
    return fa, fb


def bisection(
    function: Any,
    bracket: Bracket,
    max_steps: int | None = None,
    root_epsilon: float | None = None,
    interval_epsilon: float | None = None,
) -> float:
    """
    Find a root of ``function`` in ``bracket`` by repeated halving.

    Args:
        function: Scalar function or callable.
        bracket: Interval (anything with ``min()``/``max()``) or ``(a, b)`` pair.
        max_steps: Maximum number of halvings.
        root_epsilon: Success once ``|f(c)| <= root_epsilon``.
        interval_epsilon: Success once the bracket is narrower than this.

    Returns:
        The midpoint at which a tolerance was met.

    Raises:
        InvalidBracketError: If ``f`` does not change sign over the bracket.
        NotConvergedError: If ``max_steps`` halvings did not meet a tolerance.
    """
    settings = get_settings()
    steps = settings.MAX_STEPS if max_steps is None else max_steps
    root_eps = settings.ROOT_EPSILON if root_epsilon is None else root_epsilon
    interval_eps = settings.INTERVAL_EPSILON if interval_epsilon is None else interval_epsilon
    logger = get_context_logger(__name__, method="bisection")

    f = as_function(function)
    a, b = _bracket_bounds(bracket)
    fa, _ = _check_bracket(f, a, b)

    c = a
    for step in range(steps):
        c = (a + b) / 2.0
        fc = f.evaluate(c)
        if abs(fc) <= root_eps or (b - a) < interval_eps:
            logger.debug("Root found", extra_data={"root": c, "steps": step + 1})
            return c
        if fc * fa < 0.0:
            b = c
        else:
            a, fa = c, fc

    logger.warning("Root not found", extra_data={"steps": steps, "estimate": c})
    raise NotConvergedError("bisection", steps, estimate=c)


def false_position(
    function: Any,
    bracket: Bracket,
    max_steps: int | None = None,
    root_epsilon: float | None = None,
) -> float:
    """
    Find a root of ``function`` in ``bracket`` with the regula falsi method.

    The next estimate is where the chord through ``(a, f(a))`` and
    ``(b, f(b))`` crosses zero. On strongly curved functions one end of the
    bracket stays fixed and convergence slows down.

    Raises:
        InvalidBracketError: If ``f`` does not change sign over the bracket.
        NotConvergedError: If ``max_steps`` iterations did not meet the tolerance.
    """
    settings = get_settings()
    steps = settings.MAX_STEPS if max_steps is None else max_steps
    root_eps = settings.ROOT_EPSILON if root_epsilon is None else root_epsilon
    logger = get_context_logger(__name__, method="false_position")

    f = as_function(function)
    a, b = _bracket_bounds(bracket)
    fa, fb = _check_bracket(f, a, b)

    c = a
    for step in range(steps):
        c = (a * fb - b * fa) / (fb - fa)
        fc = f.evaluate(c)
        if abs(fc) <= root_eps:
            logger.debug("Root found", extra_data={"root": c, "steps": step + 1})
            return c
        if fc * fa < 0.0:
            b, fb = c, fc
        else:
            a, fa = c, fc

    logger.warning("Root not found", extra_data={"steps": steps, "estimate": c})
    raise NotConvergedError("false_position", steps, estimate=c)


def newton_raphson(
    function: Any,
    guess: float,
    max_steps: int | None = None,
    root_epsilon: float | None = None,
) -> float:
    """
    Find a root of ``function`` with Newton-Raphson iteration from ``guess``.

    ``function`` must provide an exact ``derivative()``; numeric
    approximations are not substituted.

    Raises:
        NotDifferentiableError: If ``function`` has no exact derivative.
        DivisionByZeroError: If the derivative vanishes or the step is not finite.
        NotConvergedError: If ``max_steps`` iterations did not meet the tolerance.
    """
    if not is_differentiable(function):
        raise NotDifferentiableError(function)

    settings = get_settings()
    steps = settings.MAX_STEPS if max_steps is None else max_steps
    root_eps = settings.ROOT_EPSILON if root_epsilon is None else root_epsilon
    logger = get_context_logger(__name__, method="newton_raphson")

    f = function
    df = as_function(function.derivative())

    x = float(guess)
    for step in range(steps):
        slope = df.evaluate(x)
        if slope == 0.0:
            raise DivisionByZeroError(x, slope)
        h = f.evaluate(x) / slope
        if not math.isfinite(h):
            raise DivisionByZeroError(x, slope)
        x -= h
        if abs(h) < root_eps:
            logger.debug("Root found", extra_data={"root": x, "steps": step + 1})
            return x

    logger.warning("Root not found", extra_data={"steps": steps, "estimate": x})
    raise NotConvergedError("newton_raphson", steps, estimate=x)
