"""
Gauss-Legendre rules on the canonical interval [-1, 1].

Orders 1 to 5 are hard-coded. Higher orders are generated from the roots of
the Legendre polynomial ``P_n``, located with :func:`kmath.numerics.roots.bisection`.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from ..core.config import get_settings
from ..core.errors import NotConvergedError
from ..function.polynomial import LegendrePolynomial
from .roots import bisection


# monomial evaluation of high order P_n is noisy near its roots, so stop
# bisecting once the bracket is a few ulps wide
_MACHINE_WIDTH = 4 * float(np.finfo(float).eps)


def _frozen(values: list[float]) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


# order -> (abscissas, weights)
GAUSS_LEGENDRE_TABLE: dict[int, tuple[np.ndarray, np.ndarray]] = {
    1: (
        _frozen([0.0]),
        _frozen([2.0]),
    ),
    2: (
        _frozen([-0.5773502691896257, 0.5773502691896257]),
        _frozen([1.0, 1.0]),
    ),
    3: (
        _frozen([0.0, -0.7745966692414834, 0.7745966692414834]),
        _frozen([0.8888888888888888, 0.5555555555555556, 0.5555555555555556]),
    ),
    4: (
        _frozen([-0.3399810435848563, 0.3399810435848563, -0.8611363115940526, 0.8611363115940526]),
        _frozen([0.6521451548625461, 0.6521451548625461, 0.3478548451374538, 0.3478548451374538]),
    ),
    5: (
        _frozen([0.0, -0.5384693101056831, 0.5384693101056831, -0.906179845938664, 0.906179845938664]),
        _frozen([0.5688888888888889, 0.4786286704993665, 0.4786286704993665, 0.23692688505618908, 0.23692688505618908]),
    ),
}


def gauss_legendre_rule(order: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Return read-only ``(abscissas, weights)`` of the ``order``-point rule.

    Orders 1-5 come from the table, higher orders from :func:`legendre_rule`.
    """
    if order < 1:
        raise ValueError(f"Gaussian quadrature order must be at least 1, got {order}")
    if order in GAUSS_LEGENDRE_TABLE:
        return GAUSS_LEGENDRE_TABLE[order]
    return legendre_rule(order)


@lru_cache(maxsize=32)
def legendre_rule(order: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Compute the ``order``-point Gauss-Legendre rule, abscissas ascending.

    Roots of ``P_n`` are bracketed on a uniform grid over [-1, 1] fine enough
    to separate them, refined by bisection, and weighted with
    ``w_i = 2 / ((1 - x_i^2) P_n'(x_i)^2)``.
    """
    if order < 1:
        raise ValueError(f"Gaussian quadrature order must be at least 1, got {order}")

    settings = get_settings()
    polynomial = LegendrePolynomial(order)
    derivative = polynomial.derivative()

    cells = settings.LEGENDRE_GRID_FACTOR * order * order
    grid = np.linspace(-1.0, 1.0, cells + 1)
    values = np.array([polynomial.evaluate(x) for x in grid])

    on_grid = np.abs(values) <= settings.ROOT_EPSILON
    roots: list[float] = [float(x) for x in grid[on_grid]]
    for i in range(cells):
        # roots sitting on a grid point were collected above
        if on_grid[i] or on_grid[i + 1]:
            continue
        if values[i] * values[i + 1] < 0.0:
            roots.append(bisection(polynomial, (grid[i], grid[i + 1]), interval_epsilon=_MACHINE_WIDTH))

    if len(roots) != order:
        raise NotConvergedError("legendre_rule", cells, estimate=float(len(roots)))

    abscissas = np.array(sorted(roots), dtype=float)
    slopes = np.array([derivative.evaluate(x) for x in abscissas])
    weights = 2.0 / ((1.0 - abscissas ** 2) * slopes ** 2)

    abscissas.setflags(write=False)
    weights.setflags(write=False)
    return abscissas, weights
