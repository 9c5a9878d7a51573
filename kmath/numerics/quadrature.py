"""
Numerical quadrature over sampled intervals.

Every rule returns the per-piece contributions as a numpy array; the
integral estimate is their sum (see :func:`definite_integral`).

- :class:`TrapezoidQuadrature` - one trapezoid per pair of adjacent samples
- :class:`SimpsonQuadrature` - Simpson's 1/3 rule per pair of adjacent samples
- :class:`GaussianQuadrature` - Gauss-Legendre rule over ``[min, max]``
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any, ClassVar

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.errors import DegenerateIntervalError, InsufficientSamplesError
from ..core.logging import get_logger
from ..function.function import ScalarFunction, as_function
from ..interval import SampledInterval
from .gauss_legendre import gauss_legendre_rule

logger = get_logger(__name__)


class GaussianRule(IntEnum):
    """Named Gauss-Legendre orders with hard-coded tables."""

    ONE_POINT = 1
    TWO_POINT = 2
    THREE_POINT = 3
    FOUR_POINT = 4
    FIVE_POINT = 5


class Quadrature(BaseModel, ABC):
    """
    Abstract base class for quadrature rules.

    Subclasses implement :meth:`integrate`, returning one contribution per
    piece of the interval.
    """

    model_config = ConfigDict(frozen=True)

    name: ClassVar[str] = "quadrature"

    @abstractmethod
    def integrate(self, interval: SampledInterval, function: Any) -> np.ndarray:
        pass

    def __call__(self, interval: SampledInterval, function: Any) -> float:
        return float(np.sum(self.integrate(interval, function)))


def _pairs(interval: SampledInterval) -> tuple[np.ndarray, np.ndarray]:
    count = interval.count()
    if count < 2:
        raise InsufficientSamplesError(count)
    points = np.array([interval[i] for i in range(count)], dtype=float)
    return points[:-1], points[1:]


def _evaluate_all(f: ScalarFunction, points: np.ndarray) -> np.ndarray:
    return np.array([f.evaluate(float(x)) for x in points], dtype=float)


class TrapezoidQuadrature(Quadrature):
    """``(b - a) * (f(a) + f(b)) / 2`` for each adjacent sample pair."""

    name: ClassVar[str] = "trapezoid"

    def integrate(self, interval: SampledInterval, function: Any) -> np.ndarray:
        f = as_function(function)
        left, right = _pairs(interval)
        # evaluate every sample once; interior ones are shared by two pieces
        values = _evaluate_all(f, np.append(left, right[-1]))
        return (right - left) * (values[:-1] + values[1:]) / 2.0


class SimpsonQuadrature(Quadrature):
    """``(b - a) / 6 * (f(a) + 4 f((a + b) / 2) + f(b))`` for each adjacent sample pair."""

    name: ClassVar[str] = "simpson"

    def integrate(self, interval: SampledInterval, function: Any) -> np.ndarray:
        f = as_function(function)
        left, right = _pairs(interval)
        values = _evaluate_all(f, np.append(left, right[-1]))
        middle = _evaluate_all(f, (left + right) / 2.0)
        return (right - left) / 6.0 * (values[:-1] + 4.0 * middle + values[1:])


class GaussianQuadrature(Quadrature):
    """
    Gauss-Legendre quadrature of a given order.

    Only the interval endpoints are used; interior samples are ignored. The
    canonical nodes are mapped onto ``[min, max]`` with
    ``x = factor * xi + offset`` where ``factor = (max - min) / 2`` and
    ``offset = (max + min) / 2``. An ``order``-point rule integrates
    polynomials up to degree ``2 * order - 1`` exactly.

    Example:
        >>> rule = GaussianQuadrature(GaussianRule.TWO_POINT)
        >>> round(rule(ClosedInterval(0, 4), lambda x: x * (x + 1)), 4)
        29.3333
    """

    name: ClassVar[str] = "gaussian"

    order: int = Field(default=GaussianRule.FIVE_POINT.value, ge=1)

    def __init__(self, order: int | GaussianRule | None = None, **data: Any) -> None:
        if order is not None:
            data["order"] = order
        super().__init__(**data)

    @field_validator("order", mode="before")
    @classmethod
    def _validate_order(cls, value: Any) -> int:
        integral = isinstance(value, numbers.Integral) or (isinstance(value, float) and value.is_integer())
        if isinstance(value, bool) or not integral:
            raise ValueError(f"order must be an integer, got {value!r}")
        return int(value)

    @property
    def rule(self) -> tuple[np.ndarray, np.ndarray]:
        return gauss_legendre_rule(self.order)

    def integrate(self, interval: SampledInterval, function: Any) -> np.ndarray:
        f = as_function(function)
        lower, upper = float(interval.min()), float(interval.max())
        if lower == upper:
            raise DegenerateIntervalError(lower)

        abscissas, weights = self.rule
        factor = (upper - lower) / 2.0
        offset = (upper + lower) / 2.0
        values = _evaluate_all(f, factor * abscissas + offset)
        return factor * weights * values


def definite_integral(function: Any, interval: SampledInterval, quadrature: Quadrature | None = None) -> float:
    """
    Estimate the integral of ``function`` over ``interval``.

    Args:
        function: Scalar function or callable.
        interval: Sampled interval; sample-based rules use every sample.
        quadrature: Rule to apply, Simpson by default.

    Returns:
        Sum of the rule's contributions.
    """
    rule = quadrature if quadrature is not None else SimpsonQuadrature()
    contributions = rule.integrate(interval, function)
    logger.debug(
        "Integrated with %s over %d pieces", rule.name, len(contributions),
    )
    return float(np.sum(contributions))
