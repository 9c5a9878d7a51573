"""
Polynomial functions with exact derivatives.

Coefficients are stored in ascending order of power, so
``PolynomialFunction(1, 0, 3)`` is ``1 + 3x^2``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import numpy as np
from numpy.polynomial import polynomial as P
from pydantic import BaseModel, ConfigDict, field_validator

from .node import Constant, Node, Variable, simplify


class PolynomialFunction(BaseModel):
    """
    Polynomial in ``x`` given by its coefficients.

    Satisfies the differentiable function contract, so it can be handed to
    Newton-Raphson as well as to the quadratures.
    """

    model_config = ConfigDict(frozen=True)

    coefficients: tuple[float, ...]

    def __init__(self, *coefficients: float, **data: Any) -> None:
        if coefficients or "coefficients" not in data:
            data["coefficients"] = coefficients
        super().__init__(**data)

    @field_validator("coefficients", mode="before")
    @classmethod
    def _validate_coefficients(cls, value: Any) -> tuple[float, ...]:
        values = tuple(float(c) for c in np.atleast_1d(np.asarray(value, dtype=float)))
        if not values:
            return (0.0,)
        # drop trailing zero coefficients but keep the constant term
        last = len(values)
        while last > 1 and values[last - 1] == 0.0:
            last -= 1
        return values[:last]

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    def evaluate(self, x: float) -> float:
        return float(P.polyval(x, self.coefficients))

    def __call__(self, x: float) -> float:
        return self.evaluate(x)

    def derivative(self) -> PolynomialFunction:
        if self.degree == 0:
            return PolynomialFunction(0.0)
        return PolynomialFunction(*P.polyder(self.coefficients))

    def __add__(self, other: PolynomialFunction) -> PolynomialFunction:
        if not isinstance(other, PolynomialFunction):
            return NotImplemented
        return PolynomialFunction(*P.polyadd(self.coefficients, other.coefficients))

    def __sub__(self, other: PolynomialFunction) -> PolynomialFunction:
        if not isinstance(other, PolynomialFunction):
            return NotImplemented
        return PolynomialFunction(*P.polysub(self.coefficients, other.coefficients))

    def __mul__(self, other: PolynomialFunction | float) -> PolynomialFunction:
        if isinstance(other, (int, float)):
            return PolynomialFunction(*(c * other for c in self.coefficients))
        if not isinstance(other, PolynomialFunction):
            return NotImplemented
        return PolynomialFunction(*P.polymul(self.coefficients, other.coefficients))

    def __rmul__(self, other: float) -> PolynomialFunction:
        return self.__mul__(other)

    def to_node(self) -> Node:
        """Expression tree ``c0 + c1*x + c2*x^2 + ...``, simplified."""
        x = Variable()
        tree: Node = Constant(self.coefficients[0])
        for power, coefficient in enumerate(self.coefficients[1:], start=1):
            tree = tree + Constant(coefficient) * x ** Constant(float(power))
        return simplify(tree)

    def to_string(self) -> str:
        terms = []
        for power, coefficient in enumerate(self.coefficients):
            if coefficient == 0.0 and self.degree > 0:
                continue
            if power == 0:
                terms.append(f"{coefficient:g}")
            elif power == 1:
                terms.append(f"{coefficient:g}*x")
            else:
                terms.append(f"{coefficient:g}*x^{power}")
        return " + ".join(terms) or "0"

    def __str__(self) -> str:
        return self.to_string()


class LegendrePolynomial(PolynomialFunction):
    """
    The Legendre polynomial ``P_n`` on ``[-1, 1]``.

    Built with Bonnet's recurrence
    ``n P_n = (2n - 1) x P_{n-1} - (n - 1) P_{n-2}``.
    """

    order: int

    def __init__(self, n: int | None = None, **data: Any) -> None:
        if n is not None:
            if n < 0:
                raise ValueError(f"Legendre polynomial order must be non-negative, got {n}")
            data["order"] = n
            data["coefficients"] = _legendre_coefficients(n)
        super().__init__(**data)


@lru_cache(maxsize=None)
def _legendre_coefficients(n: int) -> tuple[float, ...]:
    if n == 0:
        return (1.0,)
    if n == 1:
        return (0.0, 1.0)
    previous = np.array(_legendre_coefficients(n - 1))
    before = np.array(_legendre_coefficients(n - 2))
    coefficients = np.zeros(n + 1)
    coefficients[1:] += (2.0 * n - 1.0) / n * previous
    coefficients[: n - 1] -= (n - 1.0) / n * before
    return tuple(float(c) for c in coefficients)
