"""
Scalar function contract.

The numeric methods accept anything that offers ``evaluate(x) -> float``.
Newton-Raphson additionally needs an exact ``derivative()``. Plain Python
callables are wrapped with :func:`as_function`.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class ScalarFunction(Protocol):
    """A real valued function of one real variable."""

    def evaluate(self, x: float) -> float:
        ...


@runtime_checkable
class DifferentiableFunction(ScalarFunction, Protocol):
    """A scalar function that knows its exact derivative."""

    def derivative(self) -> ScalarFunction:
        ...


class Univariate:
    """
    Adapter turning a callable into a :class:`ScalarFunction`.

    The wrapped callable is treated as a black box: no derivative is offered.
    """

    def __init__(self, function: Callable[[float], float], name: str | None = None):
        if not callable(function):
            raise TypeError(f"Expected a callable, got {type(function).__name__}")
        self._function = function
        self.name = name or getattr(function, "__name__", "f")

    def evaluate(self, x: float) -> float:
        return float(self._function(x))

    def __call__(self, x: float) -> float:
        return self.evaluate(x)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class DifferentiableUnivariate(Univariate):
    """Callable adapter paired with an exact derivative."""

    def __init__(
        self,
        function: Callable[[float], float],
        derivative: Callable[[float], float] | ScalarFunction,
        name: str | None = None,
    ):
        super().__init__(function, name=name)
        self._derivative = as_function(derivative)

    def derivative(self) -> ScalarFunction:
        return self._derivative


def as_function(function: Any) -> ScalarFunction:
    """
    Normalize ``function`` to the scalar function contract.

    Objects already exposing ``evaluate`` are returned unchanged so that an
    exact ``derivative()`` stays reachable.
    """
    if isinstance(function, ScalarFunction):
        return function
    if callable(function):
        return Univariate(function)
    raise TypeError(f"Expected a scalar function or callable, got {type(function).__name__}")


def is_differentiable(function: Any) -> bool:
    """True when ``function`` exposes an exact derivative."""
    return isinstance(function, DifferentiableFunction)
