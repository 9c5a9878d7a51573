"""
Shared pytest fixtures for the kmath test suite.

This module provides:
- Standard sample functions with known derivatives and integrals
- Helpers for comparing numpy results and pydantic round trips
- A settings fixture that clears the cached configuration
"""

from typing import Any, Type, TypeVar

import numpy as np
import pytest
from pydantic import BaseModel

from kmath.core.config import get_settings
from kmath.function.node import Arithmetic, Constant, Operator, Variable


T = TypeVar('T', bound=BaseModel)


@pytest.fixture
def x():
    """The variable node."""
    return Variable()


@pytest.fixture
def parabola(x):
    """``x * (x + 1)``: integral over [0, 4] is 88/3, derivative ``2x + 1``."""
    return Arithmetic(x, Arithmetic(x, Constant(1), Operator.ADD), Operator.MULTIPLY)


@pytest.fixture
def cubic():
    """Plain callable ``x^3 - 2x - 5`` with a single real root near 2.0946."""
    return lambda value: value ** 3 - 2.0 * value - 5.0


@pytest.fixture
def cubic_root():
    return 2.0945514815423265


@pytest.fixture
def assert_array_close():
    """Assert that two numeric sequences agree element-wise."""
    def _assert_close(actual: Any, expected: Any, tol: float = 1e-9) -> None:
        actual = np.asarray(actual, dtype=float)
        expected = np.asarray(expected, dtype=float)
        assert actual.shape == expected.shape, f"{actual.shape} != {expected.shape}"
        assert np.allclose(actual, expected, rtol=tol, atol=tol), f"{actual} != {expected}"

    return _assert_close


@pytest.fixture
def assert_serializable():
    """Helper to assert that a model survives ``model_dump`` and reconstruction."""
    def _assert_serialization(model: BaseModel, model_class: Type[T]) -> T:
        serialized = model.model_dump()
        reconstructed = model_class.model_validate(serialized)
        assert reconstructed == model
        assert reconstructed.model_dump() == serialized
        return reconstructed

    return _assert_serialization


@pytest.fixture
def fresh_settings():
    """Clear the cached settings before and after a test that changes the environment."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()
