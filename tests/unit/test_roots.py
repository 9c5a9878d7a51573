"""Tests for the root finding algorithms."""

import logging
import math

import pytest

from kmath.core.errors import (
    DivisionByZeroError,
    InvalidBracketError,
    NotConvergedError,
    NotDifferentiableError,
)
from kmath.function.function import DifferentiableUnivariate, Univariate
from kmath.function.node import Constant, Variable
from kmath.function.polynomial import PolynomialFunction
from kmath.interval import ClosedInterval
from kmath.numerics.roots import bisection, false_position, newton_raphson


@pytest.fixture
def square_minus_25():
    x = Variable()
    return x ** 2 - 25


@pytest.fixture
def tenth_power():
    """``x^10 - 1`` recording every point it is evaluated at."""
    calls = []

    def f(value):
        calls.append(value)
        return value ** 10 - 1.0

    f.calls = calls
    return f


class TestBisection:
    """Bisection on sign-changing brackets."""

    def test_finds_root(self, square_minus_25):
        """Test the root of x^2 - 25 in [0, 10]."""
        assert bisection(square_minus_25, ClosedInterval(0, 10)) == pytest.approx(5.0, abs=1e-6)

    def test_cubic(self, cubic, cubic_root):
        """Test the root of x^3 - 2x - 5 in (2, 3)."""
        assert bisection(cubic, (2.0, 3.0)) == pytest.approx(cubic_root, abs=1e-9)

    def test_pair_order_does_not_matter(self, cubic, cubic_root):
        """Test a reversed (b, a) pair gives the same root."""
        assert bisection(cubic, (3.0, 2.0)) == pytest.approx(cubic_root, abs=1e-9)

    def test_invalid_bracket(self):
        """Test a bracket without a sign change raises InvalidBracketError."""
        with pytest.raises(InvalidBracketError) as exc_info:
            bisection(lambda value: value + 1, ClosedInterval(5, 10))
        assert exc_info.value.details == {"a": 5.0, "b": 10.0, "fa": 6.0, "fb": 11.0}

    def test_invalid_bracket_is_value_error(self):
        """Test InvalidBracketError can be caught as ValueError."""
        with pytest.raises(ValueError):
            bisection(lambda value: value * value + 1, (-1.0, 1.0))

    def test_root_on_endpoint_is_not_a_bracket(self):
        """Test f(a) == 0 is rejected because the product is not negative."""
        with pytest.raises(InvalidBracketError):
            bisection(lambda value: value, (0.0, 1.0))

    def test_interval_tolerance(self):
        """Test stopping once the bracket is narrower than interval_epsilon."""
        root = bisection(lambda value: value - 0.3, (0.0, 1.0), root_epsilon=1e-300, interval_epsilon=0.5)
        assert root == 0.375

    def test_not_converged(self, cubic):
        """Test running out of steps raises NotConvergedError with the estimate."""
        with pytest.raises(NotConvergedError) as exc_info:
            bisection(cubic, (2.0, 3.0), max_steps=3)
        assert exc_info.value.details["method"] == "bisection"
        assert exc_info.value.details["steps"] == 3
        assert 2.0 < exc_info.value.details["estimate"] < 3.0

    def test_not_converged_logs_warning(self, cubic, caplog):
        """Test a warning with structured data is logged before raising."""
        caplog.set_level(logging.WARNING, logger="kmath")
        with pytest.raises(NotConvergedError):
            bisection(cubic, (2.0, 3.0), max_steps=2)
        records = [r for r in caplog.records if r.name == "kmath.numerics.roots"]
        assert records
        assert records[-1].levelno == logging.WARNING
        assert records[-1].extra_data["method"] == "bisection"


class TestFalsePosition:
    """Regula falsi on sign-changing brackets."""

    def test_finds_root(self, square_minus_25):
        """Test the root of x^2 - 25 in (0, 10)."""
        assert false_position(square_minus_25, (0.0, 10.0)) == pytest.approx(5.0, abs=1e-9)

    def test_cubic(self, cubic, cubic_root):
        """Test the root of x^3 - 2x - 5 in [2, 3]."""
        assert false_position(cubic, ClosedInterval(2, 3)) == pytest.approx(cubic_root, abs=1e-9)

    def test_linear_function_in_one_step(self):
        """Test a linear function is solved by the first chord."""
        assert false_position(lambda value: 2.0 * value - 1.0, (0.0, 4.0), max_steps=1) == 0.5

    def test_invalid_bracket(self):
        """Test a bracket without a sign change raises InvalidBracketError."""
        with pytest.raises(InvalidBracketError):
            false_position(lambda value: value + 1, (5.0, 10.0))

    def test_not_converged(self, cubic):
        """Test running out of steps raises NotConvergedError."""
        with pytest.raises(NotConvergedError) as exc_info:
            false_position(cubic, (2.0, 3.0), max_steps=2)
        assert exc_info.value.details["method"] == "false_position"

    def test_convex_function_keeps_right_end_fixed(self, tenth_power):
        """Test x^10 - 1 on (0, 1.3) only ever moves the left end of the bracket."""
        with pytest.raises(NotConvergedError) as exc_info:
            false_position(tenth_power, (0.0, 1.3), max_steps=50)

        # the first two calls check the bracket endpoints
        assert tenth_power.calls[:2] == [0.0, 1.3]
        iterates = tenth_power.calls[2:]
        assert len(iterates) == 50
        assert all(value < 1.0 for value in iterates)
        assert all(left < right for left, right in zip(iterates, iterates[1:]))
        assert exc_info.value.details["estimate"] == iterates[-1]

    def test_convex_function_slower_than_bisection(self, tenth_power):
        """Test bisection converges on x^10 - 1 within the steps false position exhausts."""
        with pytest.raises(NotConvergedError):
            false_position(tenth_power, (0.0, 1.3), max_steps=50)
        assert bisection(tenth_power, (0.0, 1.3), max_steps=50) == pytest.approx(1.0, abs=1e-12)


class TestNewtonRaphson:
    """Newton-Raphson with exact derivatives."""

    def test_expression(self, square_minus_25):
        """Test x^2 - 25 from a positive start."""
        assert newton_raphson(square_minus_25, 1.0) == pytest.approx(5.0, abs=1e-9)

    def test_negative_root(self, square_minus_25):
        """Test x^2 - 25 from a negative start."""
        assert newton_raphson(square_minus_25, -1.0) == pytest.approx(-5.0, abs=1e-9)

    def test_polynomial(self):
        """Test x^2 - 2 as a polynomial converges to sqrt(2)."""
        assert newton_raphson(PolynomialFunction(-2, 0, 1), 1.0) == pytest.approx(math.sqrt(2.0), abs=1e-12)

    def test_differentiable_callable(self, cubic, cubic_root):
        """Test a callable paired with its derivative."""
        f = DifferentiableUnivariate(cubic, lambda value: 3.0 * value * value - 2.0)
        assert newton_raphson(f, 2.0) == pytest.approx(cubic_root, abs=1e-12)

    @pytest.mark.parametrize("wrap", [lambda f: f, Univariate])
    def test_requires_exact_derivative(self, wrap):
        """Test functions without a derivative are rejected before evaluation."""
        calls = []

        def f(value):
            calls.append(value)
            return value

        with pytest.raises(NotDifferentiableError):
            newton_raphson(wrap(f), 1.0)
        assert calls == []

    def test_not_differentiable_is_type_error(self):
        """Test NotDifferentiableError can be caught as TypeError."""
        with pytest.raises(TypeError):
            newton_raphson(abs, 1.0)

    def test_zero_derivative(self):
        """Test a zero slope raises DivisionByZeroError with x."""
        x = Variable()
        with pytest.raises(DivisionByZeroError) as exc_info:
            newton_raphson(x ** 2 + Constant(1), 0.0)
        assert exc_info.value.details["x"] == 0.0

    def test_zero_derivative_is_zero_division_error(self):
        """Test DivisionByZeroError can be caught as ZeroDivisionError."""
        with pytest.raises(ZeroDivisionError):
            newton_raphson(PolynomialFunction(1, 0, 1), 0.0)

    def test_not_converged(self):
        """Test x^2 + 1 never converges."""
        with pytest.raises(NotConvergedError) as exc_info:
            newton_raphson(PolynomialFunction(1, 0, 1), 0.5, max_steps=20)
        assert exc_info.value.details["steps"] == 20
