"""Tests for exact differentiation of expression trees."""

import math

import pytest
import sympy as sp

from kmath.core.errors import ExpressionArithmeticError
from kmath.function.node import (
    Arithmetic,
    Constant,
    Negate,
    Operator,
    Power,
    Variable,
    differentiate,
    ln,
    log,
)


ADD, SUB, MUL, DIV = Operator.ADD, Operator.SUBTRACT, Operator.MULTIPLY, Operator.DIVIDE


class TestBasicRules:
    """Leaves, negation, sums and differences."""

    def test_constant(self):
        """Test d(7) = 0."""
        assert differentiate(Constant(7)) == Constant(0)

    def test_variable(self, x):
        """Test d(x) = 1."""
        assert differentiate(x) == Constant(1)

    def test_negate(self, x):
        """Test d(-x) = -1."""
        derivative = differentiate(Negate(x))
        assert derivative == Negate(Constant(1))
        assert derivative.evaluate(3.0) == -1.0

    def test_sum_and_difference(self, x):
        """Test d(x + 4) = 1 and d(4 - x) = -1."""
        assert differentiate(Arithmetic(x, Constant(4), ADD)) == Constant(1)
        assert differentiate(Arithmetic(Constant(4), x, SUB)) == Constant(-1)

    def test_derivative_alias(self, parabola):
        """Test derivative(), differentiate() and the module function agree."""
        assert parabola.derivative() == parabola.differentiate() == differentiate(parabola)

    def test_quadratic_example(self, x):
        """Test d(2x + x^2) at 5 is 12."""
        node = Arithmetic(
            Arithmetic(Constant(2), x, MUL),
            Power(x, Constant(2)),
            ADD,
        )
        assert node.differentiate().evaluate(5.0) == 12.0


class TestProductRule:
    """Products."""

    def test_constant_times_constant(self):
        """Test the product of constants has derivative 0."""
        assert differentiate(Arithmetic(Constant(2), Constant(3), MUL)) == Constant(0)

    def test_variable_times_constant(self, x):
        """Test d(3x) = 3 on either side."""
        assert differentiate(Arithmetic(x, Constant(3), MUL)) == Constant(3)
        assert differentiate(Arithmetic(Constant(3), x, MUL)) == Constant(3)

    def test_x_times_x(self, x):
        """Test d(x * x) = x + x."""
        assert differentiate(Arithmetic(x, x, MUL)) == Arithmetic(x, x, ADD)

    def test_parabola(self, parabola):
        """Test d(x * (x + 1)) = 2x + 1."""
        derivative = parabola.differentiate()
        for value in (0.0, 1.5, 4.0):
            assert derivative.evaluate(value) == pytest.approx(2 * value + 1)

    def test_constant_factor_term_omitted(self, x):
        """Test d(5 * x^2) at 3 is 30."""
        node = Arithmetic(Constant(5), Power(x, Constant(2)), MUL)
        assert node.differentiate().evaluate(3.0) == pytest.approx(30.0)


class TestQuotientRule:
    """Quotients."""

    def test_constant_over_constant(self):
        """Test the quotient of constants has derivative 0."""
        assert differentiate(Arithmetic(Constant(2), Constant(3), DIV)) == Constant(0)

    def test_reciprocal(self, x):
        """Test d(1 / x) = -1 / x^2."""
        derivative = differentiate(Arithmetic(Constant(1), x, DIV))
        assert derivative == Arithmetic(Negate(Constant(1)), Power(x, Constant(2)), DIV)
        assert derivative.evaluate(2.0) == pytest.approx(-0.25)

    def test_constant_numerator_sign(self, x):
        """Test d(3 / (x + 1)) at 1 is -0.75."""
        derivative = differentiate(Arithmetic(Constant(3), Arithmetic(x, Constant(1), ADD), DIV))
        assert derivative.evaluate(1.0) == pytest.approx(-0.75)

    def test_constant_denominator(self, x):
        """Test d(x / 2) = 0.5."""
        derivative = differentiate(Arithmetic(x, Constant(2), DIV))
        assert derivative.evaluate(10.0) == pytest.approx(0.5)

    def test_general_quotient(self, x):
        """Test d(x^2 / (x + 1)) at 1 is 0.75."""
        node = Arithmetic(Power(x, Constant(2)), Arithmetic(x, Constant(1), ADD), DIV)
        # (x^2 + 2x) / (x + 1)^2
        assert node.differentiate().evaluate(1.0) == pytest.approx(0.75)

    def test_division_by_zero_constant_raises(self, x):
        """Test dividing by a zero constant raises ExpressionArithmeticError."""
        with pytest.raises(ExpressionArithmeticError):
            differentiate(Arithmetic(x, Constant(0), DIV))


class TestPowerRule:
    """Powers with constant and variable exponents."""

    def test_constant_exponent(self, x):
        """Test d(x^3) at 2 is 12."""
        assert differentiate(Power(x, Constant(3))).evaluate(2.0) == pytest.approx(12.0)

    def test_square(self, x):
        """Test d(x^2) = 2 * x."""
        assert differentiate(Power(x, Constant(2))) == Arithmetic(Constant(2), x, MUL)

    def test_chain_rule_on_base(self, x):
        """Test d((3x)^2) at 1 is 18."""
        node = Power(Arithmetic(Constant(3), x, MUL), Constant(2))
        # 2 * (3x) * 3
        assert node.differentiate().evaluate(1.0) == pytest.approx(18.0)

    def test_variable_exponent(self, x):
        """Test d(2^x) = 2^x ln 2."""
        derivative = differentiate(Power(Constant(2), x))
        assert derivative.evaluate(3.0) == pytest.approx(8.0 * math.log(2.0))

    def test_x_to_the_x(self, x):
        """Test d(x^x) = x^x (ln x + 1)."""
        derivative = differentiate(Power(x, x))
        assert derivative.evaluate(2.0) == pytest.approx(4.0 * (math.log(2.0) + 1.0))


class TestLogarithmRule:
    """Natural and change-of-base logarithms."""

    def test_natural_log(self, x):
        """Test d(ln x) = 1 / x."""
        derivative = differentiate(ln(x))
        assert derivative == Arithmetic(Constant(1), x, DIV)
        assert derivative.evaluate(4.0) == pytest.approx(0.25)

    def test_natural_log_chain(self, x):
        """Test d(ln x^2) = 2 / x."""
        derivative = differentiate(ln(Power(x, Constant(2))))
        assert derivative.evaluate(3.0) == pytest.approx(2.0 / 3.0)

    def test_change_of_base(self, x):
        """Test d(log_2 x) = 1 / (x ln 2)."""
        derivative = differentiate(log(2, x))
        assert derivative.evaluate(3.0) == pytest.approx(1.0 / (3.0 * math.log(2.0)))


class TestAgainstSympy:
    """Derivatives agree with sympy on the converted expression."""

    EXPRESSIONS = [
        lambda x: Arithmetic(Arithmetic(Constant(2), x, MUL), Power(x, Constant(2)), ADD),
        lambda x: Arithmetic(x, Arithmetic(x, Constant(1), ADD), MUL),
        lambda x: Arithmetic(Power(x, Constant(3)), Arithmetic(x, Constant(2), ADD), DIV),
        lambda x: Power(Arithmetic(x, Constant(1), ADD), x),
        lambda x: ln(Arithmetic(Power(x, Constant(2)), Constant(1), ADD)),
        lambda x: log(Constant(10), Arithmetic(Constant(3), x, MUL)),
        lambda x: Negate(Arithmetic(x, ln(x), MUL)),
        lambda x: Arithmetic(Constant(1), Power(x, Constant(0.5)), DIV),
        lambda x: Power(Constant(3), Power(x, Constant(2))),
    ]

    @pytest.mark.parametrize("build", EXPRESSIONS)
    def test_matches_sympy(self, build):
        """Test the derivative matches sympy at several points."""
        node = build(Variable())
        symbol = sp.Symbol("x")
        expected = sp.diff(node.to_sympy(), symbol)
        derivative = node.differentiate()
        for value in (0.5, 1.0, 1.7, 3.0):
            assert derivative.evaluate(value) == pytest.approx(float(expected.subs(symbol, value)), rel=1e-9)
