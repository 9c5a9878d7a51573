"""kmath - symbolic expressions and numerical methods for real functions.

Main namespace package:
- kmath.function: Expression trees, function adapters and polynomials
- kmath.interval: Closed sampled intervals
- kmath.numerics: Root finding, quadrature and numerical differentiation
- kmath.core: Settings, logging and errors
"""

__version__ = "0.1.0"

from .core.errors import (
    DegenerateIntervalError,
    DivisionByZeroError,
    DomainError,
    ExpressionArithmeticError,
    InsufficientSamplesError,
    InvalidBracketError,
    KmathError,
    NotConvergedError,
    NotDifferentiableError,
)
from .function import (
    Arithmetic,
    Constant,
    DifferentiableUnivariate,
    LegendrePolynomial,
    Logarithm,
    Negate,
    Node,
    Operator,
    PolynomialFunction,
    Power,
    Univariate,
    Variable,
    ln,
    log,
)
from .interval import ClosedInterval
from .numerics import (
    ForwardDifference,
    GaussianQuadrature,
    GaussianRule,
    SimpsonQuadrature,
    TrapezoidQuadrature,
    bisection,
    definite_integral,
    false_position,
    newton_raphson,
)

__all__ = [
    "Node",
    "Operator",
    "Constant",
    "Variable",
    "Negate",
    "Arithmetic",
    "Power",
    "Logarithm",
    "ln",
    "log",
    "Univariate",
    "DifferentiableUnivariate",
    "PolynomialFunction",
    "LegendrePolynomial",
    "ClosedInterval",
    "bisection",
    "false_position",
    "newton_raphson",
    "TrapezoidQuadrature",
    "SimpsonQuadrature",
    "GaussianQuadrature",
    "GaussianRule",
    "definite_integral",
    "ForwardDifference",
    "KmathError",
    "DomainError",
    "ExpressionArithmeticError",
    "InvalidBracketError",
    "NotConvergedError",
    "DivisionByZeroError",
    "NotDifferentiableError",
    "InsufficientSamplesError",
    "DegenerateIntervalError",
]
