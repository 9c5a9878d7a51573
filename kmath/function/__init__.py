"""
kmath.function - scalar functions of one real variable

- Expression trees with evaluation, simplification and exact differentiation
- Callable adapters satisfying the scalar function contract
- Polynomials and Legendre polynomials
"""

from .function import (
    DifferentiableFunction,
    DifferentiableUnivariate,
    ScalarFunction,
    Univariate,
    as_function,
    is_differentiable,
)
from .node import (
    E,
    Arithmetic,
    Constant,
    Logarithm,
    Negate,
    Node,
    NodeAdapter,
    Operator,
    Power,
    Variable,
    differentiate,
    dump,
    evaluate,
    ln,
    log,
    simplify,
    to_string,
    to_sympy,
)
from .polynomial import LegendrePolynomial, PolynomialFunction

__all__ = [
    "ScalarFunction",
    "DifferentiableFunction",
    "Univariate",
    "DifferentiableUnivariate",
    "as_function",
    "is_differentiable",
    "E",
    "Node",
    "NodeAdapter",
    "Operator",
    "Constant",
    "Variable",
    "Negate",
    "Arithmetic",
    "Power",
    "Logarithm",
    "ln",
    "log",
    "evaluate",
    "simplify",
    "differentiate",
    "dump",
    "to_string",
    "to_sympy",
    "PolynomialFunction",
    "LegendrePolynomial",
]
