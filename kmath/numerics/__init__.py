"""
kmath.numerics - numerical methods over scalar functions

Root finding, quadrature and forward-difference differentiation.
"""

from .differentiation import ForwardDifference
from .gauss_legendre import GAUSS_LEGENDRE_TABLE, gauss_legendre_rule, legendre_rule
from .quadrature import (
    GaussianQuadrature,
    GaussianRule,
    Quadrature,
    SimpsonQuadrature,
    TrapezoidQuadrature,
    definite_integral,
)
from .roots import INTERVAL_EPSILON, ROOT_EPSILON, bisection, false_position, newton_raphson

__all__ = [
    "ROOT_EPSILON",
    "INTERVAL_EPSILON",
    "bisection",
    "false_position",
    "newton_raphson",
    "Quadrature",
    "TrapezoidQuadrature",
    "SimpsonQuadrature",
    "GaussianQuadrature",
    "GaussianRule",
    "definite_integral",
    "GAUSS_LEGENDRE_TABLE",
    "gauss_legendre_rule",
    "legendre_rule",
    "ForwardDifference",
]
