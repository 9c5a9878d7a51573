"""Core utilities package"""

from .config import Settings, settings, get_settings
from .logging import setup_logging, get_logger, get_context_logger
from .errors import (
    KmathError,
    DomainError,
    ExpressionArithmeticError,
    InvalidBracketError,
    NotConvergedError,
    DivisionByZeroError,
    NotDifferentiableError,
    InsufficientSamplesError,
    DegenerateIntervalError,
)

__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "get_context_logger",
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
