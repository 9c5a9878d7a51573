"""
Library exceptions.

Every error derives from :class:`KmathError` and from the builtin exception
closest in meaning, so callers can catch either the library hierarchy or the
usual Python exception types.
"""

from typing import Any, Dict, Optional


class KmathError(Exception):
    """Base exception for kmath errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DomainError(KmathError, ValueError):
    """Raised when an expression is evaluated outside of its domain"""

    def __init__(self, message: str, x: Optional[float] = None):
        details = {"x": x} if x is not None else {}
        super().__init__(message=message, details=details)


class ExpressionArithmeticError(KmathError, ArithmeticError):
    """Raised when a symbolic rewrite would divide by the zero constant"""

    def __init__(self, message: str = "Division by zero constant in expression"):
        super().__init__(message=message)


class InvalidBracketError(KmathError, ValueError):
    """Raised when a bracket does not enclose a sign change"""

    def __init__(self, a: float, b: float, fa: float, fb: float):
        super().__init__(
            message=(
                "The interval must evaluate to opposite signs at the endpoints, "
                f"got f({a})={fa}, f({b})={fb}"
            ),
            details={"a": a, "b": b, "fa": fa, "fb": fb},
        )


class NotConvergedError(KmathError, RuntimeError):
    """Raised when an iterative method exhausts its step budget"""

    def __init__(self, method: str, steps: int, estimate: Optional[float] = None):
        details: Dict[str, Any] = {"method": method, "steps": steps}
        if estimate is not None:
            details["estimate"] = estimate
        super().__init__(
            message=f"{method} did not converge within {steps} steps",
            details=details,
        )


class DivisionByZeroError(KmathError, ZeroDivisionError):
    """Raised when Newton-Raphson meets a vanishing derivative"""

    def __init__(self, x: float, derivative: float):
        super().__init__(
            message=f"Derivative vanishes at x={x} (f'(x)={derivative})",
            details={"x": x, "derivative": derivative},
        )


class NotDifferentiableError(KmathError, TypeError):
    """Raised when a method needs an exact derivative the function lacks"""

    def __init__(self, function: Any):
        super().__init__(
            message=(
                "Function must be exactly differentiable to use the "
                f"Newton-Raphson method, got {type(function).__name__}"
            ),
            details={"function_type": type(function).__name__},
        )


class InsufficientSamplesError(KmathError, ValueError):
    """Raised when an interval has too few samples for a numeric method"""

    def __init__(self, count: int, required: int = 2):
        super().__init__(
            message=f"Interval must have at least {required} samples, got {count}",
            details={"count": count, "required": required},
        )


class DegenerateIntervalError(KmathError, ValueError):
    """Raised when an interval collapses to a single point"""

    def __init__(self, value: float, method: str = "gaussian quadrature"):
        super().__init__(
            message=(
                "Interval must have distinct sample values to use "
                f"{method}, got {value} twice"
            ),
            details={"min": value, "max": value},
        )
