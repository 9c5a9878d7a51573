"""
Expression nodes for real valued functions of a single variable ``x``.

The node hierarchy is closed: a tree is built from exactly six variants,

- ``Constant(value)``
- ``Variable()``
- ``Negate(operand)``
- ``Arithmetic(left, right, op)``
- ``Power(base, exponent)``
- ``Logarithm(base, argument)``

Nodes are frozen pydantic models, so trees compare structurally, hash, and
round-trip through ``model_dump`` / :data:`NodeAdapter`. Every operation on a
tree (:func:`evaluate`, :func:`simplify`, :func:`differentiate`, :func:`dump`,
:func:`to_string`, :func:`to_sympy`) is a single function dispatching over the
six variants; the methods on the node classes delegate to them.

Example:
    >>> x = Variable()
    >>> f = Constant(2) * x + x ** 2
    >>> f.differentiate().evaluate(5.0)
    12.0
"""

from __future__ import annotations

import math
import numbers
from enum import Enum
from typing import Annotated, Any, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from ..core.errors import DomainError, ExpressionArithmeticError

E = math.e

INDENT = "    "


class Operator(str, Enum):
    """Binary arithmetic operators."""

    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def precedence(self) -> int:
        return 1 if self in (Operator.ADD, Operator.SUBTRACT) else 2

    def apply(self, left: float, right: float) -> float:
        return _OPERATIONS[self](left, right)


_OPERATIONS: dict[Operator, Callable[[float, float], float]] = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUBTRACT: lambda a, b: a - b,
    Operator.MULTIPLY: lambda a, b: a * b,
    Operator.DIVIDE: lambda a, b: a / b,
}

_SYMBOLS = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "-",
    Operator.MULTIPLY: "*",
    Operator.DIVIDE: "/",
}


def _coerce_node(value: Any) -> Any:
    """Allow plain numbers wherever a child node is expected."""
    if isinstance(value, bool):
        raise TypeError("Booleans are not valid expression nodes")
    if isinstance(value, numbers.Real):
        return Constant(float(value))
    return value


class _NodeBase(BaseModel):
    """
    Shared behaviour of all expression nodes.

    Provides the scalar function contract (``evaluate`` / ``derivative``),
    the symbolic operations, and operator overloading for building trees.
    """

    model_config = ConfigDict(frozen=True)

    # Scalar function contract

    def evaluate(self, x: float) -> float:
        """Evaluate the expression at ``x``."""
        return evaluate(self, x)  # type: ignore[arg-type]

    def __call__(self, x: float) -> float:
        return self.evaluate(x)

    def derivative(self) -> Node:
        """Exact derivative, same as :meth:`differentiate`."""
        return self.differentiate()

    # Symbolic operations

    def simplify(self) -> Node:
        return simplify(self)  # type: ignore[arg-type]

    def differentiate(self) -> Node:
        return differentiate(self)  # type: ignore[arg-type]

    # Output formats

    def dump(self, indent: int = 0) -> str:
        """Indented tree dump for debugging."""
        return dump(self, indent)  # type: ignore[arg-type]

    def to_string(self) -> str:
        return to_string(self)  # type: ignore[arg-type]

    def to_sympy(self) -> Any:
        return to_sympy(self)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return self.to_string()

    # Tree construction

    def __add__(self, other: Any) -> Node:
        return _build(self, other, Operator.ADD)

    def __radd__(self, other: Any) -> Node:
        return _build(other, self, Operator.ADD)

    def __sub__(self, other: Any) -> Node:
        return _build(self, other, Operator.SUBTRACT)

    def __rsub__(self, other: Any) -> Node:
        return _build(other, self, Operator.SUBTRACT)

    def __mul__(self, other: Any) -> Node:
        return _build(self, other, Operator.MULTIPLY)

    def __rmul__(self, other: Any) -> Node:
        return _build(other, self, Operator.MULTIPLY)

    def __truediv__(self, other: Any) -> Node:
        return _build(self, other, Operator.DIVIDE)

    def __rtruediv__(self, other: Any) -> Node:
        return _build(other, self, Operator.DIVIDE)

    def __pow__(self, other: Any) -> Node:
        return Power(self, _coerce_node(other))

    def __rpow__(self, other: Any) -> Node:
        return Power(_coerce_node(other), self)

    def __neg__(self) -> Node:
        return Negate(self)

    def __pos__(self) -> Node:
        return self  # type: ignore[return-value]


class Constant(_NodeBase):
    """A fixed real number."""

    kind: Literal["constant"] = "constant"
    value: float

    def __init__(self, value: float | None = None, **data: Any) -> None:
        if value is not None:
            data["value"] = value
        super().__init__(**data)

    def __neg__(self) -> Node:
        return Constant(-self.value)


class Variable(_NodeBase):
    """The free variable ``x``."""

    kind: Literal["variable"] = "variable"


class Negate(_NodeBase):
    kind: Literal["negate"] = "negate"
    operand: Node

    def __init__(self, operand: Any = None, **data: Any) -> None:
        if operand is not None:
            data["operand"] = operand
        super().__init__(**data)

    @field_validator("operand", mode="before")
    @classmethod
    def _validate_operand(cls, value: Any) -> Any:
        return _coerce_node(value)


class Arithmetic(_NodeBase):
    """
    Binary arithmetic on two sub-expressions.

    Examples: x + 2, x * x, 1 / x
    """

    kind: Literal["arithmetic"] = "arithmetic"
    left: Node
    right: Node
    op: Operator

    def __init__(self, left: Any = None, right: Any = None, op: Operator | str | None = None, **data: Any) -> None:
        if left is not None:
            data["left"] = left
        if right is not None:
            data["right"] = right
        if op is not None:
            data["op"] = op
        super().__init__(**data)

    @field_validator("left", "right", mode="before")
    @classmethod
    def _validate_children(cls, value: Any) -> Any:
        return _coerce_node(value)


class Power(_NodeBase):
    """``base`` raised to ``exponent``; both may depend on ``x``."""

    kind: Literal["power"] = "power"
    base: Node
    exponent: Node

    def __init__(self, base: Any = None, exponent: Any = None, **data: Any) -> None:
        if base is not None:
            data["base"] = base
        if exponent is not None:
            data["exponent"] = exponent
        super().__init__(**data)

    @field_validator("base", "exponent", mode="before")
    @classmethod
    def _validate_children(cls, value: Any) -> Any:
        return _coerce_node(value)


class Logarithm(_NodeBase):
    """
    Logarithm of ``argument`` in ``base``.

    The natural logarithm is ``Logarithm(Constant(E), argument)``, see :func:`ln`.
    """

    kind: Literal["logarithm"] = "logarithm"
    base: Node
    argument: Node

    def __init__(self, base: Any = None, argument: Any = None, **data: Any) -> None:
        if base is not None:
            data["base"] = base
        if argument is not None:
            data["argument"] = argument
        super().__init__(**data)

    @field_validator("base", "argument", mode="before")
    @classmethod
    def _validate_children(cls, value: Any) -> Any:
        return _coerce_node(value)


Node = Annotated[
    Union[Constant, Variable, Negate, Arithmetic, Power, Logarithm],
    Field(discriminator="kind"),
]

for _model in (Constant, Variable, Negate, Arithmetic, Power, Logarithm):
    _model.model_rebuild()

NodeAdapter: TypeAdapter[Node] = TypeAdapter(Node)


# Construction helpers


def ln(argument: Any) -> Logarithm:
    """Natural logarithm of ``argument``."""
    return Logarithm(Constant(E), _coerce_node(argument))


def log(base: Any, argument: Any) -> Logarithm:
    return Logarithm(_coerce_node(base), _coerce_node(argument))


def _build(left: Any, right: Any, op: Operator) -> Node:
    """Build ``left op right``, folding two constants eagerly."""
    left = _coerce_node(left)
    right = _coerce_node(right)
    if not isinstance(left, _NodeBase) or not isinstance(right, _NodeBase):
        return NotImplemented
    if isinstance(left, Constant) and isinstance(right, Constant):
        if not (op is Operator.DIVIDE and right.value == 0.0):
            return Constant(op.apply(left.value, right.value))
    return Arithmetic(left, right, op)


def _is_constant(node: Node, value: float | None = None) -> bool:
    if not isinstance(node, Constant):
        return False
    return value is None or node.value == value


# Evaluation


def evaluate(node: Node, x: float) -> float:
    """
    Evaluate ``node`` at ``x``.

    Raises:
        DomainError: on division by exactly zero, a logarithm of a
            non-positive argument or base (or base 1), or a power without
            a real value.
    """
    if isinstance(node, Constant):
        return node.value
    if isinstance(node, Variable):
        return float(x)
    if isinstance(node, Negate):
        return -evaluate(node.operand, x)
    if isinstance(node, Arithmetic):
        left = evaluate(node.left, x)
        right = evaluate(node.right, x)
        if node.op is Operator.DIVIDE and right == 0.0:
            raise DomainError(f"Division by zero at x={x}", x=x)
        return node.op.apply(left, right)
    if isinstance(node, Power):
        base = evaluate(node.base, x)
        exponent = evaluate(node.exponent, x)
        try:
            return math.pow(base, exponent)
        except OverflowError:
            # saturate like float arithmetic does; odd integer powers keep the sign
            if base < 0.0 and exponent.is_integer() and exponent % 2 == 1:
                return -math.inf
            return math.inf
        except (ValueError, ZeroDivisionError) as e:
            raise DomainError(f"{base} ** {exponent} has no real value at x={x}", x=x) from e
    if isinstance(node, Logarithm):
        base = evaluate(node.base, x)
        argument = evaluate(node.argument, x)
        if argument <= 0.0:
            raise DomainError(f"Logarithm of non-positive value {argument} at x={x}", x=x)
        if base <= 0.0 or base == 1.0:
            raise DomainError(f"Invalid logarithm base {base} at x={x}", x=x)
        if base == E:
            return math.log(argument)
        return math.log(argument) / math.log(base)
    raise TypeError(f"Unknown node type: {type(node).__name__}")


# Simplification


def simplify(node: Node) -> Node:
    """
    Return an equivalent, usually smaller tree.

    Children are simplified first. Constants fold, additive and
    multiplicative identities and zeros are removed, and trivial powers
    collapse. Never mutates ``node``.

    Raises:
        ExpressionArithmeticError: when the tree divides by the zero constant.
    """
    if isinstance(node, (Constant, Variable)):
        return node
    if isinstance(node, Negate):
        return Negate(simplify(node.operand))
    if isinstance(node, Arithmetic):
        return _simplify_arithmetic(simplify(node.left), simplify(node.right), node.op)
    if isinstance(node, Power):
        return _simplify_power(simplify(node.base), simplify(node.exponent))
    if isinstance(node, Logarithm):
        return Logarithm(simplify(node.base), simplify(node.argument))
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def _simplify_arithmetic(left: Node, right: Node, op: Operator) -> Node:
    if isinstance(left, Constant) and isinstance(right, Constant):
        if op is Operator.DIVIDE and right.value == 0.0:
            raise ExpressionArithmeticError()
        return Constant(op.apply(left.value, right.value))

    if _is_constant(left, 0.0):
        if op is Operator.ADD:
            return right
        if op is Operator.SUBTRACT:
            return Negate(right)
        return Constant(0.0)

    if _is_constant(right, 0.0):
        if op is Operator.DIVIDE:
            raise ExpressionArithmeticError()
        if op is Operator.MULTIPLY:
            return Constant(0.0)
        return left

    if _is_constant(left, 1.0) and op is Operator.MULTIPLY:
        return right
    if _is_constant(right, 1.0) and op in (Operator.MULTIPLY, Operator.DIVIDE):
        return left

    return Arithmetic(left, right, op)


def _simplify_power(base: Node, exponent: Node) -> Node:
    # base checks win over exponent checks, so 0^0 -> 0
    if _is_constant(base, 0.0):
        return Constant(0.0)
    if _is_constant(base, 1.0):
        return Constant(1.0)
    if _is_constant(exponent, 0.0):
        return Constant(1.0)
    if _is_constant(exponent, 1.0):
        return base
    return Power(base, exponent)


# Differentiation


def differentiate(node: Node) -> Node:
    """
    Exact derivative of ``node`` with respect to ``x``, simplified.

    Raises:
        ExpressionArithmeticError: when the simplified derivative would
            divide by the zero constant.
    """
    if isinstance(node, Constant):
        return Constant(0.0)
    if isinstance(node, Variable):
        return Constant(1.0)
    if isinstance(node, Negate):
        return simplify(Negate(differentiate(node.operand)))
    if isinstance(node, Arithmetic):
        return simplify(_differentiate_arithmetic(node))
    if isinstance(node, Power):
        return _differentiate_power(node)
    if isinstance(node, Logarithm):
        return _differentiate_logarithm(node)
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def _differentiate_arithmetic(node: Arithmetic) -> Node:
    left, right, op = node.left, node.right, node.op

    if op in (Operator.ADD, Operator.SUBTRACT):
        return Arithmetic(differentiate(left), differentiate(right), op)

    if isinstance(left, Constant) and isinstance(right, Constant):
        return Constant(0.0)

    if op is Operator.MULTIPLY:
        # c * x and x * c differentiate to c directly
        if isinstance(left, Variable) and isinstance(right, Constant):
            return right
        if isinstance(left, Constant) and isinstance(right, Variable):
            return left

        terms = []
        if not isinstance(right, Constant):
            terms.append(Arithmetic(left, differentiate(right), Operator.MULTIPLY))
        if not isinstance(left, Constant):
            terms.append(Arithmetic(differentiate(left), right, Operator.MULTIPLY))
        if len(terms) == 2:
            return Arithmetic(terms[0], terms[1], Operator.ADD)
        return terms[0]

    # quotient rule: (f'g - fg') / g^2
    leading = Arithmetic(differentiate(left), right, Operator.MULTIPLY) if not isinstance(left, Constant) else None
    trailing = Arithmetic(left, differentiate(right), Operator.MULTIPLY) if not isinstance(right, Constant) else None
    if leading is not None and trailing is not None:
        numerator: Node = Arithmetic(leading, trailing, Operator.SUBTRACT)
    elif leading is not None:
        numerator = leading
    else:
        numerator = Negate(trailing)
    denominator = Power(right, Constant(2.0))
    return Arithmetic(numerator, denominator, Operator.DIVIDE)


def _differentiate_power(node: Power) -> Node:
    base, exponent = node.base, node.exponent

    if isinstance(exponent, Constant):
        # power rule with chain rule on the base
        scaled = Arithmetic(
            Constant(exponent.value),
            Power(base, Constant(exponent.value - 1.0)),
            Operator.MULTIPLY,
        )
        return simplify(Arithmetic(scaled, differentiate(base), Operator.MULTIPLY))

    # logarithmic differentiation: (b^e)' = b^e * (e * ln b)'
    log_derivative = differentiate(Arithmetic(ln(base), exponent, Operator.MULTIPLY))
    return simplify(Arithmetic(node, log_derivative, Operator.MULTIPLY))


def _differentiate_logarithm(node: Logarithm) -> Node:
    if _is_constant(node.base, E):
        return simplify(Arithmetic(differentiate(node.argument), node.argument, Operator.DIVIDE))

    # change of base: log_b(u) = ln(u) / ln(b)
    return differentiate(Arithmetic(ln(node.argument), ln(node.base), Operator.DIVIDE))


# Output formats


def dump(node: Node, indent: int = 0) -> str:
    """Indented, one node per line representation of the tree."""
    prefix = INDENT * indent
    if isinstance(node, Constant):
        return f"{prefix}Constant({node.value})"
    if isinstance(node, Variable):
        return f"{prefix}Variable(x)"
    if isinstance(node, Negate):
        return f"{prefix}Negate()\n" + dump(node.operand, indent + 1)
    if isinstance(node, Arithmetic):
        return (
            f"{prefix}Arithmetic({node.op.value})\n"
            + dump(node.left, indent + 1) + "\n"
            + dump(node.right, indent + 1)
        )
    if isinstance(node, Power):
        return f"{prefix}Power()\n" + dump(node.base, indent + 1) + "\n" + dump(node.exponent, indent + 1)
    if isinstance(node, Logarithm):
        return f"{prefix}Logarithm()\n" + dump(node.base, indent + 1) + "\n" + dump(node.argument, indent + 1)
    raise TypeError(f"Unknown node type: {type(node).__name__}")


_ATOM = 5
_POWER = 4
_UNARY = 3


def _precedence(node: Node) -> int:
    if isinstance(node, Arithmetic):
        return node.op.precedence
    if isinstance(node, Power):
        return _POWER
    if isinstance(node, Negate) or (isinstance(node, Constant) and node.value < 0):
        return _UNARY
    return _ATOM


def _format_number(value: float) -> str:
    if value == E:
        return "e"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def to_string(node: Node) -> str:
    """
    Infix rendering with minimal parentheses.

    Examples:
    - Arithmetic(Constant(2), Variable(), MULTIPLY) -> "2 * x"
    - ln(Variable()) -> "ln(x)"
    """
    if isinstance(node, Constant):
        return _format_number(node.value)
    if isinstance(node, Variable):
        return "x"
    if isinstance(node, Negate):
        operand = to_string(node.operand)
        if _precedence(node.operand) < _POWER:
            operand = f"({operand})"
        return f"-{operand}"
    if isinstance(node, Arithmetic):
        op_prec = node.op.precedence
        left = to_string(node.left)
        right = to_string(node.right)
        if _precedence(node.left) < op_prec:
            left = f"({left})"
        if _precedence(node.right) <= op_prec:
            right = f"({right})"
        return f"{left} {node.op.symbol} {right}"
    if isinstance(node, Power):
        base = to_string(node.base)
        exponent = to_string(node.exponent)
        # exponentiation is right associative
        if _precedence(node.base) <= _POWER:
            base = f"({base})"
        if _precedence(node.exponent) < _POWER:
            exponent = f"({exponent})"
        return f"{base}^{exponent}"
    if isinstance(node, Logarithm):
        if _is_constant(node.base, E):
            return f"ln({to_string(node.argument)})"
        return f"log({to_string(node.base)}, {to_string(node.argument)})"
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def to_sympy(node: Node) -> Any:
    """Convert the tree to an equivalent sympy expression in the symbol ``x``."""
    import sympy as sp

    if isinstance(node, Constant):
        if node.value == E:
            return sp.E
        if node.value.is_integer():
            return sp.Integer(int(node.value))
        return sp.Float(node.value)
    if isinstance(node, Variable):
        return sp.Symbol("x")
    if isinstance(node, Negate):
        return -to_sympy(node.operand)
    if isinstance(node, Arithmetic):
        left = to_sympy(node.left)
        right = to_sympy(node.right)
        if node.op is Operator.ADD:
            return left + right
        if node.op is Operator.SUBTRACT:
            return left - right
        if node.op is Operator.MULTIPLY:
            return left * right
        return left / right
    if isinstance(node, Power):
        return sp.Pow(to_sympy(node.base), to_sympy(node.exponent))
    if isinstance(node, Logarithm):
        if _is_constant(node.base, E):
            return sp.log(to_sympy(node.argument))
        return sp.log(to_sympy(node.argument), to_sympy(node.base))
    raise TypeError(f"Unknown node type: {type(node).__name__}")
