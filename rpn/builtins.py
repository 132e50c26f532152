from typing import Callable, Optional

from rpn.registry import Associativity, Implementation, OperatorKind, OperatorRegistry, OperatorSpec
from rpn.value import Value, type_name

BUILTIN_OPERATORS: list[OperatorSpec] = list()

L = Associativity.LEFT
R = Associativity.RIGHT


def register_builtin_operator(
    token: str,
    precedence: int,
    arity: int,
    associativity: Associativity,
    kind: OperatorKind = OperatorKind.INFIX,
    symbol: Optional[str] = None,
):
    def decorator(fn: Implementation) -> Implementation:
        BUILTIN_OPERATORS.append(
            OperatorSpec(
                token=token,
                precedence=precedence,
                arity=arity,
                associativity=associativity,
                kind=kind,
                implementation=fn,
                symbol=symbol,
            )
        )
        return fn

    return decorator


def default_registry() -> OperatorRegistry:
    return OperatorRegistry(BUILTIN_OPERATORS)


def _integral(arg: Value) -> int:
    if isinstance(arg, int):
        return arg
    if isinstance(arg, float) and arg.is_integer():
        return int(arg)
    raise TypeError(f"Bitwise operators are not defined for {type_name(arg)} {arg!r}")


def _bitwise(fn: Callable[[int, int], int]) -> Implementation:
    return lambda a, b: fn(_integral(a), _integral(b))


# brackets are structural, the evaluator never calls them
@register_builtin_operator("(", 20, 0, Associativity.NONE, OperatorKind.BRACKET)
@register_builtin_operator(")", 20, 0, Associativity.NONE, OperatorKind.BRACKET)
def bracket_() -> None:
    return None


@register_builtin_operator("#", 16, 1, R, OperatorKind.PREFIX, symbol="+")
def pos_(a: Value) -> Value:
    return +a  # type: ignore


@register_builtin_operator("_", 16, 1, R, OperatorKind.PREFIX, symbol="-")
def neg_(a: Value) -> Value:
    return -a  # type: ignore


@register_builtin_operator("~", 16, 1, R, OperatorKind.PREFIX)
def invert_(a: Value) -> Value:
    return ~_integral(a)


register_builtin_operator("**", 15, 2, R)(lambda a, b: a**b)
register_builtin_operator("*", 14, 2, L)(lambda a, b: a * b)
register_builtin_operator("/", 14, 2, L)(lambda a, b: a / b)
register_builtin_operator("%", 14, 2, L)(lambda a, b: a % b)
register_builtin_operator("+", 13, 2, L)(lambda a, b: a + b)
register_builtin_operator("-", 13, 2, L)(lambda a, b: a - b)
register_builtin_operator("<<", 12, 2, L)(_bitwise(lambda a, b: a << b))
register_builtin_operator(">>", 12, 2, L)(_bitwise(lambda a, b: a >> b))
register_builtin_operator("&", 9, 2, L)(_bitwise(lambda a, b: a & b))
register_builtin_operator("^", 8, 2, L)(_bitwise(lambda a, b: a ^ b))
register_builtin_operator("|", 7, 2, L)(_bitwise(lambda a, b: a | b))
