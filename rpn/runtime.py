import logging
from collections import deque
from typing import Iterable

from rpn.errors import NonConvergenceError, OperandUnderflowError, OperatorFailureError, UnknownOperatorError
from rpn.postfix import PostfixToken, PostfixTokenType
from rpn.registry import OperatorKind, OperatorRegistry, OperatorSpec
from rpn.value import Value

logger = logging.getLogger(__name__)


def evaluate(tokens: Iterable[PostfixToken], registry: OperatorRegistry) -> Value:
    queue = deque(tokens)
    stack: list[Value] = []
    while queue:
        token = queue.popleft()
        if token.type is not PostfixTokenType.OPERATOR:
            stack.append(token.value)
            continue

        operator = registry.lookup(token.value)  # type: ignore
        if operator is None:
            raise UnknownOperatorError(f"Unknown operator: {token.value!r}", token=str(token.value))
        if operator.kind is OperatorKind.BRACKET:
            logger.warning("Skipping bracket %r in postfix expression", operator.token)
            continue
        apply_operator(operator, stack)

    if len(stack) != 1:
        raise NonConvergenceError(f"Expression left {len(stack)} values instead of one", stack=stack)
    return stack[0]


def apply_operator(operator: OperatorSpec, stack: list[Value]) -> None:
    """Pops the operands of ``operator``, leftmost first, and pushes its result if it has one"""
    if len(stack) < operator.arity:
        raise OperandUnderflowError(
            f"Operator {operator.token!r} needs {operator.arity} operands, {len(stack)} available",
            token=operator.token,
            arity=operator.arity,
            available=len(stack),
        )
    args: list[Value] = []
    if operator.arity:
        args = stack[-operator.arity :]
        del stack[-operator.arity :]

    try:
        result = operator(*args)
    except (ArithmeticError, TypeError, ValueError) as e:
        raise OperatorFailureError(f"Operator {operator.token!r} failed on {args!r}: {e}", token=operator.token) from e

    if result is not None:
        stack.append(result)
