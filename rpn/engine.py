"""Infix to postfix conversion and postfix evaluation over a per-instance operator table.

    >>> rpn = RPN()
    >>> rpn.generate("2*(5+7)")
    '2 5 7 + *'
    >>> rpn.calculate("2 5 7 + *")
    24
"""
import logging
from typing import Any, Optional

from rpn.builtins import default_registry
from rpn.config import DEFAULT_CONFIG, EngineConfig
from rpn.errors import ArgumentTypeError, LimitExceededError
from rpn.parser import to_postfix
from rpn.postfix import tokenize_postfix
from rpn.registry import Implementation, OperatorRegistry
from rpn.runtime import evaluate
from rpn.tokenizer import untokenize
from rpn.value import Value, type_name

logger = logging.getLogger(__name__)


class RPN:
    def __init__(self, registry: Optional[OperatorRegistry] = None, config: EngineConfig = DEFAULT_CONFIG) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.config = config

    def generate(self, expression: str) -> str:
        """Converts an infix expression to space-separated postfix notation"""
        self._check_input(expression, "expression")
        postfix = untokenize(to_postfix(expression, self.registry, self.config))
        logger.debug("Generated %r from %r", postfix, expression)
        return postfix

    def calculate(self, postfix: str) -> Value:
        """Evaluates a postfix expression to a single value"""
        self._check_input(postfix, "postfix")
        return self._calculate(postfix)

    __call__ = calculate

    def evaluate(self, expression: str) -> Value:
        """Converts and evaluates an infix expression"""
        return self._calculate(self.generate(expression))

    def _calculate(self, postfix: str) -> Value:
        result = evaluate(tokenize_postfix(postfix, self.registry), self.registry)
        logger.debug("Calculated %r from %r", result, postfix)
        return result

    def register_operator(self, token: str, arity: int, implementation: Implementation) -> "RPN":
        self.registry.register(token, arity, implementation)
        return self

    def _check_input(self, arg: Any, name: str) -> None:
        if not isinstance(arg, str):
            raise ArgumentTypeError(f"{name} must be a string, got {type_name(arg)}", arg=arg)
        limit = self.config.max_expression_length
        if limit is not None and len(arg) > limit:
            raise LimitExceededError(f"{name} is longer than {limit} characters", limit=limit, actual=len(arg))
