import enum
from dataclasses import dataclass
from typing import Optional

from rpn.config import DEFAULT_CONFIG, EngineConfig
from rpn.errors import UnknownTokenError
from rpn.registry import OperatorKind, OperatorRegistry, OperatorSpec
from rpn.utils import PrintableEnum, preview
from rpn.value import Number, format_number, match_number


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    OPERATOR = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()


@dataclass
class Token:
    type: TokenType
    lexeme: str
    value: Optional[Number] = None
    operator: Optional[OperatorSpec] = None

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"

    @property
    def postfix(self) -> str:
        if self.operator is not None:
            return self.operator.token
        if self.value is not None:
            return format_number(self.value)
        return self.lexeme


def _is_skippable(s: str) -> bool:
    return s.isspace() or s == ","


def next_token(
    code: str,
    i: int,
    unary: bool,
    registry: OperatorRegistry,
    config: EngineConfig = DEFAULT_CONFIG,
) -> tuple[Optional[Token], int, bool]:
    """Scans one token from ``code[i:]``.

    Returns the token, the index right after it and the new unary flag. The flag
    is true wherever a sign would start an operand rather than subtract. The
    token is None once only whitespace and commas remain.
    """
    while i < len(code) and _is_skippable(code[i]):
        i += 1
    if i >= len(code):
        return None, i, unary

    number = match_number(code, i)
    if number is not None:
        value, end_idx = number
        return Token(type=TokenType.NUMBER, lexeme=code[i:end_idx], value=value), end_idx, False

    symbol = registry.match_symbol(code, i)
    spec = registry.resolve(symbol, unary) if symbol is not None else None
    if symbol is None or spec is None:
        remainder = preview(code[i:], config.preview_length)
        raise UnknownTokenError(
            f"Unknown token: {remainder!r}", code=code, error_char_idx=i, remainder=code[i : i + config.preview_length]
        )

    end_idx = i + len(symbol)
    if spec.kind is OperatorKind.BRACKET:
        if spec.token == "(":
            return Token(type=TokenType.BRACKET_OPEN, lexeme=symbol), end_idx, True
        return Token(type=TokenType.BRACKET_CLOSE, lexeme=symbol), end_idx, False

    # a nullary operator stands in for an operand, so a sign after it subtracts
    return Token(type=TokenType.OPERATOR, lexeme=symbol, operator=spec), end_idx, spec.arity > 0


def tokenize(code: str, registry: OperatorRegistry, config: EngineConfig = DEFAULT_CONFIG) -> list[Token]:
    i = 0
    unary = True
    tokens: list[Token] = []
    while True:
        token, i, unary = next_token(code, i, unary, registry, config)
        if token is None:
            return tokens
        tokens.append(token)


def untokenize(tokens: list[Token]) -> str:
    return " ".join(t.postfix for t in tokens)
