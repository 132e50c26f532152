import enum
import re
from dataclasses import dataclass

from rpn.registry import OperatorRegistry
from rpn.utils import PrintableEnum
from rpn.value import Value, format_number, parse_operand

DELIMITER_PATT = re.compile(r"[\s,]+")


class PostfixTokenType(PrintableEnum):
    NUMBER = enum.auto()
    LITERAL = enum.auto()
    OPERATOR = enum.auto()


@dataclass
class PostfixToken:
    type: PostfixTokenType
    value: Value

    def __str__(self) -> str:
        if self.type is PostfixTokenType.NUMBER:
            return format_number(self.value)  # type: ignore
        return str(self.value)


def tokenize_postfix(code: str, registry: OperatorRegistry) -> list[PostfixToken]:
    """Splits postfix code on whitespace and commas, then splits each chunk on operator tokens.

    Operators need no surrounding delimiters: ``2 3**`` reads as ``2 3 **``.
    Text between operators becomes a number when it parses as one, an opaque
    literal otherwise.
    """
    tokens: list[PostfixToken] = []
    for chunk in DELIMITER_PATT.split(code):
        if not chunk:
            continue
        if chunk in registry:
            tokens.append(PostfixToken(PostfixTokenType.OPERATOR, chunk))
            continue
        _scan_chunk(chunk, registry, tokens)
    return tokens


def _scan_chunk(chunk: str, registry: OperatorRegistry, tokens: list[PostfixToken]) -> None:
    operand_start_idx = 0
    i = 0
    while i < len(chunk):
        operator = registry.match_token(chunk, i)
        if operator is None:
            i += 1
            continue
        if operand_start_idx < i:
            tokens.append(_operand(chunk[operand_start_idx:i]))
        tokens.append(PostfixToken(PostfixTokenType.OPERATOR, operator))
        i += len(operator)
        operand_start_idx = i
    if operand_start_idx < len(chunk):
        tokens.append(_operand(chunk[operand_start_idx:]))


def _operand(lexeme: str) -> PostfixToken:
    number = parse_operand(lexeme)
    if number is None:
        return PostfixToken(PostfixTokenType.LITERAL, lexeme)
    return PostfixToken(PostfixTokenType.NUMBER, number)
