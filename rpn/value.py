import re
import sys
from decimal import Decimal
from typing import Optional

from rpn.errors import LimitExceededError

Number = int | float
Value = int | float | str

HEX_PATT = re.compile(r"0x[0-9a-f]+", re.IGNORECASE)
DECIMAL_PATT = re.compile(r"[0-9]+(\.[0-9]+)?")
# postfix operands also take 5. and .5 and an unsigned exponent
POSTFIX_DECIMAL_PATT = re.compile(r"([0-9]+(\.[0-9]*)?|\.[0-9]+)(e[0-9]+)?", re.IGNORECASE)


def match_number(code: str, i: int) -> Optional[tuple[Number, int]]:
    """Matches a numeric literal at ``code[i:]``, returns parsed value and end index"""
    match = HEX_PATT.match(code, i) or DECIMAL_PATT.match(code, i)
    if match is None:
        return None
    return parse_number(match.group()), match.end()


def parse_number(lexeme: str) -> Number:
    if lexeme[:2].lower() == "0x":
        return int(lexeme, 16)
    if lexeme.isdigit():
        try:
            return int(lexeme)
        except ValueError:
            limit = sys.get_int_max_str_digits()
            raise LimitExceededError(
                f"Integer literal has {len(lexeme)} digits, at most {limit} are supported",
                limit=limit,
                actual=len(lexeme),
            ) from None
    return float(lexeme)


def parse_operand(lexeme: str) -> Optional[Number]:
    """Postfix operand classification: a number, or None for an opaque literal"""
    if HEX_PATT.fullmatch(lexeme) or POSTFIX_DECIMAL_PATT.fullmatch(lexeme):
        return parse_number(lexeme)
    return None


def format_number(value: Number) -> str:
    text = repr(value)
    if isinstance(value, float) and "e" in text:
        # 1e-07 => 0.0000001, the exponent sign would otherwise read as an operator
        return format(Decimal(text), "f")
    return text


def type_name(value: object) -> str:
    return type(value).__name__
