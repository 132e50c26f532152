from typing import Optional

from rpn.config import DEFAULT_CONFIG, EngineConfig
from rpn.errors import LimitExceededError, UnmatchedBracketError
from rpn.registry import OperatorRegistry, OperatorSpec
from rpn.tokenizer import Token, TokenType, next_token


def to_postfix(code: str, registry: OperatorRegistry, config: EngineConfig = DEFAULT_CONFIG) -> list[Token]:
    """Shunting-yard conversion of an infix expression.

    Each bracket depth gets its own operator stack, so a closing bracket only
    has to flush the stack of the depth it closes.
    """
    stacks: list[list[Token]] = [[]]
    depth = 0
    open_bracket_idxs: list[int] = []
    output: list[Token] = []
    unary = True
    i = 0
    while True:
        operand_position = unary
        token, i, unary = next_token(code, i, unary, registry, config)
        if token is None:
            break
        token_idx = i - len(token.lexeme)

        if token.type is TokenType.NUMBER:
            output.append(token)
        elif token.type is TokenType.OPERATOR:
            _push_operator(token, stacks[depth], output, operand_position)
        elif token.type is TokenType.BRACKET_OPEN:
            depth += 1
            if config.max_bracket_depth is not None and depth > config.max_bracket_depth:
                raise LimitExceededError(
                    f"Bracket nesting exceeds {config.max_bracket_depth}", limit=config.max_bracket_depth, actual=depth
                )
            open_bracket_idxs.append(token_idx)
            if len(stacks) <= depth:
                stacks.append([])
        elif token.type is TokenType.BRACKET_CLOSE:
            _drain(stacks[depth], output)
            depth -= 1
            if depth < 0:
                raise UnmatchedBracketError(
                    "Closing bracket without matching opening bracket",
                    code=code,
                    error_char_idx=token_idx,
                )
            open_bracket_idxs.pop()
        else:
            raise RuntimeError(f"Unexpected token type: {token.type}")

    if depth != 0:
        raise UnmatchedBracketError("Unclosed bracket", code=code, error_char_idx=open_bracket_idxs[-1])

    _drain(stacks[0], output)
    return output


def _precedence(token: Token) -> int:
    operator: Optional[OperatorSpec] = token.operator
    if operator is None:
        raise RuntimeError(f"Token {token} on the operator stack is not an operator")
    return operator.precedence


def _push_operator(token: Token, stack: list[Token], output: list[Token], operand_position: bool) -> None:
    precedence = _precedence(token)
    # nothing to the left of a prefix operator or function can be its operand
    if operand_position:
        stack.append(token)
        return
    # right-associative operators of equal precedence stay stacked, so 4**3**2 groups as 4**(3**2)
    right_assoc = token.operator.is_right_assoc
    while stack:
        top_precedence = _precedence(stack[-1])
        if top_precedence < precedence or (top_precedence == precedence and right_assoc):
            break
        output.append(stack.pop())
    stack.append(token)


def _drain(stack: list[Token], output: list[Token]) -> None:
    while stack:
        output.append(stack.pop())
