import operator
import random
from typing import Callable

import pytest

from rpn.engine import RPN
from rpn.errors import RPNError

BINARY_OPS: dict[str, Callable[[int, int], int]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "&": operator.and_,
    "^": operator.xor,
    "|": operator.or_,
}
UNARY_OPS: dict[str, Callable[[int], int]] = {
    "-": operator.neg,
    "+": operator.pos,
    "~": operator.invert,
}


def _random_expression(rng: random.Random, depth: int) -> tuple[str, int]:
    """Fully bracketed infix expression and its value"""
    if depth == 0 or rng.random() < 0.25:
        n = rng.randint(0, 20)
        return (hex(n) if rng.random() < 0.2 else str(n)), n
    roll = rng.random()
    if roll < 0.2:
        op = rng.choice(list(UNARY_OPS))
        code, value = _random_expression(rng, depth - 1)
        return f"{op}({code})", UNARY_OPS[op](value)
    if roll < 0.3:
        code, value = _random_expression(rng, depth - 1)
        shift = rng.randint(0, 4)
        op = rng.choice(["<<", ">>"])
        return f"({code}){op}{shift}", value << shift if op == "<<" else value >> shift
    op = rng.choice(list(BINARY_OPS))
    left_code, left_value = _random_expression(rng, depth - 1)
    right_code, right_value = _random_expression(rng, depth - 1)
    return f"({left_code}){op}({right_code})", BINARY_OPS[op](left_value, right_value)


@pytest.mark.parametrize("seed", range(20))
def test_bracketed_expressions_match_reference(seed: int) -> None:
    rng = random.Random(seed)
    rpn = RPN()
    for _ in range(20):
        code, expected = _random_expression(rng, depth=4)
        assert rpn.evaluate(code) == expected, code


@pytest.mark.parametrize("seed", range(20))
def test_unbracketed_expressions_match_python(seed: int) -> None:
    # binary operators other than ** and / share python's precedence and associativity
    ops = ["+", "-", "*", "%", "<<", ">>", "&", "^", "|"]
    rng = random.Random(seed)
    rpn = RPN()
    for _ in range(20):
        parts = [str(rng.randint(1, 9))]
        for _ in range(rng.randint(1, 5)):
            parts += [rng.choice(ops), str(rng.randint(1, 9))]
        code = " ".join(parts)
        try:
            expected = eval(code)
        except ValueError:
            with pytest.raises(RPNError):
                rpn.evaluate(code)
        else:
            assert rpn.evaluate(code) == expected, code


@pytest.mark.parametrize(
    "code, expected",
    [
        # prefix operators bind tighter than **, which groups right to left
        pytest.param("2**-3**2", 2 ** ((-3) ** 2)),
        pytest.param("2**~1**2", 2 ** ((~1) ** 2)),
        pytest.param("-2**2", (-2) ** 2),
        pytest.param("-2**3**2", (-2) ** (3**2)),
        pytest.param("~1**2*3", ((~1) ** 2) * 3),
        pytest.param("2*-3**2", 2 * ((-3) ** 2)),
        pytest.param("4**3**2", 4 ** (3**2)),
        pytest.param("~-5*4**(0x0f-12)**2", (~(-5)) * 4 ** ((15 - 12) ** 2)),
    ],
)
def test_unbracketed_powers_and_prefixes(code: str, expected: int) -> None:
    assert RPN().evaluate(code) == expected
