import pytest

from rpn.builtins import default_registry
from rpn.config import EngineConfig
from rpn.errors import ErrorKind, LimitExceededError, UnmatchedBracketError
from rpn.parser import to_postfix
from rpn.tokenizer import untokenize


def _generate(code: str, config: EngineConfig = EngineConfig()) -> str:
    return untokenize(to_postfix(code, default_registry(), config))


@pytest.mark.parametrize(
    "code, expected_postfix",
    [
        pytest.param("1 - 2 - 3", "1 2 - 3 -"),
        pytest.param("1 - (2 - 3)", "1 2 3 - -"),
        pytest.param("2 ** 3 ** 2", "2 3 2 ** **"),
        pytest.param("2 ** 3 * 4", "2 3 ** 4 *"),
        pytest.param("2 * 3 ** 4", "2 3 4 ** *"),
        pytest.param("1 | 2 ^ 3 & 4", "1 2 3 4 & ^ |"),
        pytest.param("1 & 2 ^ 3 | 4", "1 2 & 3 ^ 4 |"),
        pytest.param("1 + 2 << 3 - 4", "1 2 + 3 4 - <<"),
        pytest.param("((1 + 2) * (3 + 4))", "1 2 + 3 4 + *"),
        pytest.param("- - 1", "1 _ _"),
        pytest.param("~ ~ 1", "1 ~ ~"),
        pytest.param("2 * -3", "2 3 _ *"),
        pytest.param("2**-3**2", "2 3 _ 2 ** **"),
        pytest.param("2**~1**2", "2 1 ~ 2 ** **"),
        pytest.param("-2**3**2", "2 _ 3 2 ** **"),
    ],
)
def test_to_postfix(code: str, expected_postfix: str) -> None:
    assert _generate(code) == expected_postfix


def test_right_associative_operators_group_right_to_left() -> None:
    assert _generate("4**3**2") == "4 3 2 ** **"
    assert _generate("4**3**2**1") == "4 3 2 1 ** ** **"
    # left-associative operators of the same tier group left to right
    assert _generate("4*3/2%1") == "4 3 * 2 / 1 %"


def test_prefix_operator_after_function() -> None:
    registry = default_registry().register("f", 1, lambda a: a)
    assert untokenize(to_postfix("f -1", registry)) == "1 _ f"
    assert untokenize(to_postfix("f f 1", registry)) == "1 f f"


@pytest.mark.parametrize(
    "code, error_char_idx",
    [
        pytest.param("2+(3", 2),
        pytest.param("(1 + (2)", 0),
        pytest.param("2+)3", 2),
        pytest.param("(1))", 3),
        pytest.param(")", 0),
    ],
)
def test_unmatched_brackets(code: str, error_char_idx: int) -> None:
    with pytest.raises(UnmatchedBracketError) as exc_info:
        _generate(code)
    assert exc_info.value.error_char_idx == error_char_idx
    assert exc_info.value.kind is ErrorKind.UNMATCHED_BRACKET


def test_bracket_depth_limit() -> None:
    config = EngineConfig(max_bracket_depth=2)
    assert _generate("((1))", config) == "1"
    with pytest.raises(LimitExceededError) as exc_info:
        _generate("(((1)))", config)
    assert exc_info.value.limit == 2
    assert exc_info.value.actual == 3
