"""Operator table shared by the infix and postfix pipelines.

Every operator has a canonical *token*, the string written in postfix
notation, and a *symbol*, the string recognised in infix notation. The two
differ only for prefix operators whose spelling collides with an infix one:
unary minus is spelled ``-`` but written ``_`` in postfix.

A registry is plain mutable state with no locking. Register operators during
setup, then ``freeze()`` it (or stop mutating it) before sharing the owning
engine between threads.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional

from rpn.errors import RegistrationError, RegistryFrozenError
from rpn.utils import PrintableEnum
from rpn.value import Value

logger = logging.getLogger(__name__)

Implementation = Callable[..., Optional[Value]]

FUNCTION_PRECEDENCE = 18
MAX_ARITY = 2
_FORBIDDEN_CHARS = frozenset(" \t\r\n\f\v,")


class OperatorKind(PrintableEnum):
    BRACKET = enum.auto()
    PREFIX = enum.auto()
    INFIX = enum.auto()
    FUNCTION = enum.auto()


class Associativity(PrintableEnum):
    NONE = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()


@dataclass(frozen=True)
class OperatorSpec:
    token: str
    precedence: int
    arity: int
    associativity: Associativity
    kind: OperatorKind
    implementation: Implementation
    symbol: Optional[str] = None

    @property
    def spelling(self) -> str:
        return self.symbol if self.symbol is not None else self.token

    @property
    def is_right_assoc(self) -> bool:
        return self.associativity is Associativity.RIGHT

    def __call__(self, *args: Value) -> Optional[Value]:
        return self.implementation(*args)

    def __str__(self) -> str:
        return self.token


class OperatorRegistry:
    def __init__(self, specs: Iterable[OperatorSpec] = ()) -> None:
        self._by_token: dict[str, OperatorSpec] = dict()
        # (spelling, is prefix) => spec; a spelling may have one prefix and one non-prefix meaning
        self._by_spelling: dict[tuple[str, bool], OperatorSpec] = dict()
        self._spellings_longest_first: Optional[list[str]] = None
        self._tokens_longest_first: Optional[list[str]] = None
        self._frozen = False
        for spec in specs:
            self.add(spec)

    def __contains__(self, token: object) -> bool:
        return token in self._by_token

    def __iter__(self) -> Iterator[OperatorSpec]:
        return iter(list(self._by_token.values()))

    def __len__(self) -> int:
        return len(self._by_token)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "OperatorRegistry":
        self._frozen = True
        return self

    def copy(self) -> "OperatorRegistry":
        """Independent, unfrozen registry with the same operators"""
        return OperatorRegistry(self._by_token.values())

    def lookup(self, token: str) -> Optional[OperatorSpec]:
        return self._by_token.get(token)

    def register(self, token: str, arity: int, implementation: Implementation) -> "OperatorRegistry":
        """Adds (or replaces) a function-like operator binding tighter than any infix operator"""
        return self.add(
            OperatorSpec(
                token=token,
                precedence=FUNCTION_PRECEDENCE,
                arity=arity,
                associativity=Associativity.LEFT,
                kind=OperatorKind.FUNCTION,
                implementation=implementation,
            )
        )

    def add(self, spec: OperatorSpec) -> "OperatorRegistry":
        if self._frozen:
            raise RegistryFrozenError(f"Registry is frozen, cannot register {spec.token!r}", token=spec.token)
        self._validate(spec)

        current = self._by_token.get(spec.token)
        if current is not None:
            del self._by_spelling[(current.spelling, current.kind is OperatorKind.PREFIX)]
        self._by_token[spec.token] = spec
        self._by_spelling[(spec.spelling, spec.kind is OperatorKind.PREFIX)] = spec
        self._spellings_longest_first = None
        self._tokens_longest_first = None

        logger.debug(
            "%s operator %r (%s, arity %d)", "Replaced" if current else "Registered", spec.token, spec.kind, spec.arity
        )
        return self

    def _validate(self, spec: OperatorSpec) -> None:
        for text in (spec.token, spec.spelling):
            if not isinstance(text, str) or not text:
                raise RegistrationError(f"Operator token must be a non-empty string, got {text!r}", token=text)
            if _FORBIDDEN_CHARS.intersection(text):
                raise RegistrationError(f"Operator token {text!r} contains a delimiter", token=text)
        if not isinstance(spec.arity, int) or not 0 <= spec.arity <= MAX_ARITY:
            raise RegistrationError(f"Arity of {spec.token!r} must be 0, 1 or 2, got {spec.arity!r}", token=spec.token)
        if not callable(spec.implementation):
            raise RegistrationError(f"Implementation of {spec.token!r} is not callable", token=spec.token)

        current = self._by_token.get(spec.token)
        if current is not None and current.spelling != spec.spelling:
            raise RegistrationError(
                f"Token {spec.token!r} is reserved as the postfix form of {current.spelling!r}", token=spec.token
            )
        holder = self._by_spelling.get((spec.spelling, spec.kind is OperatorKind.PREFIX))
        if holder is not None and holder.token != spec.token:
            raise RegistrationError(
                f"{spec.spelling!r} already denotes operator {holder.token!r}", token=spec.token
            )

    def match_symbol(self, code: str, i: int = 0) -> Optional[str]:
        """Longest infix spelling starting at ``code[i]``"""
        if self._spellings_longest_first is None:
            self._spellings_longest_first = _longest_first(spelling for spelling, _ in self._by_spelling)
        return _match_at(self._spellings_longest_first, code, i)

    def match_token(self, code: str, i: int = 0) -> Optional[str]:
        """Longest postfix token starting at ``code[i]``"""
        if self._tokens_longest_first is None:
            self._tokens_longest_first = _longest_first(self._by_token)
        return _match_at(self._tokens_longest_first, code, i)

    def resolve(self, symbol: str, unary: bool) -> Optional[OperatorSpec]:
        """Picks the prefix meaning of ``symbol`` in operand position, the other one elsewhere"""
        prefix = self._by_spelling.get((symbol, True))
        other = self._by_spelling.get((symbol, False))
        if unary:
            return prefix or other
        return other or prefix


def _longest_first(candidates: Iterable[str]) -> list[str]:
    return sorted(set(candidates), key=lambda s: (-len(s), s))


def _match_at(candidates: list[str], code: str, i: int) -> Optional[str]:
    for candidate in candidates:
        if code.startswith(candidate, i):
            return candidate
    return None
