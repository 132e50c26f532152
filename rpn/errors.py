import enum
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from rpn.utils import PrintableEnum, caret_excerpt


class ErrorKind(PrintableEnum):
    ARGUMENT_TYPE = enum.auto()
    UNKNOWN_TOKEN = enum.auto()
    UNMATCHED_BRACKET = enum.auto()
    UNKNOWN_OPERATOR = enum.auto()
    OPERAND_UNDERFLOW = enum.auto()
    NON_CONVERGENCE = enum.auto()
    OPERATOR_FAILURE = enum.auto()
    LIMIT_EXCEEDED = enum.auto()
    REGISTRATION = enum.auto()


@dataclass
class RPNError(Exception):
    errmsg: str

    kind: ClassVar[ErrorKind]

    def __str__(self) -> str:
        return f"[{self.kind}] {self.errmsg}"


@dataclass
class ArgumentTypeError(RPNError, TypeError):
    arg: Any = None

    kind = ErrorKind.ARGUMENT_TYPE


@dataclass
class _PositionalError(RPNError):
    code: str = ""
    error_char_idx: int = 0

    def __str__(self) -> str:
        return "\n".join([super().__str__(), caret_excerpt(self.code, self.error_char_idx)])


@dataclass
class UnknownTokenError(_PositionalError):
    remainder: str = ""

    kind = ErrorKind.UNKNOWN_TOKEN


@dataclass
class UnmatchedBracketError(_PositionalError):
    kind = ErrorKind.UNMATCHED_BRACKET


@dataclass
class UnknownOperatorError(RPNError):
    token: str = ""

    kind = ErrorKind.UNKNOWN_OPERATOR


@dataclass
class OperandUnderflowError(RPNError):
    token: str = ""
    arity: int = 0
    available: int = 0

    kind = ErrorKind.OPERAND_UNDERFLOW


@dataclass
class NonConvergenceError(RPNError):
    stack: list[Any] = field(default_factory=list)

    kind = ErrorKind.NON_CONVERGENCE


@dataclass
class OperatorFailureError(RPNError):
    token: str = ""

    kind = ErrorKind.OPERATOR_FAILURE


@dataclass
class LimitExceededError(RPNError):
    limit: int = 0
    actual: Optional[int] = None

    kind = ErrorKind.LIMIT_EXCEEDED


@dataclass
class RegistrationError(RPNError, ValueError):
    token: Any = None

    kind = ErrorKind.REGISTRATION


@dataclass
class RegistryFrozenError(RegistrationError):
    pass
