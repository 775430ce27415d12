from __future__ import annotations
import builtins
import enum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from tinfer.expressions import Expression
    from tinfer.typecheck.types import Placeholder, Term


class ErrorKind(enum.Enum):
    MALFORMED_INPUT = 'malformed input'
    TYPE_MISMATCH = 'type mismatch'
    CYCLIC_TYPE = 'cyclic type'
    UNSUPPORTED_EXPRESSION = 'unsupported expression'

    def __str__(self) -> str:
        return self.value


class StaticAnalysisError(Exception):
    """Base class of every error that aborts an inference call."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class MalformedExpressionError(StaticAnalysisError, builtins.ValueError):
    kind = ErrorKind.MALFORMED_INPUT

    def __init__(self, message: str, node: Expression) -> None:
        super().__init__(message)
        self.node = node


class TypeError(StaticAnalysisError, builtins.TypeError):
    """Type errors raised by the unifier.

    is_occurs_check_fail tells a cyclic type apart from a plain mismatch.
    """

    kind = ErrorKind.TYPE_MISMATCH

    def __init__(self, message: str, is_occurs_check_fail: bool) -> None:
        super().__init__(message)
        self.is_occurs_check_fail = is_occurs_check_fail

    def __repr__(self) -> str:
        return '{}({!r}, is_occurs_check_fail={!r})'.format(
            type(self).__qualname__,
            self.message,
            self.is_occurs_check_fail,
        )


class TypeMismatchError(TypeError):
    def __init__(self, lhs: Term, rhs: Term) -> None:
        super().__init__(
            format_mismatch_error(lhs, rhs), is_occurs_check_fail=False
        )
        self.lhs = lhs
        self.rhs = rhs


class OccursCheckError(TypeError):
    kind = ErrorKind.CYCLIC_TYPE

    def __init__(self, variable: Placeholder, term: Term) -> None:
        super().__init__(
            format_occurs_error(variable, term), is_occurs_check_fail=True
        )
        self.variable = variable
        self.term = term


class UnhandledNodeTypeError(
    StaticAnalysisError, builtins.NotImplementedError
):
    kind = ErrorKind.UNSUPPORTED_EXPRESSION

    def __init__(self, node: object) -> None:
        super().__init__(format_unhandled_node_error(node))
        self.node = node


def format_not_a_variable_error(argument: Expression) -> str:
    return f'function argument {argument} is not a variable'


def format_mismatch_error(lhs: Term, rhs: Term) -> str:
    return f'{lhs} and {rhs} do not unify'


def format_occurs_error(variable: Placeholder, term: Term) -> str:
    return (
        f'occurs check failed: {variable} cannot be {term} because it would '
        'form an infinite type'
    )


def format_already_resolved_error(variable: Placeholder, term: Term) -> str:
    return f'{variable} is already resolved to {term}'


def format_unhandled_node_error(node: object) -> str:
    return (
        f'type inference is not implemented for {type(node).__name__} '
        f'{node}'
    )
