"""The expression language whose types are inferred.

Nodes are immutable and compare structurally. Every node also receives a
unique id when it is constructed, which does not take part in comparisons.
"""

from __future__ import annotations
import abc
import dataclasses
import enum
import itertools
from typing import Iterator, Union


_node_ids = itertools.count()


def _next_node_id() -> int:
    return next(_node_ids)


@dataclasses.dataclass(frozen=True)
class Expression(abc.ABC):
    id: int = dataclasses.field(
        default_factory=_next_node_id, init=False, compare=False, repr=False
    )

    @property
    def children(self) -> Iterator[Expression]:
        return iter(())

    def walk(self) -> Iterator[Expression]:
        """Yield this node and all its descendants, children first."""
        for child in self.children:
            yield from child.walk()
        yield self


@dataclasses.dataclass(frozen=True)
class NumberNode(Expression):
    value: Union[int, float]

    def __str__(self) -> str:
        return str(self.value)


@dataclasses.dataclass(frozen=True)
class BoolNode(Expression):
    value: bool

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclasses.dataclass(frozen=True)
class StringNode(Expression):
    value: str

    def __str__(self) -> str:
        return repr(self.value)


@dataclasses.dataclass(frozen=True)
class VariableNode(Expression):
    name: str

    def __str__(self) -> str:
        return self.name


class Operator(enum.Enum):
    ADD = '+'
    SUB = '-'
    LESS = '<'

    def __str__(self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True)
class BinaryNode(Expression):
    left: Expression
    operator: Operator
    right: Expression

    @property
    def children(self) -> Iterator[Expression]:
        yield self.left
        yield self.right

    def __str__(self) -> str:
        return '{} {} {}'.format(self.left, self.operator, self.right)


@dataclasses.dataclass(frozen=True)
class ConditionalNode(Expression):
    condition: Expression
    consequent: Expression
    alternative: Expression

    @property
    def children(self) -> Iterator[Expression]:
        yield self.condition
        yield self.consequent
        yield self.alternative

    def __str__(self) -> str:
        return 'if {} then {} else {}'.format(
            self.condition, self.consequent, self.alternative
        )


@dataclasses.dataclass(frozen=True)
class FunctionNode(Expression):
    """A single-argument function.

    The argument should be a bare VariableNode. Anything else is accepted
    here and rejected when constraints are generated.
    """

    argument: Expression
    body: Expression

    @property
    def children(self) -> Iterator[Expression]:
        # The argument is a binding occurrence, not a sub-expression.
        yield self.body

    def __str__(self) -> str:
        return '(lambda({}) {})'.format(self.argument, self.body)


@dataclasses.dataclass(frozen=True)
class CallNode(Expression):
    function: Expression
    argument: Expression

    @property
    def children(self) -> Iterator[Expression]:
        yield self.function
        yield self.argument

    def __str__(self) -> str:
        return '{}({})'.format(self.function, self.argument)
