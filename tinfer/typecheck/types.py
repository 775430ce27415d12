from __future__ import annotations
import abc
import enum
from typing import Hashable, Iterator, Mapping, TYPE_CHECKING


if TYPE_CHECKING:
    from tinfer.expressions import Expression


class Keying(enum.Enum):
    """How a ForExpr placeholder identifies the expression it stands for."""

    # One placeholder per node, using the id assigned at construction.
    BY_NODE = enum.auto()
    # Structurally identical sub-expressions share one placeholder.
    BY_STRUCTURE = enum.auto()


class Term(abc.ABC):
    """A type term: a base type, an arrow, or a placeholder."""

    @abc.abstractmethod
    def apply_substitution(self, sub: Mapping[Placeholder, Term]) -> Term:
        pass

    @abc.abstractmethod
    def __eq__(self, other: object) -> bool:
        pass

    @abc.abstractmethod
    def __hash__(self) -> int:
        pass

    def placeholders(self) -> Iterator[Placeholder]:
        return iter(())

    @property
    def is_concrete(self) -> bool:
        """Whether the term is built from base types and arrows only."""
        return next(self.placeholders(), None) is None


class Placeholder(Term, abc.ABC):
    """A term standing for a type that is not known yet."""

    def apply_substitution(self, sub: Mapping[Placeholder, Term]) -> Term:
        return sub.get(self, self)

    def placeholders(self) -> Iterator[Placeholder]:
        yield self


class ForExpr(Placeholder):
    """The type of a particular expression node."""

    def __init__(
        self, expression: Expression, keying: Keying = Keying.BY_NODE
    ) -> None:
        self._expression = expression
        self._keying = keying

    @property
    def expression(self) -> Expression:
        return self._expression

    @property
    def keying(self) -> Keying:
        return self._keying

    @property
    def key(self) -> Hashable:
        if self._keying is Keying.BY_STRUCTURE:
            return self._expression
        return self._expression.id

    def refers_to(self, expression: Expression) -> bool:
        return self == ForExpr(expression, self._keying)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ForExpr):
            return NotImplemented
        return (self._keying, self.key) == (other._keying, other.key)

    def __hash__(self) -> int:
        return hash((self._keying, self.key))

    def __str__(self) -> str:
        return '[{}]'.format(self._expression)

    def __repr__(self) -> str:
        return '{}({!r}, {})'.format(
            type(self).__qualname__, self._expression, self._keying
        )


class ForVariable(Placeholder):
    """The type of a named program variable."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ForVariable):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash((ForVariable, self._name))

    def __str__(self) -> str:
        return "'" + self._name

    def __repr__(self) -> str:
        return '{}({!r})'.format(type(self).__qualname__, self._name)


class BaseType(Term):
    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def apply_substitution(self, sub: Mapping[Placeholder, Term]) -> Term:
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseType):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash((BaseType, self._name))

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return '{}({!r})'.format(type(self).__qualname__, self._name)


number_type = BaseType('number')
bool_type = BaseType('bool')


class Arrow(Term):
    """The type of a single-argument function."""

    def __init__(self, domain: Term, range: Term) -> None:
        self._domain = domain
        self._range = range

    @property
    def domain(self) -> Term:
        return self._domain

    @property
    def range(self) -> Term:
        return self._range

    def apply_substitution(self, sub: Mapping[Placeholder, Term]) -> Term:
        return Arrow(
            self._domain.apply_substitution(sub),
            self._range.apply_substitution(sub),
        )

    def placeholders(self) -> Iterator[Placeholder]:
        yield from self._domain.placeholders()
        yield from self._range.placeholders()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Arrow):
            return NotImplemented
        return (self._domain, self._range) == (other._domain, other._range)

    def __hash__(self) -> int:
        return hash((Arrow, self._domain, self._range))

    def __str__(self) -> str:
        domain = str(self._domain)
        if isinstance(self._domain, Arrow):
            domain = '(' + domain + ')'
        return '{} -> {}'.format(domain, self._range)

    def __repr__(self) -> str:
        return '{}({!r}, {!r})'.format(
            type(self).__qualname__, self._domain, self._range
        )
