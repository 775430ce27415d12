"""Substitution representation and operations."""

from __future__ import annotations
import json
from typing import (
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TYPE_CHECKING,
    TypeVar,
    Union,
    overload,
)
from typing_extensions import Protocol
from tinfer.typecheck.constraints import Constraint
from tinfer.typecheck.errors import format_already_resolved_error
from tinfer.typecheck.types import ForExpr, ForVariable, Placeholder, Term


if TYPE_CHECKING:
    from tinfer.expressions import Expression


_Result = TypeVar('_Result', covariant=True)


class _Substitutable(Protocol[_Result]):
    def apply_substitution(
        self, sub: Mapping[Placeholder, Term]
    ) -> _Result: ...


class Substitution:
    """A decision of the unifier: the placeholder var is known to be term."""

    def __init__(self, var: Placeholder, term: Term) -> None:
        self._var = var
        self._term = term

    @property
    def var(self) -> Placeholder:
        return self._var

    @property
    def term(self) -> Term:
        return self._term

    def apply_substitution(
        self, sub: Mapping[Placeholder, Term]
    ) -> Substitution:
        # The var side is never rewritten: each placeholder is resolved at
        # most once.
        return Substitution(self._var, self._term.apply_substitution(sub))

    def as_constraint(self) -> Constraint:
        return Constraint(self._var, self._term)

    def __str__(self) -> str:
        return '{} := {}'.format(self._var, self._term)

    def __repr__(self) -> str:
        return '{}({!r}, {!r})'.format(
            type(self).__qualname__, self._var, self._term
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Substitution):
            return NotImplemented
        return self._as_tuple() == other._as_tuple()

    def __hash__(self) -> int:
        return hash(self._as_tuple())

    def _as_tuple(self) -> Tuple[Placeholder, Term]:
        return self._var, self._term


class Substitutions(Sequence[Substitution]):
    """The ordered list of decisions made by one unification run.

    Calling a Substitutions object on a term or constraint applies every
    entry to it once.
    """

    def __init__(self, entries: Iterable[Substitution] = ()) -> None:
        self._entries: List[Substitution] = list(entries)

    @overload
    def __getitem__(self, index: int) -> Substitution: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Substitution]: ...

    def __getitem__(
        self, index: Union[int, slice]
    ) -> Union[Substitution, Sequence[Substitution]]:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Substitution]:
        return iter(self._entries)

    def __call__(self, arg: _Substitutable[_Result]) -> _Result:
        return arg.apply_substitution(self.as_mapping())

    def add(self, var: Placeholder, term: Term) -> None:
        """Record that var is term.

        Every existing entry is rewritten to use term in place of var before
        the new entry is appended. Raises ValueError if var already has an
        entry.
        """
        existing = self.lookup(var)
        if existing is not None:
            raise ValueError(format_already_resolved_error(var, existing))
        sub = {var: term}
        self._entries = [
            entry.apply_substitution(sub) for entry in self._entries
        ]
        self._entries.append(Substitution(var, term))

    def copy(self) -> Substitutions:
        return Substitutions(self._entries)

    def lookup(self, var: Placeholder) -> Optional[Term]:
        for entry in self._entries:
            if entry.var == var:
                return entry.term
        return None

    def resolve(self, term: Term) -> Term:
        """Replace resolved placeholders in term until none are left.

        Unconstrained placeholders are left in place.
        """
        # The occurs check guarantees this reaches a fixpoint.
        while True:
            new_term = self(term)
            if new_term == term:
                return term
            term = new_term

    def type_of(self, expression: Expression) -> Optional[Term]:
        """The inferred type of expression, or None if it is not mentioned."""
        for placeholder in self._placeholders():
            if isinstance(placeholder, ForExpr) and placeholder.refers_to(
                expression
            ):
                return self.resolve(placeholder)
        return None

    def type_of_variable(self, name: str) -> Optional[Term]:
        variable = ForVariable(name)
        if variable in self._placeholders():
            return self.resolve(variable)
        return None

    def as_constraints(self) -> List[Constraint]:
        return [entry.as_constraint() for entry in self._entries]

    def as_mapping(self) -> Dict[Placeholder, Term]:
        return {entry.var: entry.term for entry in self._entries}

    def _placeholders(self) -> Iterator[Placeholder]:
        for entry in self._entries:
            yield entry.var
            yield from entry.term.placeholders()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Substitutions):
            return NotImplemented
        return self._entries == other._entries

    def __str__(self) -> str:
        return '{' + ', '.join(map(str, self._entries)) + '}'

    def __repr__(self) -> str:
        return 'Substitutions({!r})'.format(self._entries)


class SubstitutionEncoder(json.JSONEncoder):
    """Extension of the default JSON Encoder that supports substitutions."""

    def default(self, obj):
        if isinstance(obj, Substitution):
            return {
                'var': str(obj.var),
                'is': str(obj.term),
                'concrete': obj.term.is_concrete,
            }
        if isinstance(obj, Substitutions):
            return list(obj)
        return super().default(obj)
