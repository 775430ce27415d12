from __future__ import annotations
from typing import Mapping, Tuple, TYPE_CHECKING


if TYPE_CHECKING:
    from tinfer.typecheck.types import Placeholder, Term


class Constraint:
    """An obligation that lhs and rhs denote the same type."""

    def __init__(self, lhs: Term, rhs: Term) -> None:
        self._lhs = lhs
        self._rhs = rhs

    @property
    def lhs(self) -> Term:
        return self._lhs

    @property
    def rhs(self) -> Term:
        return self._rhs

    def apply_substitution(
        self, sub: Mapping[Placeholder, Term]
    ) -> Constraint:
        return Constraint(
            self._lhs.apply_substitution(sub),
            self._rhs.apply_substitution(sub),
        )

    def __str__(self) -> str:
        return '{} = {}'.format(self._lhs, self._rhs)

    def __repr__(self) -> str:
        return '{}({!r}, {!r})'.format(
            type(self).__qualname__, self._lhs, self._rhs
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constraint):
            return NotImplemented
        return self._as_tuple() == other._as_tuple()

    def __hash__(self) -> int:
        return hash(self._as_tuple())

    def _as_tuple(self) -> Tuple[Term, Term]:
        return self._lhs, self._rhs
