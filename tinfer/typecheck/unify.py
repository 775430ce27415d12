"""The unification solver.

Constraints are solved one at a time from a work queue. Each time a
placeholder is resolved, the decision is propagated eagerly into the rest of
the queue and into every earlier decision, so the final substitution never
needs chasing.
"""

from __future__ import annotations
import collections
import logging
from typing import Deque, Iterable, List, Optional, Set

from tinfer.logging import TinferLogger
from tinfer.typecheck.constraints import Constraint
from tinfer.typecheck.errors import OccursCheckError, TypeMismatchError
from tinfer.typecheck.substitutions import Substitutions
from tinfer.typecheck.types import Arrow, Placeholder, Term


_python_logger = logging.getLogger(__name__)

_logger = TinferLogger(_python_logger)


def unify(
    constraints: Iterable[Constraint],
    initial_substitution: Optional[Substitutions] = None,
) -> Substitutions:
    """Find the most general substitution satisfying every constraint.

    initial_substitution is not mutated. Its entries are applied to the
    constraints before solving starts. Entries may refer to each other (for
    example a := b and b := number); they are solved first, so that every
    entry is fully resolved before the constraints are rewritten.

    Raises TypeMismatchError when two terms cannot be made equal and
    OccursCheckError when a solution would need an infinite type. Both can
    come from a contradictory or cyclic initial_substitution too.
    """
    if initial_substitution is None:
        subs = Substitutions()
    else:
        subs = unify(initial_substitution.as_constraints())
    queue: Deque[Constraint] = collections.deque(
        subs(constraint) for constraint in constraints
    )
    _logger.debug('unifying {} constraints', len(queue))

    while queue:
        constraint = queue.popleft()
        left, right = constraint.lhs, constraint.rhs
        if left == right:
            _logger.debug('discarding trivial constraint {}', constraint)
        elif isinstance(left, Placeholder):
            _eliminate(left, right, queue, subs)
        elif isinstance(right, Placeholder):
            _eliminate(right, left, queue, subs)
        elif isinstance(left, Arrow) and isinstance(right, Arrow):
            _logger.debug('decomposing {}', constraint)
            # Domains are solved before ranges.
            queue.appendleft(Constraint(left.range, right.range))
            queue.appendleft(Constraint(left.domain, right.domain))
        else:
            _logger.debug('{} and {} do not unify', left, right)
            raise TypeMismatchError(left, right)

    return subs


def _eliminate(
    var: Placeholder,
    term: Term,
    queue: Deque[Constraint],
    subs: Substitutions,
) -> None:
    if occurs_in(var, term, subs):
        _logger.debug('occurs check failed for {} in {}', var, term)
        raise OccursCheckError(var, term)
    _logger.debug('resolving {} to {}', var, term)
    sub = {var: term}
    rewritten = [constraint.apply_substitution(sub) for constraint in queue]
    queue.clear()
    queue.extend(rewritten)
    subs.add(var, term)


def occurs_in(var: Placeholder, term: Term, subs: Substitutions) -> bool:
    """Whether var appears in term, looking through resolved placeholders."""
    to_visit: List[Term] = [term]
    seen: Set[Placeholder] = set()
    while to_visit:
        current = to_visit.pop()
        if isinstance(current, Arrow):
            to_visit.append(current.domain)
            to_visit.append(current.range)
        elif isinstance(current, Placeholder):
            if current == var:
                return True
            if current in seen:
                continue
            seen.add(current)
            resolved = subs.lookup(current)
            if resolved is not None:
                to_visit.append(resolved)
    return False
