"""The tinfer type checker.

Type inference happens in two steps. generate_constraints walks an
expression tree and produces equality constraints between type terms, and
unify solves them into a substitution. infer_types does both.

Placeholders for expression types are keyed by node identity by default. Pass
keying=Keying.BY_STRUCTURE to make structurally identical sub-expressions
share a placeholder instead.
"""

from __future__ import annotations
import logging
from typing import List

from tinfer.expressions import (
    BinaryNode,
    BoolNode,
    CallNode,
    ConditionalNode,
    Expression,
    FunctionNode,
    NumberNode,
    VariableNode,
)
from tinfer.logging import TinferLogger
from tinfer.typecheck.constraints import Constraint
from tinfer.typecheck.errors import (
    ErrorKind,
    MalformedExpressionError,
    OccursCheckError,
    StaticAnalysisError,
    TypeError,
    TypeMismatchError,
    UnhandledNodeTypeError,
    format_not_a_variable_error,
)
from tinfer.typecheck.substitutions import Substitution, Substitutions
from tinfer.typecheck.types import (
    Arrow,
    BaseType,
    ForExpr,
    ForVariable,
    Keying,
    Placeholder,
    Term,
    bool_type,
    number_type,
)
from tinfer.typecheck.unify import unify

__all__ = [
    'Arrow',
    'BaseType',
    'Constraint',
    'ErrorKind',
    'ForExpr',
    'ForVariable',
    'Keying',
    'MalformedExpressionError',
    'OccursCheckError',
    'Placeholder',
    'StaticAnalysisError',
    'Substitution',
    'Substitutions',
    'Term',
    'TypeError',
    'TypeMismatchError',
    'UnhandledNodeTypeError',
    'bool_type',
    'generate_constraints',
    'infer_types',
    'number_type',
    'unify',
]

_python_logger = logging.getLogger(__name__)

_logger = TinferLogger(_python_logger)


def generate_constraints(
    expression: Expression, keying: Keying = Keying.BY_NODE
) -> List[Constraint]:
    """Produce the typing constraints of expression.

    The constraints of sub-expressions come before the constraints that
    define a node's own type.
    """
    constraints: List[Constraint] = []
    _generate(expression, keying, constraints)
    return constraints


def _generate(
    node: Expression, keying: Keying, constraints: List[Constraint]
) -> None:
    def type_of(expression: Expression) -> ForExpr:
        return ForExpr(expression, keying)

    if isinstance(node, NumberNode):
        constraints.append(Constraint(type_of(node), number_type))
    elif isinstance(node, BoolNode):
        constraints.append(Constraint(type_of(node), bool_type))
    elif isinstance(node, VariableNode):
        constraints.append(Constraint(type_of(node), ForVariable(node.name)))
    elif isinstance(node, BinaryNode):
        # No operator overloading: every operator works on numbers.
        _generate(node.left, keying, constraints)
        _generate(node.right, keying, constraints)
        constraints.append(Constraint(type_of(node.left), number_type))
        constraints.append(Constraint(type_of(node.right), number_type))
        constraints.append(Constraint(type_of(node), number_type))
    elif isinstance(node, ConditionalNode):
        _generate(node.condition, keying, constraints)
        _generate(node.consequent, keying, constraints)
        _generate(node.alternative, keying, constraints)
        constraints.append(Constraint(type_of(node.condition), bool_type))
        constraints.append(Constraint(type_of(node), type_of(node.consequent)))
        constraints.append(
            Constraint(type_of(node), type_of(node.alternative))
        )
    elif isinstance(node, FunctionNode):
        if not isinstance(node.argument, VariableNode):
            raise MalformedExpressionError(
                format_not_a_variable_error(node.argument), node
            )
        _generate(node.body, keying, constraints)
        constraints.append(
            Constraint(
                type_of(node),
                Arrow(ForVariable(node.argument.name), type_of(node.body)),
            )
        )
    elif isinstance(node, CallNode):
        _generate(node.function, keying, constraints)
        _generate(node.argument, keying, constraints)
        constraints.append(
            Constraint(
                type_of(node.function),
                Arrow(type_of(node.argument), type_of(node)),
            )
        )
    else:
        raise UnhandledNodeTypeError(node)
    _logger.debug(
        'generated constraints for {} {}', type(node).__name__, node
    )


def infer_types(
    expression: Expression, keying: Keying = Keying.BY_NODE
) -> Substitutions:
    """Infer the type of expression and of each of its sub-expressions.

    Look the results up with Substitutions.type_of and
    Substitutions.type_of_variable. Raises a StaticAnalysisError subclass if
    the expression cannot be typed.
    """
    constraints = generate_constraints(expression, keying)
    _logger.debug('{} constraints for {}', len(constraints), expression)
    subs = unify(constraints)
    _logger.debug('{} substitutions for {}', len(subs), expression)
    return subs
