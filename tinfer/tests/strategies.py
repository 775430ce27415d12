from tinfer.expressions import (
    BinaryNode,
    BoolNode,
    CallNode,
    ConditionalNode,
    Expression,
    FunctionNode,
    NumberNode,
    Operator,
    VariableNode,
)
from hypothesis.strategies import (
    SearchStrategy,
    booleans,
    builds,
    floats,
    integers,
    recursive,
    sampled_from,
)


def _apply_adder(argument: Expression, addend: Expression) -> Expression:
    # Every adder binds the same name, which is fine because it is always a
    # number.
    function = FunctionNode(
        VariableNode('n'),
        BinaryNode(VariableNode('n'), Operator.ADD, addend),
    )
    return CallNode(function, argument)


number_literals: SearchStrategy[Expression] = builds(
    NumberNode, integers() | floats(allow_nan=False, allow_infinity=False)
)

bool_literals: SearchStrategy[Expression] = builds(BoolNode, booleans())

bool_expressions: SearchStrategy[Expression] = recursive(
    bool_literals,
    lambda children: builds(ConditionalNode, children, children, children),
    max_leaves=5,
)

number_expressions: SearchStrategy[Expression] = recursive(
    number_literals,
    lambda children: builds(
        BinaryNode, children, sampled_from(Operator), children
    )
    | builds(ConditionalNode, bool_expressions, children, children)
    | builds(_apply_adder, children, children),
    max_leaves=10,
)
