"""Example programs for the command line driver.

Each example is built fresh on every call so that node ids are never shared
between runs.
"""

from typing import Callable, Dict

from tinfer.expressions import (
    BinaryNode,
    BoolNode,
    CallNode,
    ConditionalNode,
    Expression,
    FunctionNode,
    NumberNode,
    Operator,
    StringNode,
    VariableNode,
)


def add_two() -> Expression:
    """(lambda(x) x + 2)"""
    return FunctionNode(
        VariableNode('x'),
        BinaryNode(VariableNode('x'), Operator.ADD, NumberNode(2)),
    )


def higher_order() -> Expression:
    """(lambda(x) x(5) + 2)((lambda(y) y + 5))"""
    outer = FunctionNode(
        VariableNode('x'),
        BinaryNode(
            CallNode(VariableNode('x'), NumberNode(5)),
            Operator.ADD,
            NumberNode(2),
        ),
    )
    inner = FunctionNode(
        VariableNode('y'),
        BinaryNode(VariableNode('y'), Operator.ADD, NumberNode(5)),
    )
    return CallNode(outer, inner)


examples: Dict[str, Callable[[], Expression]] = {
    'number': lambda: NumberNode(42),
    'boolean': lambda: BoolNode(True),
    'addition': lambda: BinaryNode(NumberNode(1), Operator.ADD, NumberNode(2)),
    'add-two': add_two,
    'apply-add-two': lambda: CallNode(add_two(), NumberNode(10)),
    'apply-add-two-to-bool': lambda: CallNode(add_two(), BoolNode(False)),
    'conditional': lambda: ConditionalNode(
        BoolNode(True), NumberNode(1), NumberNode(2)
    ),
    'mismatched-branches': lambda: ConditionalNode(
        BoolNode(True), BoolNode(False), NumberNode(2)
    ),
    'non-bool-condition': lambda: ConditionalNode(
        NumberNode(1), NumberNode(1), NumberNode(2)
    ),
    'higher-order': higher_order,
    'free-variable': lambda: VariableNode('y'),
    'self-application': lambda: FunctionNode(
        VariableNode('x'), CallNode(VariableNode('x'), VariableNode('x'))
    ),
    'literal-argument': lambda: FunctionNode(NumberNode(1), NumberNode(1)),
    'string': lambda: StringNode('hello'),
}
