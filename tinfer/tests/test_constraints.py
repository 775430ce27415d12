import unittest

from tinfer.expressions import (
    BinaryNode,
    BoolNode,
    CallNode,
    ConditionalNode,
    FunctionNode,
    NumberNode,
    Operator,
    StringNode,
    VariableNode,
)
from tinfer.typecheck import (
    Arrow,
    Constraint,
    ErrorKind,
    ForExpr,
    ForVariable,
    Keying,
    MalformedExpressionError,
    UnhandledNodeTypeError,
    bool_type,
    generate_constraints,
    number_type,
)


class TestGenerateConstraints(unittest.TestCase):
    def test_number(self) -> None:
        node = NumberNode(3)
        self.assertEqual(
            generate_constraints(node),
            [Constraint(ForExpr(node), number_type)],
        )

    def test_bool(self) -> None:
        node = BoolNode(False)
        self.assertEqual(
            generate_constraints(node), [Constraint(ForExpr(node), bool_type)]
        )

    def test_variable(self) -> None:
        node = VariableNode('x')
        self.assertEqual(
            generate_constraints(node),
            [Constraint(ForExpr(node), ForVariable('x'))],
        )

    def test_binary(self) -> None:
        left, right = VariableNode('x'), NumberNode(2)
        node = BinaryNode(left, Operator.LESS, right)
        self.assertEqual(
            generate_constraints(node),
            [
                Constraint(ForExpr(left), ForVariable('x')),
                Constraint(ForExpr(right), number_type),
                Constraint(ForExpr(left), number_type),
                Constraint(ForExpr(right), number_type),
                Constraint(ForExpr(node), number_type),
            ],
        )

    def test_conditional(self) -> None:
        condition, consequent, alternative = (
            BoolNode(True),
            NumberNode(1),
            NumberNode(2),
        )
        node = ConditionalNode(condition, consequent, alternative)
        self.assertEqual(
            generate_constraints(node),
            [
                Constraint(ForExpr(condition), bool_type),
                Constraint(ForExpr(consequent), number_type),
                Constraint(ForExpr(alternative), number_type),
                Constraint(ForExpr(condition), bool_type),
                Constraint(ForExpr(node), ForExpr(consequent)),
                Constraint(ForExpr(node), ForExpr(alternative)),
            ],
        )

    def test_function(self) -> None:
        body = VariableNode('x')
        node = FunctionNode(VariableNode('x'), body)
        self.assertEqual(
            generate_constraints(node),
            [
                Constraint(ForExpr(body), ForVariable('x')),
                Constraint(
                    ForExpr(node), Arrow(ForVariable('x'), ForExpr(body))
                ),
            ],
        )

    def test_call(self) -> None:
        function, argument = VariableNode('f'), NumberNode(1)
        node = CallNode(function, argument)
        self.assertEqual(
            generate_constraints(node),
            [
                Constraint(ForExpr(function), ForVariable('f')),
                Constraint(ForExpr(argument), number_type),
                Constraint(
                    ForExpr(function),
                    Arrow(ForExpr(argument), ForExpr(node)),
                ),
            ],
        )

    def test_keying_is_passed_down(self) -> None:
        node = BinaryNode(NumberNode(1), Operator.ADD, NumberNode(1))
        constraints = generate_constraints(node, Keying.BY_STRUCTURE)
        for constraint in constraints:
            self.assertIsInstance(constraint.lhs, ForExpr)
            self.assertIs(constraint.lhs.keying, Keying.BY_STRUCTURE)
        self.assertEqual(constraints[0], constraints[1])

    def test_function_argument_must_be_a_variable(self) -> None:
        node = FunctionNode(NumberNode(1), NumberNode(1))
        with self.assertRaises(MalformedExpressionError) as cm:
            generate_constraints(node)
        self.assertIs(cm.exception.kind, ErrorKind.MALFORMED_INPUT)
        self.assertIs(cm.exception.node, node)
        self.assertIn('is not a variable', str(cm.exception))

    def test_malformed_function_deep_inside(self) -> None:
        bad = FunctionNode(
            BinaryNode(VariableNode('x'), Operator.ADD, NumberNode(1)),
            NumberNode(1),
        )
        with self.assertRaises(MalformedExpressionError):
            generate_constraints(CallNode(VariableNode('f'), bad))

    def test_unsupported_expression(self) -> None:
        node = BinaryNode(StringNode('a'), Operator.ADD, NumberNode(1))
        with self.assertRaises(UnhandledNodeTypeError) as cm:
            generate_constraints(node)
        self.assertIs(cm.exception.kind, ErrorKind.UNSUPPORTED_EXPRESSION)
        self.assertIsInstance(cm.exception, NotImplementedError)

    def test_foreign_objects_are_unsupported(self) -> None:
        with self.assertRaises(UnhandledNodeTypeError):
            generate_constraints(object())  # type: ignore
