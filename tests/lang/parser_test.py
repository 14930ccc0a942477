import unittest

from cmm.lang.nodes import (BlockStatement, ExpressionStatement, Identifier, IfStatement, InfixExpression,
                            IntegerLiteral, PrintStatement, Program, VariableStatement, WhileStatement)
from cmm.lang.parser import Parser, parse
from cmm.lang.token import TokenType

COLLATZ = """
val = 104
while (val >= 2) {
    if (val % 2 == 0) {
        next = val / 2
    } else {
        next = 3 * val + 1
    }
    print val, next
    val = next
}
"""


def var(name):
    return Identifier(None, name)


def num(value):
    return IntegerLiteral(None, value)


def infix(operator, left, right):
    return InfixExpression(None, operator, left, right)


def parse_expression(source):
    """Parses a single expression statement and returns its expression."""
    program, errors = parse(source)
    assert not errors, errors
    statement, = program.statements
    return statement.expression


class ExpressionTestCase(unittest.TestCase):

    def test_precedence(self):
        cases = {
            "1 + 2 * 3": infix("+", num(1), infix("*", num(2), num(3))),
            "(1 + 2) * 3": infix("*", infix("+", num(1), num(2)), num(3)),
            "1 * 2 + 3": infix("+", infix("*", num(1), num(2)), num(3)),
            "10 - 3 - 2": infix("-", infix("-", num(10), num(3)), num(2)),
            "8 / 4 / 2": infix("/", infix("/", num(8), num(4)), num(2)),
            "7 % 4 * 2": infix("*", infix("%", num(7), num(4)), num(2)),
            "1 + 2 < 4": infix("<", infix("+", num(1), num(2)), num(4)),
            "1 < 2 == 1": infix("==", infix("<", num(1), num(2)), num(1)),
            "1 == 1 && 2 != 3": infix("&&", infix("==", num(1), num(1)), infix("!=", num(2), num(3))),
            "1 || 0 && 0": infix("||", num(1), infix("&&", num(0), num(0))),
            "1 < 2 && 3 >= 2 || 0": infix("||", infix("&&", infix("<", num(1), num(2)), infix(">=", num(3), num(2))),
                                          num(0)),
            "((4))": num(4),
            "(val % 2) == (0)": infix("==", infix("%", var("val"), num(2)), num(0)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_expression(case), case)

    def test_integer_limits(self):
        self.assertEqual(num(9223372036854775807), parse_expression("9223372036854775807"))
        self.assertEqual(num(7), parse_expression("007"))


class ErrorTestCase(unittest.TestCase):

    def test_errors(self):
        cases = {
            "x = ": ["Syntax error, didn't expect END"],
            "x = 1 +": ["Syntax error, didn't expect END"],
            "x = !": ["Syntax error, didn't expect !"],
            "x = (1 + 2": ["Syntax error, didn't expect END"],
            "x = 1 y = 2": ["Syntax error, didn't expect y"],
            "x = a b": ["Syntax error, didn't expect b", "Syntax error, didn't expect END"],  # b starts a new statement
            "x = 1 2": ["Syntax error, didn't expect 2"],
            "x = 1 + 2 3": ["Syntax error, didn't expect 3"],
            "print": ["Syntax error, didn't expect END"],
            "print 1,": ["Syntax error, didn't expect END"],
            "x = 9223372036854775808": ["Unable to parse \"9223372036854775808\" as an integer"],
            "x = 99999999999999999999999": ["Unable to parse \"99999999999999999999999\" as an integer"],
            "while (a) { x = }": ["Syntax error, didn't expect }"],
            "if (a) { x = 1 } else { print }": ["Syntax error, didn't expect }"],
        }
        for case, expected in cases.items():
            __, errors = parse(case)
            self.assertEqual(expected, errors, case)

    def test_first_error(self):
        cases = {
            "if x) { y = 1 }": "Syntax error, didn't expect x",
            "if (x { y = 1 }": "Syntax error, didn't expect {",
            "while (1) x = 1": "Syntax error, didn't expect x",
            "while () { }": "Syntax error, didn't expect )",
            "x + 1": "Syntax error, didn't expect +",
            "x = 1 $": "Syntax error, didn't expect $",
            "} x = 1": "Syntax error, didn't expect }",
        }
        for case, expected in cases.items():
            __, errors = parse(case)
            self.assertTrue(errors, case)
            self.assertEqual(expected, errors[0], case)

    def test_failed_statements_are_dropped(self):
        program, errors = parse("while (a) { x = }")
        self.assertEqual([], program.statements)
        self.assertEqual(1, len(errors))

        program, errors = parse("x = 1 y = 2")
        self.assertEqual([VariableStatement(None, var("y"), num(2))], program.statements)

    def test_parsing_continues(self):
        program, errors = parse("x = \nprint 5")
        self.assertEqual(["Syntax error, didn't expect print"], errors)

        program, errors = parse("x = 1 2 print 3")
        self.assertEqual(["Syntax error, didn't expect 2"], errors)
        self.assertEqual([ExpressionStatement(None, num(2)), PrintStatement(None, [num(3)])], program.statements)


class StatementTestCase(unittest.TestCase):

    def test_statements(self):
        cases = {
            "x = 5": [VariableStatement(None, var("x"), num(5))],
            "print 1, x, 2 + 3": [PrintStatement(None, [num(1), var("x"), infix("+", num(2), num(3))])],
            "(1)": [ExpressionStatement(None, num(1))],
            "print a, b c = 1": [PrintStatement(None, [var("a"), var("b")]),
                                 VariableStatement(None, var("c"), num(1))],
            "print a + b c = a": [PrintStatement(None, [infix("+", var("a"), var("b"))]),
                                  VariableStatement(None, var("c"), var("a"))],
            "while (x) { }": [WhileStatement(None, var("x"), BlockStatement(None))],
            "if (x) { y = 1 }": [IfStatement(None, var("x"), BlockStatement(None, [
                VariableStatement(None, var("y"), num(1))]))],
            "if (x) { y = 1 } else { y = 2 }": [IfStatement(None, var("x"), BlockStatement(None, [
                VariableStatement(None, var("y"), num(1))]), BlockStatement(None, [
                VariableStatement(None, var("y"), num(2))]))],
            "if (x) { y = 1 } print y": [IfStatement(None, var("x"), BlockStatement(None, [
                VariableStatement(None, var("y"), num(1))])), PrintStatement(None, [var("y")])],
            "while (i < 3) { print i i = i + 1 }": [WhileStatement(None, infix("<", var("i"), num(3)), BlockStatement(
                None, [PrintStatement(None, [var("i")]), VariableStatement(None, var("i"), infix("+", var("i"), num(1)))]
            ))],
            "while (a) { a + 1 }": [WhileStatement(None, var("a"), BlockStatement(None, [
                ExpressionStatement(None, infix("+", var("a"), num(1)))]))],
        }
        for case, expected in cases.items():
            program, errors = parse(case)
            self.assertEqual([], errors, case)
            self.assertEqual(expected, program.statements, case)

    def test_sample(self):
        program, errors = parse(COLLATZ)
        self.assertEqual([], errors)
        self.assertEqual(2, len(program.statements))

        assignment, loop = program.statements
        self.assertEqual(VariableStatement(None, var("val"), num(104)), assignment)
        self.assertIsInstance(loop, WhileStatement)
        self.assertEqual(infix(">=", var("val"), num(2)), loop.condition)

        branch, output, update = loop.loop.statements
        self.assertEqual(infix("==", infix("%", var("val"), num(2)), num(0)), branch.condition)
        self.assertEqual([VariableStatement(None, var("next"), infix("/", var("val"), num(2)))],
                         branch.first_branch.statements)
        self.assertEqual([VariableStatement(None, var("next"), infix("+", infix("*", num(3), var("val")), num(1)))],
                         branch.second_branch.statements)
        self.assertEqual(PrintStatement(None, [var("val"), var("next")]), output)
        self.assertEqual(VariableStatement(None, var("val"), var("next")), update)

    def test_nested_blocks(self):
        source = """
        if (a) {
            while (b) {
                if (c) {
                    x = 1
                } else {
                    x = 2
                    print x
                }
            }
            y = 2
        }
        print y
        """
        program, errors = parse(source)
        self.assertEqual([], errors)
        self.assertEqual(2, len(program.statements))

        outer = program.statements[0]
        self.assertIsInstance(outer, IfStatement)
        self.assertIsNone(outer.second_branch)
        self.assertEqual(2, len(outer.first_branch.statements))

        loop, assignment = outer.first_branch.statements
        self.assertIsInstance(loop, WhileStatement)
        self.assertEqual(VariableStatement(None, var("y"), num(2)), assignment)
        self.assertEqual(1, len(loop.loop.statements))

        inner = loop.loop.statements[0]
        self.assertIsInstance(inner, IfStatement)
        self.assertEqual(1, len(inner.first_branch.statements))
        self.assertEqual(2, len(inner.second_branch.statements))

    def test_nested_empty_block(self):
        program, errors = parse("while (a) { if (b) { } print a }")
        self.assertEqual([], errors)

        loop, = program.statements
        self.assertEqual(2, len(loop.loop.statements))
        self.assertEqual([], loop.loop.statements[0].first_branch.statements)

    def test_top_level_else(self):
        program, errors = parse("if (a) { if (b) { x = 1 } } else { x = 2 } print x")
        self.assertEqual([], errors)
        self.assertEqual(2, len(program.statements))

        outer = program.statements[0]
        self.assertEqual([VariableStatement(None, var("x"), num(2))], outer.second_branch.statements)
        self.assertIsNone(outer.first_branch.statements[0].second_branch)

    def test_block_stops_at_else(self):
        parser = Parser("{ x = 1 else")
        block = parser.parse_block_statement()

        self.assertEqual([VariableStatement(None, var("x"), num(1))], block.statements)
        self.assertIs(TokenType.ELSE, parser.current.type)

    def test_brace_depth_reset(self):
        parser = Parser("while (a) { if (b) { x = 1 } }")
        parser.parse_program()
        self.assertEqual(0, parser.brace_depth)

    def test_display(self):
        program, __ = parse("x = 1 + 2")
        expected = ("Program(nodes=[\n"
                    "    VariableStatement(nodes=[\n"
                    "        Identifier('x'),\n"
                    "        InfixExpression('+', nodes=[\n"
                    "            IntegerLiteral(1),\n"
                    "            IntegerLiteral(2)\n"
                    "        ])\n"
                    "    ])\n"
                    "])")
        self.assertEqual(expected, program.display())
        self.assertIsInstance(program, Program)


if __name__ == '__main__':
    unittest.main()
