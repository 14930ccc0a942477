"""Tree-walking evaluator for C--.

Evaluation is plain structural recursion over the AST, against a SymbolTable that the caller owns. Every node evaluates
to a Symbol:

- statements that have nothing to show (if, while, print) evaluate to Unit
- conditions are true only when they evaluate to exactly Integer(1), and false only for Integer(0)
- errors are Error values, not exceptions. An Error stops whatever is being evaluated and is handed upwards unchanged:
  an operator is not applied to it, a variable is not assigned it, and the rest of a block is skipped.
"""

import sys

from cmm.lang.error import GenericException
from cmm.lang.nodes import (BlockStatement, ExpressionStatement, Identifier, IfStatement, InfixExpression,
                            IntegerLiteral, PrintStatement, Program, VariableStatement, WhileStatement)
from cmm.lang.symbol import FALSE, TRUE, UNIT, Error, Integer, SymbolTable, to_int64


def truncate_divide(left, right):
    """Integer division rounding towards zero (Python's // rounds towards negative infinity)."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def truncate_modulo(left, right):
    """Remainder of truncate_divide: takes the sign of left."""
    return left - right * truncate_divide(left, right)


def boolean(value):
    """C-- truth: only 1 is true."""
    return value == 1


def encode(condition):
    return TRUE if condition else FALSE


ARITHMETIC = {
    "+": lambda left, right: left + right,
    "-": lambda left, right: left - right,
    "*": lambda left, right: left * right,
    "/": truncate_divide,
    "%": truncate_modulo,
}

COMPARISON = {
    "<": lambda left, right: left < right,
    ">": lambda left, right: left > right,
    "<=": lambda left, right: left <= right,
    ">=": lambda left, right: left >= right,
    "==": lambda left, right: left == right,
    "!=": lambda left, right: left != right,
}

LOGICAL = {
    "&&": lambda left, right: boolean(left) and boolean(right),
    "||": lambda left, right: boolean(left) or boolean(right),
}

DIVISION_ERRORS = {"/": "division by zero", "%": "modulo by zero"}


class Evaluator:
    """Evaluates AST nodes. Print output goes to out. If error_handler is given, each evaluated statement is reported
    to it as a step (shown when tracing is on).
    """

    def __init__(self, out=None, error_handler=None):
        self.out = out if out is not None else sys.stdout
        self.error_handler = error_handler

    def evaluate(self, node, symbol_table):
        """Evaluates node against symbol_table and returns the resulting Symbol."""
        if isinstance(node, (Program, BlockStatement)):
            return self.evaluate_statements(node.statements, symbol_table)
        if isinstance(node, VariableStatement):
            return self.evaluate_variable_statement(node, symbol_table)
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, symbol_table)
        if isinstance(node, IfStatement):
            return self.evaluate_if_statement(node, symbol_table)
        if isinstance(node, WhileStatement):
            return self.evaluate_while_statement(node, symbol_table)
        if isinstance(node, PrintStatement):
            return self.evaluate_print_statement(node, symbol_table)
        if isinstance(node, InfixExpression):
            left = self.evaluate(node.left, symbol_table)
            if isinstance(left, Error):
                return left
            right = self.evaluate(node.right, symbol_table)
            if isinstance(right, Error):
                return right
            return self.evaluate_infix(node, left, right)
        if isinstance(node, Identifier):
            return self.evaluate_identifier(node, symbol_table)
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)

        raise GenericException("cannot evaluate '{}'", repr(node), internal=True)

    def evaluate_statements(self, statements, symbol_table):
        result = UNIT
        for statement in statements:
            result = self.evaluate(statement, symbol_table)
            if self.error_handler is not None:
                self.error_handler.register_step(type(statement).__name__, str(result))
            if isinstance(result, Error):
                break
        return result

    def evaluate_variable_statement(self, node, symbol_table):
        value = self.evaluate(node.value, symbol_table)
        if isinstance(value, Error):
            return value
        return symbol_table.set(node.name.name, value)

    def evaluate_identifier(self, node, symbol_table):
        value = symbol_table.get(node.name)
        if value is None:
            return Error(f"Couldn't find identifier: {node.name}", node.token)
        return value

    def evaluate_if_statement(self, node, symbol_table):
        condition = self.evaluate(node.condition, symbol_table)
        if isinstance(condition, Error):
            return condition

        if condition == TRUE:
            return self.evaluate(node.first_branch, symbol_table)
        elif condition == FALSE and node.second_branch is not None:
            return self.evaluate(node.second_branch, symbol_table)
        return UNIT

    def evaluate_while_statement(self, node, symbol_table):
        while True:
            condition = self.evaluate(node.condition, symbol_table)
            if isinstance(condition, Error):
                return condition
            if condition != TRUE:
                return UNIT

            result = self.evaluate(node.loop, symbol_table)
            if isinstance(result, Error):
                return result

    def evaluate_print_statement(self, node, symbol_table):
        for expression in node.values:
            value = self.evaluate(expression, symbol_table)
            if isinstance(value, Error):
                return value
            print(value, end=" ", file=self.out)
        return UNIT

    def evaluate_infix(self, node, left, right):
        """Applies node's operator. Both operands must already be Integers."""
        if not isinstance(left, Integer) or not isinstance(right, Integer):
            return Error(f"unsupported operands for '{node.operator}': {left.type} and {right.type}", node.token)

        operator = node.operator
        if operator in ARITHMETIC:
            if operator in DIVISION_ERRORS and right.value == 0:
                return Error(DIVISION_ERRORS[operator], node.token)
            return Integer(to_int64(ARITHMETIC[operator](left.value, right.value)))
        if operator in COMPARISON:
            return encode(COMPARISON[operator](left.value, right.value))
        if operator in LOGICAL:
            return encode(LOGICAL[operator](left.value, right.value))

        raise GenericException("unknown operator '{}'", operator, internal=True)


def evaluate(program, symbol_table=None, out=None):
    """Evaluates program against symbol_table (a fresh one if not given) and returns the resulting Symbol."""
    if symbol_table is None:
        symbol_table = SymbolTable()
    return Evaluator(out).evaluate(program, symbol_table)
