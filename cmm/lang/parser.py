"""Parser for C--: recursive descent for statements, Pratt (precedence climbing) parsing for expressions.

C-- grammar, loosely:

```
<program>    ::= <statement>*
<statement>  ::= <identifier> "=" <expr>                            ; variable statement
               | "if" "(" <expr> ")" <block> ["else" <block>]
               | "while" "(" <expr> ")" <block>
               | "print" <expr> ("," <expr>)*
               | <expr>                                             ; expression statement
<block>      ::= "{" <statement>* "}"
<expr>       ::= <integer> | <identifier> | "(" <expr> ")" | <expr> <operator> <expr>
```

Operators bind, from tightest to loosest: `* / %`, `+ -`, `< > <= >=`, `== !=`, `&&`, `||`. Operators of equal
precedence associate to the left.

There are no statement terminators, so an operand directly followed by another operand (`x = 1 y`) is a missing
operator, except inside a print statement, whose arguments are separated by commas instead.

The parser never raises on bad input, short of RecursionError on very deep input (see parse_print_statement). Errors
are collected in `errors` and the offending statement is dropped; parsing carries on with the next token. Callers must
check `errors` before evaluating the program.

Position convention: every statement and expression parser returns with `current` on the last token it consumed. The
top-level loop in parse_program advances once after each statement. Blocks are the exception: an inner block consumes
its own closing brace, while the outermost block of a statement leaves it for parse_program. The brace depth tells
the two apart, and is reset after every top-level statement.
"""

from cmm.lang.lexer import Lexer
from cmm.lang.nodes import (BlockStatement, ExpressionStatement, Identifier, IfStatement, InfixExpression,
                            IntegerLiteral, PrintStatement, Program, VariableStatement, WhileStatement)
from cmm.lang.symbol import INT64_MAX
from cmm.lang.token import TokenType

LOWEST = 0

PRECEDENCES = {
    TokenType.MULTIPLY: 6,
    TokenType.DIVIDE: 6,
    TokenType.MODULO: 6,
    TokenType.PLUS: 5,
    TokenType.MINUS: 5,
    TokenType.LESS_THAN: 4,
    TokenType.GREATER_THAN: 4,
    TokenType.LESS_THAN_EQUAL: 4,
    TokenType.GREATER_THAN_EQUAL: 4,
    TokenType.EQUAL: 3,
    TokenType.NOT_EQUAL: 3,
    TokenType.AND: 2,
    TokenType.OR: 1,
}

# statements that end on their own last token; compound statements end on (or past) a closing brace
SIMPLE_STATEMENTS = (VariableStatement, ExpressionStatement, PrintStatement)


class Parser:
    """Builds a Program from a Lexer's token stream."""
    SYNTAX_ERROR = "Syntax error, didn't expect {}"
    LITERAL_ERROR = "Unable to parse \"{}\" as an integer"

    def __init__(self, lexer):
        if isinstance(lexer, str):
            lexer = Lexer(lexer)
        self.lexer = lexer

        self.current = None
        self.next = None
        self.brace_depth = 0
        self.errors = []

        self.advance()
        self.advance()

        # Pratt parse functions, keyed by the token type that triggers them
        self.prefix_fns = {
            TokenType.IDENTIFIER: self.parse_identifier,
            TokenType.INTEGER: self.parse_integer,
            TokenType.LEFT_PAREN: self.parse_bound_expression,
        }
        self.infix_fns = {token_type: self.parse_infix for token_type in PRECEDENCES}

    def parse_program(self):
        """Parses the whole token stream. Always returns a Program, even if errors were recorded."""
        program = Program()

        while self.current.type is not TokenType.END:
            statement = self.parse_statement(from_block=False)
            if statement is not None:
                program.statements.append(statement)

            self.brace_depth = 0
            self.advance()

        return program

    # ---------- errors ----------
    def log_error(self, token_text):
        self.errors.append(Parser.SYNTAX_ERROR.format(token_text))

    # ---------- token handling ----------
    def advance(self):
        self.current = self.next
        self.next = self.lexer.read_next_token()

    def expect_next(self, token_type):
        """Advances if the next token is of token_type. Otherwise records an error naming the next token."""
        if self.next.type is token_type:
            self.advance()
            return True
        self.log_error(self.next.text)
        return False

    def next_precedence(self):
        return PRECEDENCES.get(self.next.type, LOWEST)

    def current_precedence(self):
        return PRECEDENCES.get(self.current.type, LOWEST)

    # ---------- statements ----------
    def parse_statement(self, from_block):
        """Dispatches on the current token. from_block stops identifiers inside blocks from being read as variable
        statements, so that `x + 1` in a loop body is an expression. Assignments in blocks are routed here with
        from_block=False by parse_block_statement.
        """
        token_type = self.current.type

        if token_type is TokenType.IDENTIFIER and not from_block:
            return self.parse_variable_statement()
        if token_type is TokenType.IF:
            return self.parse_if_statement()
        if token_type is TokenType.WHILE:
            return self.parse_while_statement()
        if token_type is TokenType.PRINT:
            return self.parse_print_statement()
        return self.parse_expression_statement()

    def parse_variable_statement(self):
        token = self.current
        name = Identifier(token, token.text)

        if not self.expect_next(TokenType.ASSIGNMENT):
            return None

        self.advance()
        value = self.parse_expression(LOWEST)
        if value is None:
            return None
        return VariableStatement(token, name, value)

    def parse_expression_statement(self):
        token = self.current
        expression = self.parse_expression(LOWEST)
        if expression is None:
            return None
        return ExpressionStatement(token, expression)

    def parse_block_statement(self):
        """Parses `{ <statement>* }`. Returns None if the block is missing or any statement in it fails."""
        if self.current.type is not TokenType.LEFT_BRACE:
            self.log_error(self.current.text)
            return None

        block = BlockStatement(self.current)
        self.advance()
        self.brace_depth += 1

        while self.current.type not in (TokenType.RIGHT_BRACE, TokenType.END):
            if self.current.type is TokenType.ELSE:
                return block  # left for parse_if_statement

            assignment = self.current.type is TokenType.IDENTIFIER and self.next.type is TokenType.ASSIGNMENT
            statement = self.parse_statement(from_block=not assignment)
            if statement is None:
                return None

            block.statements.append(statement)
            if isinstance(statement, SIMPLE_STATEMENTS):
                self.advance()

        if self.current.type is TokenType.RIGHT_BRACE and self.brace_depth > 1:
            self.advance()
            self.brace_depth -= 1
        return block

    def parse_condition(self):
        """Parses `( <expr> )` after if/while, leaving current on the `{` that should follow."""
        if not self.expect_next(TokenType.LEFT_PAREN):
            return None

        self.advance()
        condition = self.parse_expression(LOWEST)
        if condition is None or not self.expect_next(TokenType.RIGHT_PAREN):
            return None

        self.advance()
        return condition

    def parse_if_statement(self):
        token = self.current
        outermost = self.brace_depth == 0

        condition = self.parse_condition()
        if condition is None:
            return None

        first_branch = self.parse_block_statement()
        if first_branch is None:
            return None

        if outermost and self.current.type is TokenType.RIGHT_BRACE and self.next.type is TokenType.ELSE:
            # the outermost block stopped on its closing brace: consume it to reach the else
            self.advance()
            self.brace_depth -= 1

        second_branch = None
        if self.current.type is TokenType.ELSE:
            self.advance()
            second_branch = self.parse_block_statement()
            if second_branch is None:
                return None

        return IfStatement(token, condition, first_branch, second_branch)

    def parse_while_statement(self):
        token = self.current

        condition = self.parse_condition()
        if condition is None:
            return None

        loop = self.parse_block_statement()
        if loop is None:
            return None
        return WhileStatement(token, condition, loop)

    def parse_print_statement(self):
        """Parses `print <expr> ("," <expr>)*`. Arguments are collected by right recursion, one level per argument,
        so a print with several hundred arguments raises RecursionError out of parse (ErrorHandler reports it).
        """
        statement = PrintStatement(self.current)

        def add_values(values):
            self.advance()
            value = self.parse_expression(LOWEST, from_print=True)
            if value is None:
                return None

            values.append(value)
            if self.next.type is TokenType.COMMA:
                self.advance()
                return add_values(values)
            return values

        if add_values(statement.values) is None:
            return None
        return statement

    # ---------- expressions ----------
    def parse_expression(self, precedence, from_print=False):
        """Pratt parser entry point. Keeps folding infix operators into the left operand for as long as the next
        operator binds tighter than precedence. from_print disables the missing-operator check.
        """
        prefix = self.prefix_fns.get(self.current.type)
        if prefix is None:
            self.log_error(self.current.text)
            return None

        left = prefix()
        if left is None:
            return None

        if not from_print and self.next.type in (TokenType.INTEGER, TokenType.IDENTIFIER):
            self.log_error(self.next.text)
            return None

        while precedence < self.next_precedence():
            infix = self.infix_fns[self.next.type]
            self.advance()
            left = infix(left, from_print)
            if left is None:
                return None

        return left

    def parse_infix(self, left, from_print=False):
        token = self.current
        precedence = self.current_precedence()

        self.advance()
        right = self.parse_expression(precedence, from_print)
        if right is None:
            return None
        return InfixExpression(token, token.text, left, right)

    def parse_bound_expression(self):
        """Parses a parenthesised sub-expression, leaving current on the closing parenthesis."""
        self.advance()
        expression = self.parse_expression(LOWEST)
        if expression is None or not self.expect_next(TokenType.RIGHT_PAREN):
            return None
        return expression

    def parse_identifier(self):
        return Identifier(self.current, self.current.text)

    def parse_integer(self):
        token = self.current
        try:
            value = int(token.text, 10)
        except ValueError:  # too many digits for int()
            value = None

        # literals are unsigned, so only the upper bound can be exceeded
        if value is None or value > INT64_MAX:
            self.errors.append(Parser.LITERAL_ERROR.format(token.text))
            return None
        return IntegerLiteral(token, value)


def parse(source):
    """Parses source text. Returns (program, errors)."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
