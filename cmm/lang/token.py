"""Token model for the C-- language: lexical categories, the keyword table and the Token type itself."""

from dataclasses import dataclass, field
from enum import Enum


class TokenType(Enum):
    """Lexical categories. The value of each operator/punctuation kind is its source spelling."""
    INVALID = "INVALID"
    END = "END"
    IDENTIFIER = "IDENTIFIER"
    INTEGER = "INTEGER"

    # keywords
    IF = "if"
    ELSE = "else"
    WHILE = "while"
    PRINT = "print"

    # operators and punctuation
    ASSIGNMENT = "="
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS_THAN = "<"
    LESS_THAN_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_EQUAL = ">="
    AND = "&&"
    OR = "||"
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    COMMA = ","


KEYWORDS = {
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "print": TokenType.PRINT,
}

SINGLES = {
    "=": TokenType.ASSIGNMENT,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "%": TokenType.MODULO,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
}

# first char: {second char: combined kind}
DOUBLES = {
    "=": {"=": TokenType.EQUAL},
    "!": {"=": TokenType.NOT_EQUAL},
    "<": {"=": TokenType.LESS_THAN_EQUAL},
    ">": {"=": TokenType.GREATER_THAN_EQUAL},
    "&": {"&": TokenType.AND},
    "|": {"|": TokenType.OR},
}


def lookup_identifier(word):
    """Returns the keyword TokenType for word if it is reserved, otherwise TokenType.IDENTIFIER."""
    return KEYWORDS.get(word, TokenType.IDENTIFIER)


@dataclass(frozen=True)
class Token:
    """A single lexeme. line/column point at its first character and are ignored by equality."""
    type: TokenType
    text: str
    line: int = field(default=1, compare=False)
    column: int = field(default=1, compare=False)

    def __repr__(self):
        return f"{self.type.name}('{self.text}')"
