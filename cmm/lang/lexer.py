"""Lexical analysis for C--. The lexer is pull-based: the parser asks for one token at a time with read_next_token, and
the lexer never looks further ahead than the character after the current one.

Tokens are produced as follows:

```
<whitespace>  ::= \\s                          ; skipped before every token
<integer>     ::= [0-9]+                       ; no sign, no decimal point, no exponent
<identifier>  ::= [a-zA-Z]+                    ; unless it is a keyword: if, else, while, print
<operator>    ::= "==" | "!=" | "<=" | ">=" | "&&" | "||"
                | "=" | "<" | ">" | "+" | "-" | "*" | "/" | "%"
<punctuation> ::= "(" | ")" | "{" | "}" | ","
```

Anything else (including a lone "!", "&" or "|") becomes an INVALID token: rejecting it is the parser's job.
"""

import re

from cmm.lang.token import DOUBLES, SINGLES, Token, TokenType, lookup_identifier


WHITESPACE = re.compile(r"\s")
DIGIT = re.compile(r"[0-9]")
LETTER = re.compile(r"[a-zA-Z]")


class Lexer:
    """Scans C-- source text into Tokens on demand."""

    def __init__(self, program):
        self.program = program
        self.pos = 0
        self.current_char = program[0] if program else None  # None means end of input
        self.line = 1
        self.column = 1

    def read_next_token(self):
        """Returns the next token in the program. Once input is exhausted, every call returns an END token."""
        self.skip_whitespace()

        char = self.current_char
        line, column = self.line, self.column

        if char is None:
            return Token(TokenType.END, TokenType.END.value, line, column)

        if DIGIT.match(char):
            return Token(TokenType.INTEGER, self.read_while(DIGIT), line, column)

        if LETTER.match(char):
            word = self.read_while(LETTER)
            return Token(lookup_identifier(word), word, line, column)

        if char in DOUBLES:
            combined = DOUBLES[char].get(self.peek())
            if combined is not None:
                self.advance()
                self.advance()
                return Token(combined, combined.value, line, column)

        self.advance()
        return Token(SINGLES.get(char, TokenType.INVALID), char, line, column)

    def advance(self):
        """Moves on to the next character, tracking line and column."""
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        self.pos += 1
        self.current_char = self.program[self.pos] if self.pos < len(self.program) else None

    def peek(self):
        """Looks at the character after the current one without consuming anything."""
        nxt = self.pos + 1
        return self.program[nxt] if nxt < len(self.program) else None

    def skip_whitespace(self):
        while self.current_char is not None and WHITESPACE.match(self.current_char):
            self.advance()

    def read_while(self, pattern):
        """Greedily consumes the run of characters matching pattern and returns it."""
        start = self.pos
        while self.current_char is not None and pattern.match(self.current_char):
            self.advance()
        return self.program[start:self.pos]

    def __iter__(self):
        """Yields the remaining tokens, ending with exactly one END token."""
        while True:
            token = self.read_next_token()
            yield token
            if token.type is TokenType.END:
                return
