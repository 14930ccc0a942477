"""Runtime values ("symbols") and the symbol table that stores variables during evaluation.

A symbol is one of Integer, Error or Unit. Each one has a type tag and a string rendering: the rendering is what print
writes and what a session reports as a program's result.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from cmm.lang.token import Token

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


def to_int64(num):
    """Wraps num into the signed 64-bit range (two's complement overflow)."""
    return (num - INT64_MIN) % 2 ** 64 + INT64_MIN


class Symbol(ABC):
    """Superclass of every runtime value."""

    @property
    @abstractmethod
    def type(self):
        """Type tag of this value."""

    @abstractmethod
    def __str__(self):
        """Rendered value, as print would write it."""


@dataclass(frozen=True)
class Integer(Symbol):
    value: int

    @property
    def type(self):
        return "INTEGER"

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Error(Symbol):
    """Error produced during evaluation. token is the source position of the offending node, if known."""
    message: str
    token: Token = field(default=None, compare=False)

    @property
    def type(self):
        return "ERROR"

    def __str__(self):
        return "ERROR: " + self.message


@dataclass(frozen=True)
class Unit(Symbol):
    """Returned when a statement has no meaningful value. Renders as an empty string."""

    @property
    def type(self):
        return "UNIT"

    def __str__(self):
        return ""


TRUE = Integer(1)
FALSE = Integer(0)
UNIT = Unit()


class SymbolTable:
    """Flat mapping of variable names to symbols. C-- has a single namespace, so blocks do not open new scopes."""

    def __init__(self):
        self.table = {}

    def get(self, identifier):
        """Returns the symbol stored under identifier, or None if it was never assigned."""
        return self.table.get(identifier)

    def set(self, identifier, value):
        """Stores value under identifier (last write wins) and returns it."""
        self.table[identifier] = value
        return value

    def __contains__(self, identifier):
        return identifier in self.table

    def __len__(self):
        return len(self.table)

    def items(self):
        return self.table.items()
