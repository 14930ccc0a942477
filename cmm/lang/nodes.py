"""Abstract syntax tree for C--. The node set is closed: statements are Program, VariableStatement,
ExpressionStatement, BlockStatement, IfStatement, WhileStatement and PrintStatement; expressions are Identifier,
IntegerLiteral and InfixExpression. Every parent owns its children, and the tree never shares or back-references a
node.

Every node keeps the token that started it, so that runtime errors can point back at the source.
"""

from abc import ABC, abstractmethod


class Node(ABC):
    """Superclass of every AST node."""

    def __init__(self, token):
        self.token = token
        self._cls = type(self).__name__

    @property
    @abstractmethod
    def nodes(self):
        """Child nodes, in source order. Optional children that are absent are left out."""

    @property
    def label(self):
        """Short description of this node on its own, without children."""
        return ""

    def display(self, indents=0):
        """Recursively displays the tree in a readable format.

        Format:
        <Node>(<label>, nodes=[
            <Node>(<label>, nodes=[
                ...
                <Node>(<label>)  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{self._cls}({self.label}"
        if self.nodes:
            result += ", nodes=[" if self.label else "nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{self._cls}({self.label})"

    def __str__(self):
        return self.display()

    def __eq__(self, other):
        return isinstance(other, type(self)) and self.label == other.label and self.nodes == other.nodes


class Statement(Node, ABC):
    """Marker superclass for statement nodes."""


class Expression(Node, ABC):
    """Marker superclass for expression nodes."""


class Program(Node):
    """Root of the tree: the top-level statements of a source text."""

    def __init__(self, statements=None):
        super().__init__(None)
        self.statements = statements if statements is not None else []

    @property
    def nodes(self):
        return self.statements


class Identifier(Expression):

    def __init__(self, token, name):
        super().__init__(token)
        self.name = name

    @property
    def nodes(self):
        return []

    @property
    def label(self):
        return f"'{self.name}'"


class IntegerLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    @property
    def nodes(self):
        return []

    @property
    def label(self):
        return str(self.value)


class InfixExpression(Expression):
    """Binary operation: left <operator> right."""

    def __init__(self, token, operator, left, right):
        super().__init__(token)
        self.operator = operator
        self.left = left
        self.right = right

    @property
    def nodes(self):
        return [self.left, self.right]

    @property
    def label(self):
        return f"'{self.operator}'"


class VariableStatement(Statement):
    """Assignment: name = value. There are no declarations in C--, so this both creates and updates a variable."""

    def __init__(self, token, name, value):
        super().__init__(token)
        self.name = name
        self.value = value

    @property
    def nodes(self):
        return [self.name, self.value]


class ExpressionStatement(Statement):

    def __init__(self, token, expression):
        super().__init__(token)
        self.expression = expression

    @property
    def nodes(self):
        return [self.expression]


class BlockStatement(Statement):
    """Body of a branch or loop."""

    def __init__(self, token, statements=None):
        super().__init__(token)
        self.statements = statements if statements is not None else []

    @property
    def nodes(self):
        return self.statements


class IfStatement(Statement):

    def __init__(self, token, condition, first_branch, second_branch=None):
        super().__init__(token)
        self.condition = condition
        self.first_branch = first_branch
        self.second_branch = second_branch

    @property
    def nodes(self):
        nodes = [self.condition, self.first_branch]
        if self.second_branch is not None:
            nodes.append(self.second_branch)
        return nodes


class WhileStatement(Statement):

    def __init__(self, token, condition, loop):
        super().__init__(token)
        self.condition = condition
        self.loop = loop

    @property
    def nodes(self):
        return [self.condition, self.loop]


class PrintStatement(Statement):

    def __init__(self, token, values=None):
        super().__init__(token)
        self.values = values if values is not None else []

    @property
    def nodes(self):
        return self.values
