"""C-- interpreter: lexer, Pratt parser and tree-walking evaluator."""

__version__ = "1.0.0"
