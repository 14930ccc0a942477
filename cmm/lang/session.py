"""Session control for cmm. Wires the lexer, parser and evaluator together to run a .cmm file or the entries typed
into the shell. A session owns one symbol table, so variables persist from one shell entry to the next.
"""

import sys

from cmm.lang.error import EvaluationError, GenericException
from cmm.lang.evaluator import Evaluator
from cmm.lang.parser import parse
from cmm.lang.symbol import Error, SymbolTable


class Session:
    """Governs a cmm session: parses sources, reports syntax errors and evaluates programs."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, out=None, display_ast=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                # used for error messages
        self.cmd_line = cmd_line        # whether or not in command-line mode
        self.out = out if out is not None else sys.stdout
        self.display_ast = display_ast  # display parsed programs instead of running them

        self.symbol_table = SymbolTable()
        self.evaluator = Evaluator(self.out, error_handler)

        self.to_exec = []  # list of (source, line_num, Program) waiting to be run
        self.results = []  # Symbols produced by run
        self.has_errors = False

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)
            self.add(source)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, prev=""):
        """Joins line onto prev (the pending text of a continued shell entry). Returns the joined text and whether
        the entry continues, that is, whether a brace or parenthesis is still open.
        """
        if prev:
            line = prev + "\n" + line

        add_to_prev = line.count("{") > line.count("}") or line.count("(") > line.count(")")
        return line, add_to_prev

    def add(self, source, line_num=1):
        """Parses source, which starts on line line_num of self.path. Syntax errors are written to self.out, one per
        line, and the program is dropped. Otherwise the program is queued until run is called. Returns the Program, or
        None if it had syntax errors.
        """
        program, errors = parse(source)

        if errors:
            self.has_errors = True
            for error in errors:
                print(error, file=self.out)
            return None

        if self.display_ast:
            print(program.display(), file=self.out)
        else:
            self.to_exec.append((source, line_num, program))
        return program

    def run(self):
        """Runs every queued program, writing its final value to self.out. Raises an EvaluationError if a program
        evaluates to an Error.
        """
        while self.to_exec:
            source, line_num, program = self.to_exec.pop(0)

            result = self.evaluator.evaluate(program, self.symbol_table)
            self.results.append(result)

            if isinstance(result, Error):
                self.throw(result, source, line_num)
            print(result, file=self.out)

            self.error_handler.remove_line(self.path)  # error was not raised

    def throw(self, error, source, line_num):
        """Raises error as an EvaluationError, pointing at the token that produced it (if known)."""
        token = error.token
        if token is None:
            raise EvaluationError(error.message, diagnosis=False)

        line = source.split("\n")[token.line - 1]
        self.error_handler.register_line(self.path, line, line_num + token.line - 1)

        start = token.column - 1
        raise EvaluationError(error.message, line, start=start, end=start + len(token.text))
