"""Error handling for the cmm interpreter. Syntax errors are not exceptions (the parser collects them, see parser.py);
this module covers everything that stops a run: runtime errors surfaced by a session, unreadable files, keyboard
interrupts and internal faults. Only GenericExceptions should be encountered during running: if another type of error
makes it all the way to ErrorHandler, it is assumed to be an internal issue.

A reported error looks like

```
  File 'prog.cmm', line 2:
    print 10 / (3 - 3)
error: division by zero
  print 10 / (3 - 3)
           ^
```
"""

import sys

from termcolor import colored


def highlight(text):
    return colored(text, ErrorHandler.ERROR, attrs=["bold"])


class GenericException(Exception):
    """A cmm error. `{}` slots in msg are filled with the bolded exprs. exprs[0] is the source line the error points
    into, and start/end delimit the offending token within it (the whole line by default).
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        exprs = [exprs] if isinstance(exprs, str) else list(exprs or [""])

        self.expr = exprs[0]
        self.start = start
        self.end = len(self.expr) if end == -1 else end
        self.diagnosis = diagnosis  # whether to show the caret line
        self.internal = internal

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))
        super().__init__(self.msg)


class EvaluationError(GenericException):
    """A program evaluated to an Error value."""


class ErrorHandler:
    """Context manager that reports cmm errors, then either exits (fatal) or swallows them so the shell can go on."""
    ERROR = "red"
    STEP = "magenta"

    # Python errors expected during a run, and the message reported for each
    EXPECTED = {
        KeyboardInterrupt: "keyboard interrupt",
        RecursionError: "maximum recursion depth exceeded: expression is nested too deeply",
    }

    def __init__(self, fatal=True, trace=False):
        self.fatal = fatal
        self.trace = trace
        self.traceback = {}  # path: (line, line_num) of the statement that failed in that file, if any

    def register_file(self, path):
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Points the traceback for path at line. Called before the error is raised."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Forgets the line registered for path. Called once a program has run cleanly."""
        self.traceback[path] = (None, None)

    def register_step(self, kind, text):
        """Reports an evaluation step on stderr if tracing is on."""
        if self.trace:
            print(colored(f"[{kind}] ", ErrorHandler.STEP, attrs=["bold"]) + text, file=sys.stderr)

    @staticmethod
    def diagnose(error):
        """Returns error.expr with the offending span highlighted, and a caret line underneath."""
        start = error.start
        end = max(error.end, start + 1)

        line = error.expr[:start] + highlight(error.expr[start:end]) + error.expr[end:]
        caret = " " * start + highlight("^" + "~" * (end - start - 1))
        return f"  {line}\n  {caret}"

    def locate(self):
        """Returns one entry per file with a registered line, headed by 'Traceback:' if there are several."""
        located = [f"  File '{path}', line {line_num}:\n    {line}"
                   for path, (line, line_num) in self.traceback.items() if line]
        if len(located) > 1:
            located.insert(0, "Traceback:")
        return located

    def report(self, error):
        """Returns the full text printed for error."""
        parts = self.locate()

        prefix = highlight("[internal] ") if error.internal else ""
        parts.append(prefix + highlight("error: ") + error.msg)

        if not error.internal and error.expr and error.diagnosis:
            parts.append(ErrorHandler.diagnose(error))
        return "\n".join(parts)

    def throw(self, error):
        """Prints error, then exits if fatal. Otherwise the traceback is cleared for the next run."""
        print(self.report(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False

        if exc_type in ErrorHandler.EXPECTED:
            self.throw(GenericException(ErrorHandler.EXPECTED[exc_type]))
            return True
        if issubclass(exc_type, GenericException):
            self.throw(exc_val)
            return True

        self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
        return False  # internal errors are re-raised
