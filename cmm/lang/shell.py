"""Handles interactive/command-line mode for the cmm interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """C-- interpreter shell."""
    intro = "C-- interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def onecmd(self, line):
        """Inside a continued entry, every line is C-- source, even if it looks like a shell command."""
        if self._tmp_line:
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Executes arbitrary C-- source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if line.strip():
                self.sess.add(line, self.line_num - line.count("\n"))
                try:
                    self.sess.run()
                finally:
                    self.sess.results.clear()  # already written to sess.out

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            return self.default(self.lastcmd)  # a variable called help

        print("Welcome to the C-- interpreter!\n\n"
              "C-- has integers, variables, if/else, while and print. Conditions are integers:\n"
              "1 is true and 0 is false. Blocks can span several lines; the prompt changes to\n"
              "'. ' until every brace is closed.\n\n"
              "Try it out by typing 'x = 6 * 7', then 'print x, x / 2'. 'vars' lists every\n"
              "variable and 'exit' leaves the interpreter.")

    def do_vars(self, arg):
        """Lists every variable in the session."""
        if arg:
            return self.default(self.lastcmd)

        for name, value in self.sess.symbol_table.items():
            print(f"{name} = {value}")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit("")

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(self.lastcmd)
        return True
