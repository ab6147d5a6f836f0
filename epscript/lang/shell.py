"""Handles interactive/command-line mode for the ep interpreter. Uses cmd as backend."""

import cmd

from epscript.lang.evaluator import show


class Shell(cmd.Cmd):
    """ep interpreter shell."""
    intro = "ep interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary ep source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            self.sess.results.clear()
            self.sess.add(line, self.line_num)
            self.sess.run()

            if self.sess.results:
                print(show(self.sess.pop()), file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the ep interpreter!\n\n"
              "Expressions are written in prefix notation: the operator comes before both \n"
              "of its operands, so '* + 1 2 3' is (1 + 2) * 3. Supported operators are \n"
              "+, -, * and /.\n\n"
              "Try it out by typing 'let x = 10'. This will bind 10 to the name 'x'. Next, \n"
              "try typing 'print + x 1', which prints 11. Type 'vars' to list variables.",
              file=self.stdout)

    def do_vars(self, arg):
        """Lists the variables defined in this session."""
        with self.sess.error_handler:
            for name, val in self.sess.environment.items():
                print(f"{name} = {show(val)}", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
