"""Error handling for the ep language. Only GenericExceptions should be encountered while running a program: if
another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw an ep error/warning. msg is a format string
    whose fields are filled in with exprs, and pos is the offset of the offending text in its source chunk.
    """

    def __init__(self, msg, exprs=None, pos=None, length=None, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        super().__init__(msg.format(*exprs))
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.length = length if length is not None else max(len(self.expr), 1)  # needed for error display

        self.pos = pos
        self.diagnosis = diagnosis
        self.internal = internal


class LexicalGap(GenericException):
    """Source text that no token pattern matches."""


class InvalidSyntax(GenericException):
    """Missing expected token or an expression starting with an unexpected one."""


class UnboundVariable(GenericException):
    """Variable read before any assignment to it."""


class UnknownOperator(GenericException):
    """Binary expression carrying an operator other than + - * /."""


class InvalidOperand(GenericException):
    """Arithmetic applied to a value it is not defined for."""


class DivisionByZero(GenericException):
    pass


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report ep errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream  # defaults to sys.stderr at report time
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers a source chunk in traceback given path. line_num is the line the chunk starts on. Should be called
        prior to Session add/run.
        """
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes source chunk from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def locate(source, pos):
        """Returns (line, line offset, column) of pos in source. Line offset is zero-based from the chunk start."""
        pos = min(pos, len(source))
        start = source.rfind("\n", 0, pos) + 1
        end = source.find("\n", pos)
        if end == -1:
            end = len(source)
        return source[start:end], source.count("\n", 0, start), pos - start

    @staticmethod
    def diagnose(error, line, col, warning=False):
        """Returns offending part of line highlighted and bolded, with a marker underneath."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        end = min(col + error.length, len(line)) if col < len(line) else col + 1

        diagnosis = "  " + line[:col]
        diagnosis += colored(line[col:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * col
        diagnosis += colored("^" + "~" * (end - col - 1), color, attrs=["bold"])

        return diagnosis

    def _report(self, error, label, color):
        """Prints error_msg for error, prefixed with the location of error.pos if it is known."""
        stream = self.stream if self.stream is not None else sys.stderr

        location = None
        for file, (source, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if source is not None and error.pos is not None:
                line, offset, col = ErrorHandler.locate(source, error.pos)
                location = (file, line_num + offset, col, line)

        error_msg = ""
        if location:
            file, line_num, col, line = location
            error_msg += colored(f"{file}:{line_num}:{col + 1}: ", attrs=["bold"])
        elif self.traceback:
            error_msg += colored(f"{next(iter(self.traceback))}: ", attrs=["bold"])

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(label, color, attrs=["bold"]) + error.msg
        print(error_msg, file=stream)

        if location and not error.internal and error.diagnosis:
            print(ErrorHandler.diagnose(error, location[-1], location[2], warning=color == ErrorHandler.WARNING),
                  file=stream)

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message. Accepts a GenericException or GenericException args."""
        if len(args) == 1 and not kwargs and isinstance(args[0], GenericException):
            error = args[0]
        else:
            error = GenericException(*args, **kwargs)
        self._report(error, "warning: ", ErrorHandler.WARNING)

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (source chunk, line_num) representing origination of error.
        """
        self._report(error, "error: ", ErrorHandler.ERROR)

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt"))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("expression nested too deeply"))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
