"""Session control for the ep language. Runs the full pipeline (tokenize, parse, evaluate) for a source file, or for
chunks of source added one at a time in command-line mode.
"""

from epscript.lang.error import GenericException
from epscript.lang.evaluator import Evaluator
from epscript.lang.lexical import tokenize
from epscript.lang.parser import parse


def read_source(path):
    """Returns the text of the file at path."""
    try:
        with open(path, "r", encoding="utf-8") as file:
            return file.read()
    except (OSError, UnicodeDecodeError):
        raise GenericException("'{}' could not be opened", path, diagnosis=False)


class Session:
    """Governs an ep session: one evaluator, and so one environment, shared by every chunk added to it."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line=False, lenient=False, legacy=False, stdout=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.lenient = lenient    # whether lexical gaps are skipped (with a warning) instead of raised
        self.legacy = legacy      # whether to use the original single-pattern lexer

        self.evaluator = Evaluator(stdout=stdout)
        self.to_exec = []  # list of (source chunk, line num, statements) waiting to be run
        self.results = []  # command-line mode only: values of top-level statements that are not prints

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            self.add(read_source(path))

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @property
    def environment(self):
        return self.evaluator.environment

    def tokenize(self, source):
        """Returns tokens of source using this session's lexer settings. Skipped gaps are reported as warnings."""
        return tokenize(source, lenient=self.lenient, legacy=self.legacy, on_gap=self.error_handler.warn)

    def add(self, source, line_num=1):
        """Tokenizes and parses source, then queues its statements. Nothing runs until run is called, and nothing is
        queued if source has a syntax error. Returns the parsed statements.
        """
        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        forest = parse(self.tokenize(source))
        self.to_exec.append((source, line_num, forest))

        self.error_handler.remove_line(self.path)  # error was not raised
        return forest

    def run(self):
        """Runs this session's queued statements in order. Will raise any errors that are encountered; statements that
        already ran keep their effects.
        """
        while self.to_exec:
            source, line_num, forest = self.to_exec.pop(0)
            self.error_handler.register_line(self.path, source, line_num)

            for node in forest:
                val = self.evaluator.evaluate(node)
                if val is not None and self.cmd_line:
                    self.results.append(val)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the latest result."""
        return self.results.pop()


def interpret(source, stdout=None, lenient=False, legacy=False):
    """Runs source from start to finish on a fresh evaluator and returns that evaluator."""
    evaluator = Evaluator(stdout=stdout)
    evaluator.run(parse(tokenize(source, lenient=lenient, legacy=legacy)))
    return evaluator
