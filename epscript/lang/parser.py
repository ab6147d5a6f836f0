"""Recursive descent parser for the ep language. Consumes the token list with a single forward cursor and produces the
AST forest described in grammar.py. Every _expression call consumes exactly the tokens of the expression it parses,
which is what lets prefix expressions nest (`+ + 1 2 3`) without an explicit stack.
"""

from epscript.lang.error import InvalidSyntax
from epscript.lang.grammar import Assignment, BinaryExpression, Literal, Print, Variable
from epscript.lang.lexical import KEYWORD, NAME, NUMBER, OPERATOR, PUNCT, STRING


class Parser:
    """Builds the AST forest of a token list, left to right with no backtracking."""

    def __init__(self, tokens):
        self._tokens = tokens
        self._pos = 0

    def parse(self):
        """Parses every top-level statement. Semicolons between statements are separators only."""
        forest = []
        while self._skip_separators():
            forest.append(self._expression())
        return forest

    def _skip_separators(self):
        """Advances past any ';' tokens. Returns whether tokens remain."""
        while self._pos < len(self._tokens) and self._matches(PUNCT, ";"):
            self._advance()
        return self._pos < len(self._tokens)

    def _expression(self):
        """Parses one expression starting at the current token and returns its node."""
        token = self._current_token()

        if token.kind == STRING:
            self._advance()
            return Literal(token.text[1:-1], token.pos)  # remove quotes

        if token.kind == KEYWORD and token.text == "let":
            return self._assignment()

        if token.kind == KEYWORD and token.text == "print":
            self._advance()
            return Print(self._expression(), token.pos)

        if token.kind == NUMBER:
            self._advance()
            try:
                return Literal(int(token.text), token.pos)
            except ValueError:  # past sys.get_int_max_str_digits()
                raise InvalidSyntax("number literal '{}' is too long", f"{token.text[:8]}...", pos=token.pos,
                                    length=len(token.text))

        if token.kind == NAME:
            self._advance()
            return Variable(token.text, token.pos)

        if self._matches(PUNCT, "("):
            return self._paren()

        if token.kind == OPERATOR:
            self._advance()
            left = self._expression()
            right = self._expression()
            return BinaryExpression(token.text, left, right, token.pos)

        raise InvalidSyntax("unexpected token '{}'", token.text, pos=token.pos)

    def _assignment(self):
        """let <name> = <expr>"""
        let = self._advance()

        name = self._current_token(expected="variable name")
        if name.kind != NAME:
            raise InvalidSyntax("expected variable name after 'let', got '{}'", name.text, pos=name.pos)
        self._advance()

        self._consume("=", after=f"variable name '{name.text}'")
        return Assignment(name.text, self._expression(), let.pos)

    def _paren(self):
        """( <expr> ), which returns the inner node: grouping is not a node."""
        self._advance()
        expr = self._expression()
        self._consume(")", after="expression")
        return expr

    def _consume(self, expected, after):
        """Advances past the punctuation expected, or raises InvalidSyntax naming what it should follow."""
        token = self._current_token(expected=f"'{expected}'")
        if not self._matches(PUNCT, expected):
            raise InvalidSyntax(f"expected '{expected}' after {after}, got '{{}}'", token.text, pos=token.pos)
        return self._advance()

    def _matches(self, kind, text):
        token = self._tokens[self._pos]
        return token.kind == kind and token.text == text

    def _current_token(self, expected="expression"):
        """Returns the token under the cursor. At end of input, raises InvalidSyntax saying what was expected."""
        if self._pos >= len(self._tokens):
            pos = self._tokens[-1].end if self._tokens else 0
            raise InvalidSyntax("unexpected end of input, expected {}", expected, pos=pos, diagnosis=False)
        return self._tokens[self._pos]

    def _advance(self):
        """Moves the cursor forward and returns the token it was on."""
        self._pos += 1
        return self._tokens[self._pos - 1]


def parse(tokens):
    """Returns the AST forest for tokens."""
    return Parser(tokens).parse()
