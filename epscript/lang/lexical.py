"""Lexical analysis for the ep language. Turns a chunk of source text into a flat list of Tokens; the parser consumes
them positionally.

Tokens are matched in this order after skipping whitespace:

```
<number>   ::= [0-9]+
<string>   ::= '"' <char except '"'>* '"'    ; text keeps the quotes
<name>     ::= [A-Za-z_][A-Za-z0-9_]*        ; "let" and "print" become keywords
<operator> ::= "+" | "-" | "*" | "/"
<punct>    ::= "(" | ")" | "=" | ";"
```

Identifiers, operators and punctuation are separate classes, so `x=5` is three tokens. The legacy lexer keeps the
single catch-all pattern where any run of word and symbol characters is one token (`x=5` is one `word` token).
"""

import re
from dataclasses import dataclass, field

from epscript.lang.error import LexicalGap


NUMBER = "number"
STRING = "string"
KEYWORD = "keyword"
NAME = "name"
OPERATOR = "operator"
PUNCT = "punct"
WORD = "word"  # legacy lexer only: a symbol run that is none of the above

KEYWORDS = ("let", "print")
OPERATORS = ("+", "-", "*", "/")
PUNCTUATION = ("(", ")", "=", ";")

TOKEN_PATTERN = re.compile(r"""
    (?P<number>[0-9]+)
  | (?P<string>"[^"]*")
  | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<operator>[+\-*/])
  | (?P<punct>[()=;])
""", re.VERBOSE)

LEGACY_PATTERN = re.compile(r"\s*(\d+|let|print|\"[^\"]*\"|[+\-*/()=;\w]+)", re.ASCII)
NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
WHITESPACE = re.compile(r"\s*")


@dataclass(frozen=True)
class Token:
    """A lexical unit. pos is the offset of text in the source chunk and does not take part in equality."""
    kind: str
    text: str
    pos: int = field(default=0, compare=False)

    @property
    def end(self):
        return self.pos + len(self.text)

    def __str__(self):
        return self.text


def classify(text):
    """Returns the token kind of text as the legacy lexer produced it."""
    if text.isdigit():
        return NUMBER
    if text.startswith("\"") and text.endswith("\"") and len(text) > 1:
        return STRING
    if text in KEYWORDS:
        return KEYWORD
    if NAME_PATTERN.fullmatch(text):
        return NAME
    if text in OPERATORS:
        return OPERATOR
    if text in PUNCTUATION:
        return PUNCT
    return WORD


def _gap(source, pos):
    """Returns LexicalGap for the run of unmatchable characters starting at pos."""
    end = pos + 1
    while end < len(source) and not source[end].isspace() and not TOKEN_PATTERN.match(source, end):
        end += 1

    text = source[pos:end]
    if text.startswith("\""):
        return LexicalGap("unterminated string literal '{}'", text, pos=pos)
    return LexicalGap("unrecognized characters '{}'", text, pos=pos)


def tokenize(source, lenient=False, legacy=False, on_gap=None):
    """Returns the list of Tokens in source. Raises LexicalGap on characters that start no token, unless lenient, in
    which case the gap is skipped and on_gap (if given) is called with the LexicalGap. The legacy lexer always skips.
    """
    if legacy:
        return [Token(classify(match.group(1)), match.group(1), match.start(1))
                for match in LEGACY_PATTERN.finditer(source)]

    tokens = []
    pos = WHITESPACE.match(source).end()
    while pos < len(source):
        match = TOKEN_PATTERN.match(source, pos)
        if match:
            kind, text = match.lastgroup, match.group()
            if kind == NAME and text in KEYWORDS:
                kind = KEYWORD
            tokens.append(Token(kind, text, pos))
            pos = match.end()
        else:
            gap = _gap(source, pos)
            if not lenient:
                raise gap
            if on_gap is not None:
                on_gap(gap)
            pos += len(gap.expr)

        pos = WHITESPACE.match(source, pos).end()

    return tokens
