"""Abstract syntax tree for the ep language. A program is a forest: a list of top-level nodes, one per statement.

```
<expr> ::= <string> | <number>                 ; Literal
         | <name>                              ; Variable
         | "let" <name> "=" <expr>             ; Assignment
         | "print" <expr>                      ; Print
         | <operator> <expr> <expr>            ; BinaryExpression (prefix notation)
         | "(" <expr> ")"                      ; grouping, not a node
```

Nodes are immutable and own their children. pos is the source offset of the token that started the node; it is used
for error messages and does not take part in equality.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Literal:
    """Number or string written in the source. Strings are stored without their quotes."""
    value: Union[int, float, str]
    pos: int = field(default=0, compare=False)

    @property
    def nodes(self):
        """Child nodes, in evaluation order."""
        return []

    def __str__(self):
        if isinstance(self.value, str):
            return f"\"{self.value}\""
        return str(self.value)


@dataclass(frozen=True)
class Variable:
    """Read of a named value."""
    name: str
    pos: int = field(default=0, compare=False)

    @property
    def nodes(self):
        return []

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Assignment:
    """Binds name to the value of value. Evaluates to that value, so assignments nest."""
    name: str
    value: "Node"
    pos: int = field(default=0, compare=False)

    @property
    def nodes(self):
        return [self.value]

    def __str__(self):
        return f"let {self.name} = {self.value}"


@dataclass(frozen=True)
class Print:
    """Writes the display form of value to stdout. Has no value of its own."""
    value: "Node"
    pos: int = field(default=0, compare=False)

    @property
    def nodes(self):
        return [self.value]

    def __str__(self):
        return f"print {self.value}"


@dataclass(frozen=True)
class BinaryExpression:
    """operator applied to left and right, written in prefix notation."""
    operator: str
    left: "Node"
    right: "Node"
    pos: int = field(default=0, compare=False)

    @property
    def nodes(self):
        return [self.left, self.right]

    def __str__(self):
        return f"{self.operator} {self.left} {self.right}"


Node = Union[Literal, Variable, Assignment, Print, BinaryExpression]


def display(node, indents=0):
    """Recursively displays a syntax tree with readable format.

    Format:
    <Node>(expr='<expr>', nodes=[
        <Node>(expr='<expr>', nodes=[
            ...
            <Node>(expr='<expr>')  # <-- if nodes is empty
        ])
    ])
    """
    result = f"{'    ' * indents}{type(node).__name__}(expr='{node}'"
    if node.nodes:
        result += ", nodes=["
        for sub_node in node.nodes:
            result += "\n" + display(sub_node, indents + 1) + ","
        result = result[:-1] + f"\n{'    ' * indents}]"
    return result + ")"
