"""Tree-walking evaluator for the ep language. One Evaluator owns one Environment; statements run in order against it
and print as a side effect.
"""

from epscript.lang.error import DivisionByZero, GenericException, InvalidOperand, UnboundVariable, UnknownOperator
from epscript.lang.grammar import Assignment, BinaryExpression, Literal, Print, Variable


def show(value, pos=None):
    """Display form of a value: strings verbatim, integral floats without a fraction. Raises InvalidOperand (at pos)
    for an int too long to convert to decimal.
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    try:
        return str(value)
    except ValueError:  # past sys.get_int_max_str_digits()
        raise InvalidOperand("number of {} bits is too large to display", value.bit_length(), pos=pos, length=1)


def is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class Environment:
    """Flat name: value store. Names are only ever added or rebound, never removed."""

    def __init__(self):
        self._vars = {}

    def __repr__(self):
        return "[" + ", ".join(f"{name}={show(val)}" for name, val in self._vars.items()) + "]"

    def __contains__(self, name):
        return name in self._vars

    def __len__(self):
        return len(self._vars)

    def items(self):
        """(name, value) pairs in order of first definition."""
        return self._vars.items()

    def define(self, name, val):
        """Binds name to val, replacing any earlier value. Returns val."""
        self._vars[name] = val
        return val

    def lookup(self, name, pos=None):
        """Returns the value bound to name. Raises UnboundVariable (at pos) if there is none."""
        if name not in self._vars:
            raise UnboundVariable("variable '{}' is not defined", name, pos=pos)
        return self._vars[name]


class Evaluator:
    """Evaluates AST nodes against its environment. Print writes to stdout (sys.stdout at the time of printing if
    None).
    """

    def __init__(self, environment=None, stdout=None):
        self.environment = environment if environment is not None else Environment()
        self.stdout = stdout

    def run(self, forest):
        """Evaluates every node of forest in order. Returns the value of the last one."""
        val = None
        for node in forest:
            val = self.evaluate(node)
        return val

    def evaluate(self, node):
        """Returns the value of node, or None for a print."""
        if isinstance(node, Literal):
            return node.value

        elif isinstance(node, Variable):
            return self.environment.lookup(node.name, node.pos)

        elif isinstance(node, Assignment):
            return self.environment.define(node.name, self._value(node.value))

        elif isinstance(node, BinaryExpression):
            left = self._value(node.left)
            right = self._value(node.right)
            return self._apply(node, left, right)

        elif isinstance(node, Print):
            print(show(self._value(node.value), node.pos), file=self.stdout)
            return None

        raise GenericException("cannot evaluate '{}'", repr(node), internal=True)

    def _apply(self, node, left, right):
        """Applies node's operator to the already evaluated operands."""
        if node.operator not in ("+", "-", "*", "/"):
            raise UnknownOperator("unknown operator '{}'", node.operator, pos=node.pos)

        if node.operator == "+" and not (is_number(left) and is_number(right)):
            return show(left, node.pos) + show(right, node.pos)

        for val in (left, right):
            if not is_number(val):
                msg = "operator '{}' expects numbers, got '{}'"
                raise InvalidOperand(msg, (node.operator, show(val)), pos=node.pos, length=1)

        if node.operator == "/" and right == 0:
            raise DivisionByZero("division by zero in '{}'", str(node), pos=node.pos)

        try:
            if node.operator == "+":
                return left + right
            elif node.operator == "-":
                return left - right
            elif node.operator == "*":
                return left * right

            if isinstance(left, int) and isinstance(right, int) and left % right == 0:
                return left // right
            return left / right

        except OverflowError:  # int too large to convert to float
            raise InvalidOperand("result of '{}' is too large", str(node), pos=node.pos)

    def _value(self, node):
        """Evaluates node, which is used as an operand and so must produce a value."""
        val = self.evaluate(node)
        if val is None:
            raise InvalidOperand("'{}' has no value", str(node), pos=node.pos)
        return val
