"""
Infix parser for ALGSIMP

Grammar (left-associative, * binds tighter than + and -):

    expression := term (('+' term) | ('-' term))*
    term       := factor ('*' factor)*
    factor     := '(' expression ')' | variable | number
    variable   := 'x' | 'y' | 'z'
    number     := digit+

Whitespace may appear around any token. There is no subtraction node:
a - b is read as a + (0 + (-1 * b)). Unary minus is not supported.

Examples:
    parse_expression("3+2*4") -> Add(Constant(3.0), Multiply(Constant(2.0), Constant(4.0)))
    parse_expression("(x+1)*y") -> Multiply(Add(Variable('x'), Constant(1.0)), Variable('y'))
"""

from .expression import Expression, Constant, Variable
from .operators import Add, Multiply

VARIABLES = ("x", "y", "z")
DIGITS = "0123456789"


class ParseError(SyntaxError):
    """
    Raised when the input does not match the grammar.

    Attributes:
        text: The full source text
        position: 0-based index of the offending character
        offset: 1-based column, as for SyntaxError
    """

    def __init__(self, message: str, text: str, position: int):
        super().__init__(message)
        self.text = text
        self.position = position
        self.offset = position + 1

    def __str__(self) -> str:
        return self.msg


def negate(term: Expression) -> Expression:
    """Desugar the right operand of a subtraction: 0 + (-1 * term)."""
    return Add(Constant(0), Multiply(Constant(-1), term))


class _Parser:
    """Recursive-descent parser over a single source string."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def error(self, message: str) -> ParseError:
        return ParseError(message, self.text, self.pos)

    def skip_whitespace(self):
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def peek(self) -> str:
        """Return the next non-space character, or '' at end of input."""
        self.skip_whitespace()
        if self.pos < len(self.text):
            return self.text[self.pos]
        return ""

    def parse(self) -> Expression:
        expr = self.parse_expression()
        c = self.peek()
        if c:
            raise self.error(f"Unexpected '{c}' at position {self.pos}")
        return expr

    def parse_expression(self) -> Expression:
        result = self.parse_term()
        while self.peek() in ("+", "-"):
            start = self.pos
            op = self.text[self.pos]
            self.pos += 1
            try:
                term = self.parse_term()
            except ParseError:
                # Leave the operator unconsumed; the caller reports it
                self.pos = start
                break
            if op == "-":
                term = negate(term)
            result = Add(result, term)
        return result

    def parse_term(self) -> Expression:
        result = self.parse_factor()
        while self.peek() == "*":
            start = self.pos
            self.pos += 1
            try:
                factor = self.parse_factor()
            except ParseError:
                self.pos = start
                break
            result = Multiply(result, factor)
        return result

    def parse_factor(self) -> Expression:
        c = self.peek()
        if not c:
            raise self.error("Unexpected end of input")

        if c == "(":
            self.pos += 1
            expr = self.parse_expression()
            if self.peek() != ")":
                raise self.error("Expected ')'")
            self.pos += 1
            return expr

        if c in VARIABLES:
            self.pos += 1
            return Variable(c)

        if c in DIGITS:
            return self.parse_number()

        raise self.error(f"Unexpected '{c}' at position {self.pos}")

    def parse_number(self) -> Constant:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in DIGITS:
            self.pos += 1
        return Constant(float(self.text[start:self.pos]))


def parse_expression(text: str) -> Expression:
    """
    Parse infix source text into an expression tree.

    Args:
        text: Source such as "3 + 2*x"

    Returns:
        The parsed expression

    Raises:
        ParseError: If the text does not match the grammar or input
                    remains after the longest valid prefix.
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_expression expects a string, got {type(text).__name__}")
    return _Parser(text).parse()
