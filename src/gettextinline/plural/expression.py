"""Safe compiler for gettext plural expressions.

The ``plural=`` part of a Plural-Forms header is a C expression over ``n``.
It is tokenized and parsed by precedence climbing into a small immutable
expression tree, which is then evaluated directly or rendered as Python
source. Nothing is ever passed to ``eval``.

Grammar (lowest to highest precedence)::

    expr     := or ( "?" expr ":" expr )?      right-associative
    or       := and ( "||" and )*
    and      := eq ( "&&" eq )*
    eq       := rel ( ("==" | "!=") rel )*
    rel      := add ( ("<" | "<=" | ">" | ">=") add )*
    add      := mul ( ("+" | "-") mul )*
    mul      := unary ( ("*" | "/" | "%") unary )*
    unary    := ("!" | "-") unary | primary
    primary  := NUMBER | "n" | "(" expr ")"

Evaluation follows C: comparisons and logical operators yield 0 or 1, ``/``
and ``%`` truncate toward zero.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from gettextinline.constants import MAX_PLURAL_EXPRESSION_DEPTH, MAX_PLURAL_EXPRESSION_LENGTH
from gettextinline.diagnostics import Diagnostic, DiagnosticCode, PluralRuleError

__all__ = [
    "Binary",
    "Conditional",
    "Expression",
    "Number",
    "Unary",
    "Variable",
    "compile_expression",
    "evaluate",
    "render_python",
    "tree_depth",
]


@dataclass(frozen=True, slots=True)
class Number:
    value: int


@dataclass(frozen=True, slots=True)
class Variable:
    """The plural operand ``n``."""


@dataclass(frozen=True, slots=True)
class Unary:
    op: str
    operand: Expression


@dataclass(frozen=True, slots=True)
class Binary:
    op: str
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class Conditional:
    test: Expression
    if_true: Expression
    if_false: Expression


type Expression = Number | Variable | Unary | Binary | Conditional

_TOKEN = re.compile(
    r"\s*(?:(?P<number>\d+)|(?P<name>[A-Za-z_]\w*)|(?P<op>&&|\|\||==|!=|<=|>=|[-+*/%<>!?:()]))"
)

# Binary operator precedence; higher binds tighter.
_BINARY_PRECEDENCE: dict[str, int] = {
    "||": 1,
    "&&": 2,
    "==": 3,
    "!=": 3,
    "<": 4,
    "<=": 4,
    ">": 4,
    ">=": 4,
    "+": 5,
    "-": 5,
    "*": 6,
    "/": 6,
    "%": 6,
}

_COMPARISONS = frozenset({"==", "!=", "<", "<=", ">", ">="})


def _syntax_error(text: str, detail: str) -> PluralRuleError:
    return PluralRuleError(
        Diagnostic(
            code=DiagnosticCode.PLURAL_RULE_SYNTAX,
            message=f"Invalid plural expression {text!r}: {detail}",
            hint="Expected a C expression over n, e.g. (n != 1)",
        )
    )


def _tokenize(text: str) -> list[str]:
    tokens: list[str] = []
    pos = 0
    end = len(text.rstrip())
    while pos < end:
        match = _TOKEN.match(text, pos)
        if match is None:
            raise _syntax_error(text, f"unexpected character {text[pos:].lstrip()[:1]!r}")
        if match.group("name") is not None and match.group("name") != "n":
            raise _syntax_error(text, f"unknown identifier {match.group('name')!r}")
        tokens.append(match.group(match.lastgroup or "op"))
        pos = match.end()
    return tokens


@dataclass(slots=True)
class _NestingGuard:
    """Context manager bounding parser recursion.

    Checked before incrementing, so a raised error leaves the count intact.
    """

    text: str
    max_depth: int = MAX_PLURAL_EXPRESSION_DEPTH
    current_depth: int = field(default=0, init=False)

    def __enter__(self) -> _NestingGuard:
        if self.current_depth >= self.max_depth:
            raise _syntax_error(self.text, "nested too deeply")
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1


class _Parser:
    """Precedence-climbing parser over a token list."""

    __slots__ = ("_guard", "_pos", "_text", "_tokens")

    def __init__(self, text: str) -> None:
        self._text = text
        self._tokens = _tokenize(text)
        self._pos = 0
        self._guard = _NestingGuard(text)

    def parse(self) -> Expression:
        if not self._tokens:
            raise _syntax_error(self._text, "empty expression")
        expression = self._expression()
        if self._pos != len(self._tokens):
            raise _syntax_error(self._text, f"unexpected {self._tokens[self._pos]!r}")
        return expression

    def _peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _take(self) -> str:
        token = self._peek()
        if token is None:
            raise _syntax_error(self._text, "unexpected end of expression")
        self._pos += 1
        return token

    def _expect(self, token: str) -> None:
        found = self._take()
        if found != token:
            raise _syntax_error(self._text, f"expected {token!r}, found {found!r}")

    def _expression(self) -> Expression:
        with self._guard:
            test = self._binary(1)
            if self._peek() != "?":
                return test
            self._take()
            if_true = self._expression()
            self._expect(":")
            if_false = self._expression()
            return Conditional(test, if_true, if_false)

    def _binary(self, min_precedence: int) -> Expression:
        left = self._unary()
        while True:
            op = self._peek()
            if op is None or op not in _BINARY_PRECEDENCE:
                return left
            precedence = _BINARY_PRECEDENCE[op]
            if precedence < min_precedence:
                return left
            self._take()
            right = self._binary(precedence + 1)
            left = Binary(op, left, right)

    def _unary(self) -> Expression:
        if self._peek() in ("!", "-"):
            op = self._take()
            with self._guard:
                return Unary(op, self._unary())
        return self._primary()

    def _primary(self) -> Expression:
        token = self._take()
        if token == "(":
            inner = self._expression()
            self._expect(")")
            return inner
        if token == "n":
            return Variable()
        if token.isdigit():
            return Number(int(token))
        raise _syntax_error(self._text, f"unexpected {token!r}")


def compile_expression(text: str) -> Expression:
    """Parse a plural expression into an expression tree.

    Raises:
        PluralRuleError: If the text is not a valid plural expression
    """
    if len(text) > MAX_PLURAL_EXPRESSION_LENGTH:
        raise _syntax_error(text[:40] + "...", "expression too long")
    expression = _Parser(text).parse()
    # Left-associative chains such as n-n-n-... nest without recursing.
    if tree_depth(expression) > MAX_PLURAL_EXPRESSION_DEPTH:
        raise _syntax_error(text, "nested too deeply")
    return expression


def tree_depth(expression: Expression) -> int:
    """Number of nodes on the longest root-to-leaf path."""
    deepest = 0
    stack: list[tuple[Expression, int]] = [(expression, 1)]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        match node:
            case Unary(_, operand):
                stack.append((operand, depth + 1))
            case Binary(_, left, right):
                stack.extend(((left, depth + 1), (right, depth + 1)))
            case Conditional(test, if_true, if_false):
                stack.extend(((test, depth + 1), (if_true, depth + 1), (if_false, depth + 1)))
    return deepest


def _c_div(a: int, b: int) -> int:
    if b == 0:
        return 0
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _c_mod(a: int, b: int) -> int:
    if b == 0:
        return 0
    remainder = abs(a) % abs(b)
    return -remainder if a < 0 else remainder


def evaluate(expression: Expression, n: int) -> int:
    """Evaluate an expression tree with C integer semantics.

    Division and modulo truncate toward zero. A zero divisor yields 0, so
    evaluating a compiled tree never raises.
    """
    match expression:
        case Number(value):
            return value
        case Variable():
            return n
        case Unary("!", operand):
            return int(not evaluate(operand, n))
        case Unary(_, operand):
            return -evaluate(operand, n)
        case Conditional(test, if_true, if_false):
            return evaluate(if_true if evaluate(test, n) else if_false, n)
        case Binary("&&", left, right):
            return int(bool(evaluate(left, n)) and bool(evaluate(right, n)))
        case Binary("||", left, right):
            return int(bool(evaluate(left, n)) or bool(evaluate(right, n)))
        case Binary(op, left, right):
            return _apply(op, evaluate(left, n), evaluate(right, n))
    msg = f"Unknown expression node: {expression!r}"
    raise TypeError(msg)


def _apply(op: str, a: int, b: int) -> int:  # noqa: PLR0911 - one branch per operator
    match op:
        case "+":
            return a + b
        case "-":
            return a - b
        case "*":
            return a * b
        case "/":
            return _c_div(a, b)
        case "%":
            return _c_mod(a, b)
        case "==":
            return int(a == b)
        case "!=":
            return int(a != b)
        case "<":
            return int(a < b)
        case "<=":
            return int(a <= b)
        case ">":
            return int(a > b)
        case ">=":
            return int(a >= b)
    msg = f"Unknown operator: {op!r}"
    raise ValueError(msg)


# Inline C division and remainder: truncating, and 0 for a zero divisor.
_PY_C_DIV = (
    "(lambda a, b: 0 if b == 0 else "
    "(-(abs(a) // abs(b)) if (a < 0) != (b < 0) else abs(a) // abs(b)))"
)
_PY_C_MOD = "(lambda a, b: 0 if b == 0 else (-(abs(a) % abs(b)) if a < 0 else abs(a) % abs(b)))"


def render_python(expression: Expression) -> str:
    """Render an expression tree as an int-valued Python expression over ``n``.

    The rendered expression computes what ``evaluate`` computes for every
    non-negative ``n``. ``n`` divided by a positive literal renders as plain
    ``//`` or ``%``; any other division calls an inline C-semantics function.
    """
    match expression:
        case Number(value):
            return str(value)
        case Variable():
            return "n"
        case Unary("!", operand):
            return f"int(not {render_python(operand)})"
        case Unary(_, operand):
            return f"(-{render_python(operand)})"
        case Conditional(test, if_true, if_false):
            return (
                f"({render_python(if_true)} if {render_python(test)} "
                f"else {render_python(if_false)})"
            )
        case Binary("&&" | "||" as op, left, right):
            keyword = "and" if op == "&&" else "or"
            return f"int(bool({render_python(left)}) {keyword} bool({render_python(right)}))"
        case Binary(op, left, right) if op in _COMPARISONS:
            return f"int({render_python(left)} {op} {render_python(right)})"
        case Binary("/" | "%" as op, Variable(), Number(value)) if value > 0:
            py_op = "//" if op == "/" else op
            return f"(n {py_op} {value})"
        case Binary("/", left, right):
            return f"{_PY_C_DIV}({render_python(left)}, {render_python(right)})"
        case Binary("%", left, right):
            return f"{_PY_C_MOD}({render_python(left)}, {render_python(right)})"
        case Binary(op, left, right):
            return f"({render_python(left)} {op} {render_python(right)})"
    msg = f"Unknown expression node: {expression!r}"
    raise TypeError(msg)
