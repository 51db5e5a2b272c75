"""Python source host for the translation engine.

Finds translation calls in Python source with the ``ast`` module, asks the
engine for a replacement per call site, and splices the replacements into the
original text. Everything outside the rewritten calls (formatting, comments)
is preserved byte for byte.

Static argument evaluation accepts what is determinable at build time:

    __("Hello")                 string constant
    __("Hello, " "world")       implicit concatenation (folded by the parser)
    __("Hello, " + "world")     ``+`` of static strings
    __(f"Hello")                f-string without placeholders

Anything else (names, calls, formatted f-strings, ``*args``, keyword
arguments) counts as a non-literal argument.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import ast
import io
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from gettextinline.diagnostics import Diagnostic, SourceSpan

if TYPE_CHECKING:
    from gettextinline.engine import CallOutcome, TranslationEngine
    from gettextinline.matching import StaticValue

__all__ = ["RewriteResult", "SourceRewriter", "rewrite_file", "static_string"]

logger = logging.getLogger(__name__)

# Replacements that parse as one of these need no parentheses.
_ATOMIC_NODES = (
    ast.Constant,
    ast.List,
    ast.Call,
    ast.Name,
    ast.Attribute,
    ast.Subscript,
)


@dataclass(frozen=True, slots=True)
class RewriteResult:
    """Outcome of rewriting one source file.

    Attributes:
        source: Rewritten source text
        outcomes: Per-call outcomes in source order
        filename: Name used in diagnostics
    """

    source: str
    outcomes: tuple[CallOutcome, ...]
    filename: str = "<string>"

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(o.diagnostic for o in self.outcomes if o.diagnostic is not None)

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == "error")

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == "warning")

    @property
    def replacements(self) -> int:
        return sum(1 for o in self.outcomes if o.rewritten)


def static_string(node: ast.expr) -> StaticValue:
    """Evaluate an argument node to a string at build time, or None."""
    match node:
        case ast.Constant(value=str() as value):
            return value
        case ast.BinOp(left, ast.Add(), right):
            left_value = static_string(left)
            right_value = static_string(right)
            if left_value is None or right_value is None:
                return None
            return left_value + right_value
        case ast.JoinedStr(values) if all(
            isinstance(v, ast.Constant) and isinstance(v.value, str) for v in values
        ):
            return "".join(v.value for v in values)  # type: ignore[attr-defined]
    return None


class _LineIndex:
    """Convert ast (line, UTF-8 byte column) positions to character offsets."""

    __slots__ = ("_lines", "_starts")

    def __init__(self, source: str) -> None:
        # Only \n, \r and \r\n end lines for the tokenizer; str.splitlines
        # would also split on form feeds and Unicode separators.
        self._lines = io.StringIO(source, newline="").readlines()
        self._starts: list[int] = []
        offset = 0
        for line in self._lines:
            self._starts.append(offset)
            offset += len(line)
        self._starts.append(offset)

    def offset(self, lineno: int, col_offset: int) -> int:
        line = self._lines[lineno - 1] if lineno - 1 < len(self._lines) else ""
        column = len(line.encode("utf-8")[:col_offset].decode("utf-8", errors="ignore"))
        return self._starts[lineno - 1] + column

    def span(self, node: ast.expr, filename: str) -> SourceSpan:
        start = self.offset(node.lineno, node.col_offset)
        end = self.offset(node.end_lineno or node.lineno, node.end_col_offset or node.col_offset)
        return SourceSpan(
            start=start,
            end=end,
            line=node.lineno,
            column=start - self._starts[node.lineno - 1] + 1,
            filename=filename,
        )


def _needs_parentheses(replacement: str) -> bool:
    text = replacement.strip()
    try:
        body = ast.parse(text, mode="eval").body
    except SyntaxError:
        # Not Python (e.g. a custom serializer targeting another language).
        return False
    if isinstance(body, _ATOMIC_NODES):
        return False
    # Anything before the outermost node can only be an opening parenthesis.
    return body.lineno == 1 and body.col_offset == 0


class SourceRewriter:
    """Rewrite translation calls in Python source.

    Example:
        >>> rewriter = SourceRewriter(engine)
        >>> result = rewriter.rewrite('print(__("Hello"))\\n')
        >>> result.source
        'print("Bonjour")\\n'
    """

    __slots__ = ("_engine",)

    def __init__(self, engine: TranslationEngine) -> None:
        self._engine = engine

    def rewrite(self, source: str, filename: str = "<string>") -> RewriteResult:
        """Rewrite every handled call site in ``source``.

        Raises:
            SyntaxError: If the source is not valid Python
        """
        try:
            tree = ast.parse(source, filename=filename)
        except SyntaxError as e:
            logger.error("Failed to parse %s: %s", filename, e)
            raise

        index = _LineIndex(source)
        calls = [
            (node, node.func.id)
            for node in ast.walk(tree)
            if isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and self._engine.handles(node.func.id)
        ]
        calls.sort(key=lambda item: (item[0].lineno, item[0].col_offset))

        outcomes: list[CallOutcome] = []
        edits: list[tuple[int, int, str]] = []
        for call, name in calls:
            span = index.span(call, filename)
            args: list[StaticValue] = [
                None if isinstance(arg, ast.Starred) else static_string(arg)
                for arg in call.args
            ]
            args.extend(None for _ in call.keywords)
            outcome = self._engine.process_call(name, args, span)
            outcomes.append(outcome)
            if outcome.replacement is not None:
                text = outcome.replacement
                if _needs_parentheses(text):
                    text = f"({text})"
                edits.append((span.start, span.end, text))

        rewritten = _apply_edits(source, edits)
        logger.debug(
            "Rewrote %s: %d of %d call sites replaced",
            filename,
            len(edits),
            len(outcomes),
        )
        return RewriteResult(source=rewritten, outcomes=tuple(outcomes), filename=filename)


def _apply_edits(source: str, edits: list[tuple[int, int, str]]) -> str:
    parts: list[str] = []
    position = 0
    for start, end, text in sorted(edits):
        # Edits are disjoint: a replaced call has only literal arguments, and
        # a handled call nested in an argument leaves its parent invalid.
        if start < position:
            continue
        parts.append(source[position:start])
        parts.append(text)
        position = end
    parts.append(source[position:])
    return "".join(parts)


def rewrite_file(
    path: str | os.PathLike[str],
    engine: TranslationEngine,
    *,
    encoding: str = "utf-8",
) -> RewriteResult:
    """Read and rewrite one Python source file (the file is not modified)."""
    file_path = Path(path)
    source = file_path.read_text(encoding=encoding, newline="")
    return SourceRewriter(engine).rewrite(source, filename=str(file_path))
