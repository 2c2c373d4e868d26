"""JSON frontmatter adapter.

JSON frontmatter is a bare object at the top of the document. JSON has no
tags, so Tagged values are written as ``{"tag": ..., "value": ...}`` objects
and that exact shape is read back as Tagged. The shape is reserved: a plain
object whose only keys are a string ``tag`` and a ``value`` also comes back
as Tagged, so ``{"tag": "sale", "value": 3}`` does not round-trip as an
object.
"""

import json
import math
from typing import Any

from ..core.config import ParseOptions
from ..core.exceptions import ErrorContext, NestingTooDeepError, ParseError, SyntaxParseError
from ..core.frontmatter import Frontmatter
from ..core.types import Format
from .base import NativeWriter, TreeBuilder


def scan_nesting(text: str, start: int = 0) -> tuple[int | None, int]:
    """Scan a JSON value for its closing brace and its nesting.

    String-aware: braces and brackets inside string literals are ignored.

    Args:
        text: Text containing a JSON object.
        start: Index of the opening ``{``.

    Returns:
        Tuple of (index of the matching ``}`` or None if unbalanced,
        deepest level of ``{``/``[`` nesting seen, root object counted as 1).
    """
    depth = 0
    deepest = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in "{[":
            depth += 1
            deepest = max(deepest, depth)
        elif char in "}]":
            depth -= 1
            if depth == 0:
                return index, deepest
    return None, deepest


def line_at(text: str, line: int) -> str | None:
    """Return the 1-based ``line`` of ``text`` stripped, if it exists."""
    lines = text.splitlines()
    if 1 <= line <= len(lines):
        return lines[line - 1].strip()
    return None


class _JsonWriter(NativeWriter):
    format_name = "json"

    def write_number(self, number: float, path: str) -> int | float:
        if not math.isfinite(number):
            raise self.reject(path, f"{number!r} is not a finite number")
        return super().write_number(number, path)


class _LenientJsonWriter(NativeWriter):
    """Accepts non-finite numbers; used only to measure serialised size."""

    format_name = "json"


class JsonFormat:
    """JSON adapter backed by the standard library ``json`` module."""

    format = Format.JSON

    def parse(self, raw: str, options: ParseOptions) -> Frontmatter:
        """Parse a JSON object into a Frontmatter container.

        Nesting is measured on the raw text first so that over-deep input is
        rejected before the decoder recurses into it.

        Raises:
            SyntaxParseError: Invalid JSON.
            NestingTooDeepError: Nesting beyond ``options.max_depth``.
            ParseError: The top-level value is not an object.
        """
        start = len(raw) - len(raw.lstrip())
        _, deepest = scan_nesting(raw, start)
        # The root object is depth 0
        if deepest - 1 > options.max_depth:
            raise NestingTooDeepError(deepest - 1, options.max_depth)

        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SyntaxParseError(
                "json", e.msg, ErrorContext(e.lineno, e.colno, line_at(raw, e.lineno))
            ) from e
        except RecursionError as e:
            raise ParseError("JSON front matter is nested too deeply to decode") from e

        if not isinstance(data, dict):
            raise ParseError(
                f"JSON front matter must be an object, got {type(data).__name__}"
            )
        return TreeBuilder("json", options).build_root(data)

    def serialize(self, frontmatter: Frontmatter) -> str:
        """Serialise compactly as UTF-8 JSON text.

        Raises:
            UnsupportedValueError: For NaN or infinite numbers.
        """
        return _dump(_JsonWriter().write_root(frontmatter))

    def serialized_size(self, frontmatter: Frontmatter) -> int:
        """Size in bytes of the compact JSON rendering, allowing non-finite numbers."""
        native = _LenientJsonWriter().write_root(frontmatter)
        return len(_dump(native, allow_nan=True).encode("utf-8"))


def _dump(native: dict[str, Any], *, allow_nan: bool = False) -> str:
    return json.dumps(native, ensure_ascii=False, allow_nan=allow_nan, separators=(",", ":"))
