"""TOML frontmatter adapter.

TOML has no null, so serialising a tree containing Null fails rather than
inventing a placeholder. Dates and times are read as ISO 8601 strings. Tagged values use the same
reserved ``tag``/``value`` table shape as JSON.
"""

import re
import tomllib

import tomli_w

from ..core.config import ParseOptions
from ..core.exceptions import (
    ErrorContext,
    ParseError,
    SerializationError,
    SyntaxParseError,
)
from ..core.frontmatter import Frontmatter
from ..core.types import Format
from .base import NativeWriter, TreeBuilder
from .json_format import line_at

# tomllib reports positions inside the message: "... (at line 3, column 7)"
_POSITION_PATTERN = re.compile(r"\s*\(at line (\d+), column (\d+)\)$")


class _TomlWriter(NativeWriter):
    format_name = "toml"

    def write_null(self, path: str) -> None:
        raise self.reject(path, "TOML has no null value")


def _syntax_error(raw: str, error: tomllib.TOMLDecodeError) -> SyntaxParseError:
    message = str(error)
    line = getattr(error, "lineno", None)
    column = getattr(error, "colno", None)
    match = _POSITION_PATTERN.search(message)
    if match:
        message = message[: match.start()]
        line = line or int(match.group(1))
        column = column or int(match.group(2))
    if hasattr(error, "msg"):
        message = error.msg
    snippet = line_at(raw, line) if line else None
    return SyntaxParseError("toml", message, ErrorContext(line, column, snippet))


class TomlFormat:
    """TOML adapter: ``tomllib`` for reading, ``tomli_w`` for writing."""

    format = Format.TOML

    def parse(self, raw: str, options: ParseOptions) -> Frontmatter:
        """Parse a TOML document into a Frontmatter container.

        Raises:
            SyntaxParseError: Invalid TOML.
            NestingTooDeepError: Nesting beyond ``options.max_depth``.
            TooManyKeysError: A table with more than ``options.max_keys`` keys.
        """
        try:
            data = tomllib.loads(raw)
        except tomllib.TOMLDecodeError as e:
            raise _syntax_error(raw, e) from e
        except RecursionError as e:
            raise ParseError("TOML front matter is nested too deeply to decode") from e
        return TreeBuilder("toml", options).build_root(data)

    def serialize(self, frontmatter: Frontmatter) -> str:
        """Serialise as a TOML document.

        Raises:
            UnsupportedValueError: If any Null value is reachable.
            SerializationError: If ``tomli_w`` rejects the data.
        """
        native = _TomlWriter().write_root(frontmatter)
        try:
            return tomli_w.dumps(native)
        except (TypeError, ValueError) as e:
            raise SerializationError("toml", str(e)) from e
