"""Locate the frontmatter block at the start of a document.

A block is recognised after any leading whitespace (and byte-order mark):

- ``---`` on a line of its own opens YAML, closed by the next ``---`` line.
- ``+++`` on a line of its own opens TOML, closed by the next ``+++`` line.
- ``{`` opens bare JSON, closed by the balancing ``}``.

Delimiter lines must match exactly; a ``---`` inside a line never closes a
block. The body is the text after the closing delimiter with at most one
line separator removed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from loguru import logger

from ..core.config import ParseOptions
from ..core.exceptions import NoFrontmatterError, UnknownFormatError, UnterminatedBlockError
from ..core.frontmatter import Frontmatter
from ..core.types import Format
from ..formats.json_format import scan_nesting
from ..parser import parse_with_options

_BOM = "\ufeff"

_FENCES = {"---": Format.YAML, "+++": Format.TOML}

# Lines end at \r\n, \n or \r; the last line may have no terminator
_LINE_PATTERN = re.compile(r"([^\r\n]*)(\r\n|\n|\r|\Z)")

# Whatever trails a closing brace up to and including one line separator
_JSON_TAIL_PATTERN = re.compile(r"[ \t]*(?:\r\n|\n|\r|\Z)")


@dataclass(frozen=True)
class RawFrontmatter:
    """A frontmatter block split from its document.

    Attributes:
        raw: Text between the delimiters (the whole object for JSON).
        body: Remaining document text.
        delimiter: Opening delimiter: ``---``, ``+++`` or ``{``.
        start_line: 1-based line of the opening delimiter.
    """

    raw: str
    body: str
    delimiter: str
    start_line: int


def _iter_lines(text: str, pos: int) -> Iterator[tuple[int, str, int]]:
    """Yield ``(start, content, next_start)`` for each line from ``pos``."""
    while pos < len(text):
        match = _LINE_PATTERN.match(text, pos)
        content = match.group(1)
        yield pos, content, match.end()
        pos = match.end()


def split_frontmatter(document: str) -> RawFrontmatter | None:
    """Split a document into its raw frontmatter block and body.

    Args:
        document: Full document text.

    Returns:
        The split block, or None if the document has no opening delimiter.

    Raises:
        UnterminatedBlockError: An opening delimiter is never closed.
    """
    pos = 1 if document.startswith(_BOM) else 0
    skipped = len(document) - len(document[pos:].lstrip())
    start_line = document.count("\n", 0, skipped) + 1
    # Rewind to the start of the first non-blank line
    line_start = max(
        document.rfind("\n", 0, skipped) + 1, document.rfind("\r", 0, skipped) + 1, pos
    )

    if skipped < len(document) and document[skipped] == "{":
        end, _ = scan_nesting(document, skipped)
        if end is None:
            raise UnterminatedBlockError("{", start_line)
        tail = _JSON_TAIL_PATTERN.match(document, end + 1)
        body_start = tail.end() if tail else end + 1
        return RawFrontmatter(document[skipped:end + 1], document[body_start:], "{", start_line)

    lines = _iter_lines(document, line_start)
    first = next(lines, None)
    if first is None or first[1] not in _FENCES:
        return None
    delimiter = first[1]
    raw_start = first[2]

    for start, content, next_start in lines:
        if content == delimiter:
            return RawFrontmatter(document[raw_start:start], document[next_start:], delimiter, start_line)

    raise UnterminatedBlockError(delimiter, start_line)


def detect_format(raw: str, hint: Format | None = None, delimiter: str | None = None) -> Format:
    """Decide which format a raw block is written in.

    Priority: explicit hint, then the delimiter the block was fenced with,
    then a leading ``{`` for JSON.

    Raises:
        UnknownFormatError: Naming the first non-blank line when nothing matches.
    """
    if hint is not None:
        return hint
    if delimiter in _FENCES:
        return _FENCES[delimiter]
    if delimiter == "{" or raw.lstrip().startswith("{"):
        return Format.JSON

    for number, line in enumerate(raw.splitlines(), start=1):
        if line.strip():
            raise UnknownFormatError(number, line.strip())
    raise UnknownFormatError(1)


def extract(
    document: str,
    format: Format | str | None = None,
    options: ParseOptions | None = None,
    required: bool = False,
) -> tuple[Frontmatter, str]:
    """Extract and parse the frontmatter of a document.

    Args:
        document: Full document text.
        format: Format to parse the block as, overriding detection.
        options: Parse limits (defaults to ``ParseOptions()``).
        required: Raise instead of returning empty metadata when the
            document has no frontmatter.

    Returns:
        Tuple of (parsed frontmatter, remaining body). A document without
        frontmatter yields an empty container and the document unchanged.

    Raises:
        NoFrontmatterError: No block found and ``required`` is set.
        UnterminatedBlockError: An opening delimiter is never closed.
        ParseError: The block could not be parsed (see ``parse_with_options``).

    Example:
        >>> fm, body = extract("---\\ntitle: My Post\\n---\\nContent here")
        >>> fm.get("title")
        String(value='My Post')
        >>> body
        'Content here'
    """
    split = split_frontmatter(document)
    if split is None:
        if required:
            raise NoFrontmatterError()
        logger.debug("No front matter found; returning document unchanged")
        return Frontmatter(), document

    hint = Format.from_name(format) if isinstance(format, str) else format
    fmt = detect_format(split.raw, hint, split.delimiter)
    logger.debug(f"Found {fmt} front matter at line {split.start_line} ({len(split.raw)} chars)")
    fm = parse_with_options(split.raw, fmt, options or ParseOptions())
    return fm, split.body
