"""Input/output helpers shared by the CLI commands."""

import sys
from pathlib import Path


def read_document(source: str) -> str:
    """Read a document from a path, or from stdin when ``source`` is ``-``."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def write_output(text: str, destination: str | None) -> None:
    """Write ``text`` to a file, or to stdout when no destination is given."""
    if destination:
        Path(destination).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
