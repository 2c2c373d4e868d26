"""Convert command for fmgen CLI."""

from loguru import logger

from ...core.config import Config
from ...core.frontmatter import Frontmatter
from ...core.types import Format
from ...extraction import extract
from ...parser import to_format
from ._io import read_document, write_output


def add_convert_arguments(parser) -> None:
    """Add arguments for the convert command."""
    parser.add_argument("input", help="Document to read ('-' for stdin)")
    parser.add_argument("-t", "--to", required=True, help="Target format: yaml, toml or json")
    parser.add_argument("-o", "--output", help="Write to this file instead of stdout")


def render_document(fm: Frontmatter, body: str, target: Format) -> str:
    """Rebuild a document with its frontmatter fenced for ``target``.

    JSON is written as a bare object on the first line; YAML and TOML are
    fenced with ``---`` and ``+++``.
    """
    text = to_format(fm, target)
    if not text.endswith("\n"):
        text += "\n"
    if target is Format.JSON:
        return text + body
    fence = target.delimiter
    return f"{fence}\n{text}{fence}\n{body}"


def handle_convert(args, config: Config) -> None:
    """Handle convert command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    target = Format.from_name(args.to)
    fm, body = extract(
        read_document(args.input), options=config.limits.to_parse_options(), required=True
    )
    logger.info(f"Converting {len(fm)} fields from {args.input} to {target}")
    write_output(render_document(fm, body, target), args.output)
