"""Extract command for fmgen CLI."""

from loguru import logger

from ...core.config import Config
from ...core.types import Format
from ...extraction import extract
from ...parser import to_format
from ._io import read_document, write_output


def add_extract_arguments(parser) -> None:
    """Add arguments for the extract command."""
    parser.add_argument("input", help="Document to read ('-' for stdin)")
    parser.add_argument(
        "-f",
        "--format",
        help="Output format: yaml, toml or json (default: FMGEN_FORMAT or yaml)",
    )
    parser.add_argument("-o", "--output", help="Write to this file instead of stdout")


def handle_extract(args, config: Config) -> None:
    """Handle extract command.

    Prints the document's frontmatter in the requested format.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    output_format = Format.from_name(args.format) if args.format else config.default_format
    document = read_document(args.input)

    fm, _ = extract(document, options=config.limits.to_parse_options(), required=True)
    logger.info(f"Extracted {len(fm)} fields from {args.input}")

    text = to_format(fm, output_format)
    write_output(text if text.endswith("\n") else text + "\n", args.output)
