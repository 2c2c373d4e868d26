"""Validate command for fmgen CLI."""

from dataclasses import replace

from ...core.config import Config
from ...extraction import extract
from ...parser import validate
from ._io import read_document


def add_validate_arguments(parser) -> None:
    """Add arguments for the validate command."""
    parser.add_argument("input", help="Document to read ('-' for stdin)")
    parser.add_argument(
        "-r",
        "--required",
        default="",
        help="Comma-separated fields that must be present (dotted paths allowed)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        help="Maximum nesting depth (default: FMGEN_MAX_DEPTH or 10)",
    )


def handle_validate(args, config: Config) -> None:
    """Handle validate command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    options = config.limits.to_parse_options()
    if args.max_depth is not None:
        options = replace(options, max_depth=args.max_depth)
    required = [field.strip() for field in args.required.split(",") if field.strip()]

    fm, _ = extract(read_document(args.input), options=options, required=True)
    validate(fm, options, required=required)

    print(f"{args.input}: valid ({len(fm)} fields)")
