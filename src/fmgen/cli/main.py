"""CLI entry point for fmgen."""

import argparse
import sys
from typing import NoReturn

from loguru import logger

from .. import __version__
from ..core.config import Config
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="fmgen",
        description="Extract, validate and convert document frontmatter (YAML, TOML, JSON)",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        help="Log level for diagnostics on stderr (default: FMGEN_LOG_LEVEL or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    extract_parser = subparsers.add_parser("extract", help="Print a document's frontmatter")
    commands.add_extract_arguments(extract_parser)

    validate_parser = subparsers.add_parser("validate", help="Check a document's frontmatter")
    commands.add_validate_arguments(validate_parser)

    convert_parser = subparsers.add_parser(
        "convert", help="Rewrite a document with its frontmatter in another format"
    )
    commands.add_convert_arguments(convert_parser)

    return parser


def configure_logging(level: str) -> None:
    """Send fmgen's log output to stderr at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    logger.enable("fmgen")


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
        configure_logging(args.log_level or config.log_level)

        if args.command == "extract":
            commands.handle_extract(args, config)
        elif args.command == "validate":
            commands.handle_validate(args, config)
        elif args.command == "convert":
            commands.handle_convert(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
