"""Command implementations for fmgen CLI."""

from .convert import add_convert_arguments, handle_convert, render_document
from .extract import add_extract_arguments, handle_extract
from .validate import add_validate_arguments, handle_validate

__all__ = [
    "add_convert_arguments",
    "add_extract_arguments",
    "add_validate_arguments",
    "handle_convert",
    "handle_extract",
    "handle_validate",
    "render_document",
]
