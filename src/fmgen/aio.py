"""Async entry points.

The core is synchronous and CPU-bound; these wrappers run it in a worker
thread so event-loop code can extract large documents without blocking.
"""

import asyncio

from .core.config import ParseOptions
from .core.frontmatter import Frontmatter
from .core.types import Format
from .extraction.extractor import extract
from .parser import parse_with_options, to_format


async def extract_async(
    document: str,
    format: Format | str | None = None,
    options: ParseOptions | None = None,
    required: bool = False,
) -> tuple[Frontmatter, str]:
    """Async counterpart of ``fmgen.extract``."""
    return await asyncio.to_thread(extract, document, format, options, required)


async def parse_async(
    raw: str,
    format: Format | str,
    options: ParseOptions | None = None,
) -> Frontmatter:
    """Async counterpart of ``fmgen.parse_with_options``."""
    return await asyncio.to_thread(parse_with_options, raw, format, options or ParseOptions())


async def to_format_async(fm: Frontmatter, format: Format | str) -> str:
    """Async counterpart of ``fmgen.to_format``."""
    return await asyncio.to_thread(to_format, fm, format)
