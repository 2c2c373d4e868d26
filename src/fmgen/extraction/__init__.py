"""Frontmatter extraction module.

Provides:
- extract: Split a document and parse its frontmatter
- split_frontmatter: Split a document without parsing
- detect_format: Choose the format of a raw block
"""

from .extractor import RawFrontmatter, detect_format, extract, split_frontmatter

__all__ = [
    "RawFrontmatter",
    "detect_format",
    "extract",
    "split_frontmatter",
]
