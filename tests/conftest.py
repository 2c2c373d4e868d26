"""Pytest configuration and fixtures."""

import pytest

from fmgen import Frontmatter, Number, Object, String, Tagged


@pytest.fixture
def yaml_document() -> str:
    """Provide a small markdown document with YAML frontmatter."""
    return "---\ntitle: My Post\ndate: 2023-05-20\n---\nContent here"


@pytest.fixture
def sample_frontmatter() -> Frontmatter:
    """Provide a container exercising every non-null value kind."""
    author = Frontmatter()
    author.insert("name", "Ada")
    author.insert("email", "ada@example.com")

    fm = Frontmatter()
    fm.insert("title", "My Post")
    fm.insert("date", "2023-05-20")
    fm.insert("draft", False)
    fm.insert("version", "1.0")
    fm.insert("rating", 4.5)
    fm.insert("views", 1200)
    fm.insert("tags", ["python", "yaml"])
    fm.insert("author", Object(author))
    fm.insert("color", Tagged("!color", String("red")))
    return fm


def nested(depth: int) -> Frontmatter:
    """Build ``{"n": {"n": ... 1}}`` whose deepest object sits at ``depth``."""
    fm = Frontmatter()
    value = Number(1)
    for _ in range(depth):
        inner = Frontmatter()
        inner.insert("n", value)
        value = Object(inner)
    fm.insert("n", value)
    return fm


@pytest.fixture
def nested_frontmatter():
    """Provide the ``nested`` builder."""
    return nested
