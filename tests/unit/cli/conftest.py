"""Fixtures for CLI tests."""

from pathlib import Path

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch):
    """Keep CLI logging setup from leaking between tests."""
    for name in ("MAX_DEPTH", "MAX_KEYS", "MAX_SIZE", "FORMAT", "LOG_LEVEL"):
        monkeypatch.delenv(f"FMGEN_{name}", raising=False)
    yield
    logger.remove()
    logger.disable("fmgen")


@pytest.fixture
def post(tmp_path: Path) -> Path:
    """Write a markdown post with YAML frontmatter."""
    path = tmp_path / "post.md"
    path.write_text(
        "---\ntitle: My Post\ntags: [a, b]\nauthor:\n  name: Ada\n---\nBody text\n",
        encoding="utf-8",
    )
    return path
