"""Shared pytest fixtures and test helpers."""

from pathlib import Path
from typing import Any, Optional

import pytest
import yaml

from lesson_index.config import Config, ContentConfig
from lesson_index.loader import reset_content_index


def lesson_text(body: str = "", **fields: Any) -> str:
    """Render a lesson file with a YAML frontmatter block built from ``fields``."""
    frontmatter = yaml.safe_dump(fields, sort_keys=False, allow_unicode=True)
    return f"---\n{frontmatter}---\n{body}"


@pytest.fixture(autouse=True)
def _fresh_content_index():
    """Every test starts and ends without a cached process-wide index."""
    reset_content_index()
    yield
    reset_content_index()


@pytest.fixture
def content_root(tmp_path) -> Path:
    root = tmp_path / "content"
    (root / "topics").mkdir(parents=True)
    return root


@pytest.fixture
def write_lesson(content_root):
    """Fixture providing a factory that writes files under ``topics/``.

    Usage:
        def test_example(write_lesson):
            write_lesson("javascript", "closures.md", title="Closures")
            write_lesson("javascript", "broken.md", raw="no frontmatter here")
    """
    def _write(
        category_dir: str,
        filename: str,
        body: str = "# Heading\n\nSome text.\n",
        raw: Optional[str] = None,
        **fields: Any,
    ) -> Path:
        path = content_root / "topics" / category_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(raw if raw is not None else lesson_text(body, **fields), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config(content_root) -> Config:
    return Config(content=ContentConfig(path=str(content_root)))


@pytest.fixture
def sample_content(write_lesson):
    """A small but realistic lesson tree."""
    write_lesson(
        "javascript", "closures.md",
        title="Closures", difficulty="intermediate", estimatedReadTime=12,
        tags=["functions", "scope"], lastUpdated="2024-03-01",
    )
    write_lesson(
        "javascript", "event-loop.md",
        title="The Event Loop", difficulty="advanced", estimatedReadTime=20,
        tags=["async", "runtime"],
    )
    write_lesson(
        "nodejs-core", "streams.md",
        title="Streams", category="nodejs-core", difficulty="beginner",
        tags=["io", "Async"],
    )
    write_lesson("nodejs-core", "buffers.md", title="Buffers")
    write_lesson("databases", "README.txt", raw="not a lesson")
    write_lesson("databases", "no-title.md", description="Title is missing")
