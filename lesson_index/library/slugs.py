"""
Mapping between the content tree on disk and route slugs.

Directory and file names are used verbatim: the filesystem is the schema,
so every conversion between the two lives here.
"""

from pathlib import Path
from typing import Iterable


def topic_slug_for(file_path: Path) -> str:
    """Topic slug of a lesson file: its filename minus the extension."""
    return file_path.stem


def category_slug_for(file_path: Path, topics_root: Path) -> str:
    """
    Category slug of a lesson file: the name of the directory directly
    under the topics root that contains it.

    Raises:
        ValueError: If the file is not exactly one level below a category
            directory of ``topics_root``.
    """
    relative = file_path.relative_to(topics_root)
    if len(relative.parts) != 2:
        raise ValueError(
            f"{file_path} is not laid out as <category>/<topic> under {topics_root}"
        )
    return relative.parts[0]


def humanize_slug(slug: str) -> str:
    """Human-readable title for a slug: hyphens become spaces, words capitalised."""
    return " ".join(
        word[:1].upper() + word[1:] for word in slug.split("-") if word
    )


def is_reserved(slug: str, reserved: Iterable[str]) -> bool:
    return slug.lower() in {r.lower() for r in reserved}


def is_hidden(name: str) -> bool:
    return name.startswith(".")
