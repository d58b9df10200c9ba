# lesson_index/models/content.py

from datetime import date
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    """Difficulty level declared in a lesson's frontmatter."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ContentFile(BaseModel):
    """
    A Markdown file found under the topics root, before its
    frontmatter has been interpreted.
    """

    model_config = ConfigDict(frozen=True)

    absolute_path: Path
    category_slug: str                # Containing directory name
    topic_slug: str                   # Filename minus extension
    raw_frontmatter: Optional[str] = None
    body: str = ""


class SkippedFile(BaseModel):
    """A file left out of the index, with the reason it was dropped."""

    model_config = ConfigDict(frozen=True)

    path: Path
    reason: str


class ScanResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    files: tuple[ContentFile, ...] = ()
    categories: tuple[str, ...] = ()     # Every category directory seen, in scan order
    skipped: tuple[SkippedFile, ...] = ()


class Frontmatter(BaseModel):
    """
    Validated frontmatter of a single lesson.

    Only ``title`` is required; every other field carries a safe default.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    category: Optional[str] = None
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    estimated_read_time: int = Field(default=0, ge=0)   # Minutes
    tags: tuple[str, ...] = ()
    last_updated: Optional[date] = None
    order: Optional[int] = None
    description: Optional[str] = None


class Topic(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    category: str
    title: str
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    estimated_read_time: int = 0
    tags: tuple[str, ...] = ()
    last_updated: Optional[date] = None
    order: Optional[int] = None
    description: Optional[str] = None
    source_path: Path


class CategoryMetadata(BaseModel):
    """Explicit category metadata declared in the topics ``_index.yaml``."""

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    description: Optional[str] = None
    order: Optional[int] = None


class Category(BaseModel):
    """
    A category (directory) of topics.
    """

    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    description: str = ""
    topics: tuple[Topic, ...] = ()


class LoadedTopic(BaseModel):
    """A topic together with its Markdown body."""

    model_config = ConfigDict(frozen=True)

    topic: Topic
    body: str
