"""Core data models for the lesson content index."""

from .content import (
    Category,
    CategoryMetadata,
    ContentFile,
    Difficulty,
    Frontmatter,
    LoadedTopic,
    ScanResult,
    SkippedFile,
    Topic,
)

__all__ = [
    "Category",
    "CategoryMetadata",
    "ContentFile",
    "Difficulty",
    "Frontmatter",
    "LoadedTopic",
    "ScanResult",
    "SkippedFile",
    "Topic",
]
