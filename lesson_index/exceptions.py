"""Exceptions raised while building the content index."""

from pathlib import Path
from typing import Optional


class ContentIndexError(Exception):
    """Base exception for content index errors"""

    pass


class FrontmatterError(ContentIndexError):
    """Raised when a single file's frontmatter cannot be used.

    Recoverable: the file is skipped and the build continues.
    """

    def __init__(self, reason: str, source: Optional[Path] = None):
        self.reason = reason
        self.source = source
        if source is not None:
            super().__init__(f"{source}: {reason}")
        else:
            super().__init__(reason)


class ContentRootError(ContentIndexError):
    """Raised when the content tree as a whole cannot be read"""

    pass


class TaxonomyError(ContentIndexError):
    """Base exception for cross-file consistency failures (build-fatal)"""

    pass


class ReservedRouteError(TaxonomyError):
    """Raised when a category slug collides with a reserved route"""

    def __init__(self, slug: str, source: Optional[Path] = None):
        self.slug = slug
        self.source = source
        message = f"Category slug '{slug}' collides with a reserved route"
        if source is not None:
            message = f"{message} ({source})"
        super().__init__(message)


class DuplicateTopicError(TaxonomyError):
    """Raised when two files map to the same topic slug in one category"""

    def __init__(self, category: str, topic: str, first: Path, second: Path):
        self.category = category
        self.topic = topic
        self.first = first
        self.second = second
        super().__init__(
            f"Duplicate topic '{category}/{topic}': {first} and {second}"
        )


class DuplicateCategoryError(TaxonomyError):
    """Raised when two category directories resolve to the same route"""

    def __init__(self, first: str, second: str):
        self.first = first
        self.second = second
        super().__init__(
            f"Category slugs '{first}' and '{second}' collide "
            "(slugs are compared case-insensitively)"
        )
