"""Reading the lesson tree from disk."""

from .categories import CategoryCatalog
from .frontmatter import parse_document, parse_frontmatter, split_frontmatter
from .scanner import ContentScanner, find_repeated_sections
from .slugs import category_slug_for, humanize_slug, is_reserved, topic_slug_for

__all__ = [
    "CategoryCatalog",
    "ContentScanner",
    "find_repeated_sections",
    # Frontmatter
    "parse_document",
    "parse_frontmatter",
    "split_frontmatter",
    # Slugs
    "category_slug_for",
    "humanize_slug",
    "is_reserved",
    "topic_slug_for",
]
