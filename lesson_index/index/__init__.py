"""Read-only content index."""

from .content_index import ContentIndex

__all__ = ["ContentIndex"]
