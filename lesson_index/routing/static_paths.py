"""Route params for build-time page generation."""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from ..config import DEFAULT_RESERVED_ROUTES
from ..exceptions import ContentRootError
from ..index.content_index import ContentIndex
from ..library.slugs import is_reserved

logger = logging.getLogger(__name__)

IndexProvider = Callable[[], ContentIndex]


class StaticPathPlanner:
    """
    Enumerates every category and (category, topic) route to pre-render.

    A content tree that cannot be read at all yields no paths and a warning,
    so one broken checkout does not abort the whole site build. Taxonomy
    errors (duplicate or reserved slugs) still propagate.
    """

    def __init__(
        self,
        index_provider: IndexProvider,
        reserved_routes: Iterable[str] = DEFAULT_RESERVED_ROUTES,
    ):
        self.index_provider = index_provider
        self.reserved_routes = frozenset(DEFAULT_RESERVED_ROUTES).union(reserved_routes)

    def _load_index(self) -> Optional[ContentIndex]:
        try:
            return self.index_provider()
        except (ContentRootError, OSError) as e:
            logger.warning("Content index unavailable, generating no static paths: %s", e)
            return None

    def category_params(self) -> List[Dict[str, str]]:
        """``[{"category": slug}, ...]`` for every non-reserved category."""
        index = self._load_index()
        if index is None:
            return []
        return [
            {"category": category.slug}
            for category in index.get_categories()
            if not is_reserved(category.slug, self.reserved_routes)
        ]

    def topic_params(self) -> List[Dict[str, str]]:
        """``[{"category": slug, "topic": slug}, ...]`` for every topic page."""
        index = self._load_index()
        if index is None:
            return []
        return [
            {"category": category.slug, "topic": topic.slug}
            for category in index.get_categories()
            if not is_reserved(category.slug, self.reserved_routes)
            for topic in category.topics
        ]
