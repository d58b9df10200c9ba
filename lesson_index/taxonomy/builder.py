"""Assemble scanned lessons into the category→topic taxonomy."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from ..config import DEFAULT_RESERVED_ROUTES
from ..exceptions import DuplicateCategoryError, DuplicateTopicError, ReservedRouteError
from ..index.content_index import ContentIndex
from ..library.slugs import humanize_slug, is_reserved
from ..models.content import (
    Category,
    CategoryMetadata,
    ContentFile,
    Frontmatter,
    SkippedFile,
    Topic,
)

logger = logging.getLogger(__name__)


def _ordering_key(order: int | None, position: int) -> tuple[int, int, int]:
    """Explicitly ordered items first (by order), then the rest in scan order."""
    if order is None:
        return (1, 0, position)
    return (0, order, position)


def default_description(title: str) -> str:
    return f"Comprehensive coverage of {title} topics."


class TaxonomyBuilder:
    """Builds a ContentIndex from parsed lesson records.

    Every consistency failure raised here is build-fatal: the taxonomy is
    never served half-valid.
    """

    def __init__(
        self,
        reserved_routes: Iterable[str] = DEFAULT_RESERVED_ROUTES,
        category_metadata: Mapping[str, CategoryMetadata] | None = None,
    ):
        """Initialize the builder.

        Args:
            reserved_routes: Extra route segments that may never be category
                slugs; DEFAULT_RESERVED_ROUTES are always included.
            category_metadata: Explicit titles/descriptions/order by slug.
        """
        self.reserved_routes = frozenset(DEFAULT_RESERVED_ROUTES).union(reserved_routes)
        self.category_metadata = dict(category_metadata or {})

    def build(
        self,
        records: Iterable[tuple[ContentFile, Frontmatter]],
        category_slugs: Iterable[str] = (),
        skipped: Iterable[SkippedFile] = (),
    ) -> ContentIndex:
        """Group records by category and build the index.

        Args:
            records: Parsed lessons in scan order.
            category_slugs: Category directories seen by the scanner,
                including ones with no valid lessons.
            skipped: Files already excluded upstream, kept for reporting.

        Returns:
            The built, read-only ContentIndex.

        Raises:
            ReservedRouteError: If a category slug is a reserved route.
            DuplicateCategoryError: If two category slugs collide.
            DuplicateTopicError: If two files share a topic slug in one category.
        """
        groups: dict[str, list[tuple[ContentFile, Frontmatter]]] = {
            slug: [] for slug in category_slugs
        }
        for content_file, frontmatter in records:
            groups.setdefault(content_file.category_slug, []).append(
                (content_file, frontmatter)
            )

        self._validate_category_slugs(groups)

        bodies: dict[tuple[str, str], str] = {}
        categories: list[tuple[tuple[int, int, int], Category]] = []
        for position, (slug, members) in enumerate(groups.items()):
            topics = self._build_topics(slug, members)
            for content_file, _ in members:
                bodies[(slug, content_file.topic_slug)] = content_file.body

            metadata = self.category_metadata.get(slug, CategoryMetadata())
            title = metadata.title or humanize_slug(slug)
            category = Category(
                slug=slug,
                title=title,
                description=metadata.description or default_description(title),
                topics=topics,
            )
            categories.append((_ordering_key(metadata.order, position), category))

        unused = set(self.category_metadata) - set(groups)
        for slug in sorted(unused):
            logger.debug("Category metadata for '%s' has no matching directory", slug)

        categories.sort(key=lambda item: item[0])
        index = ContentIndex(
            (category for _, category in categories),
            bodies=bodies,
            skipped=skipped,
        )
        logger.info(
            "Built content index: %d categories, %d topics",
            len(index), index.topic_count,
        )
        return index

    def _validate_category_slugs(
        self, groups: Mapping[str, list[tuple[ContentFile, Frontmatter]]]
    ) -> None:
        folded: dict[str, str] = {}
        for slug, members in groups.items():
            if is_reserved(slug, self.reserved_routes):
                source = members[0][0].absolute_path.parent if members else None
                raise ReservedRouteError(slug, source)
            key = slug.casefold()
            if key in folded:
                raise DuplicateCategoryError(folded[key], slug)
            folded[key] = slug

    def _build_topics(
        self, category_slug: str, members: list[tuple[ContentFile, Frontmatter]]
    ) -> tuple[Topic, ...]:
        seen: dict[str, Path] = {}
        ranked: list[tuple[tuple[int, int, int], Topic]] = []

        for position, (content_file, frontmatter) in enumerate(members):
            topic_slug = content_file.topic_slug
            key = topic_slug.casefold()
            if key in seen:
                raise DuplicateTopicError(
                    category_slug, topic_slug, seen[key], content_file.absolute_path
                )
            seen[key] = content_file.absolute_path

            if frontmatter.category and frontmatter.category != category_slug:
                logger.warning(
                    "%s declares category '%s' but lives in '%s'; using the directory",
                    content_file.absolute_path, frontmatter.category, category_slug,
                )

            topic = Topic(
                slug=topic_slug,
                category=category_slug,
                title=frontmatter.title,
                difficulty=frontmatter.difficulty,
                estimated_read_time=frontmatter.estimated_read_time,
                tags=frontmatter.tags,
                last_updated=frontmatter.last_updated,
                order=frontmatter.order,
                description=frontmatter.description,
                source_path=content_file.absolute_path,
            )
            ranked.append((_ordering_key(frontmatter.order, position), topic))

        ranked.sort(key=lambda item: item[0])
        return tuple(topic for _, topic in ranked)
