"""Immutable in-memory index over the lesson taxonomy."""

from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple, Union

from ..models.content import Category, Difficulty, LoadedTopic, SkippedFile, Topic


class ContentIndex:
    """
    Read-only lookups over categories and topics.

    Built once by the taxonomy builder and never mutated afterwards, so any
    number of readers may share one instance without locking.
    """

    def __init__(
        self,
        categories: Iterable[Category],
        bodies: Optional[Mapping[Tuple[str, str], str]] = None,
        skipped: Iterable[SkippedFile] = (),
    ):
        ordered = tuple(categories)
        self._categories = MappingProxyType({c.slug: c for c in ordered})
        self._topics = MappingProxyType({
            c.slug: MappingProxyType({t.slug: t for t in c.topics}) for c in ordered
        })
        self._bodies = MappingProxyType(dict(bodies or {}))
        self._skipped = tuple(skipped)

    @property
    def categories(self) -> Mapping[str, Category]:
        return self._categories

    @property
    def skipped(self) -> Tuple[SkippedFile, ...]:
        """Files left out of the index because they could not be read or parsed."""
        return self._skipped

    @property
    def topic_count(self) -> int:
        return sum(len(c.topics) for c in self._categories.values())

    def get_categories(self) -> Tuple[Category, ...]:
        return tuple(self._categories.values())

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        return self._categories.get(slug)

    def get_topics_by_category(self, slug: str) -> Tuple[Topic, ...]:
        category = self._categories.get(slug)
        if category is None:
            return ()
        return category.topics

    def get_topic_by_slug(self, category: str, topic: str) -> Optional[Topic]:
        topics = self._topics.get(category)
        if topics is None:
            return None
        return topics.get(topic)

    def get_all_topics(self) -> Tuple[Topic, ...]:
        return tuple(t for c in self._categories.values() for t in c.topics)

    def get_topics_by_difficulty(self, difficulty: Union[Difficulty, str]) -> Tuple[Topic, ...]:
        """Topics at one difficulty level; an unknown level matches nothing."""
        try:
            level = Difficulty(difficulty)
        except ValueError:
            return ()
        return tuple(t for t in self.get_all_topics() if t.difficulty is level)

    def get_topics_by_tag(self, tag: str) -> Tuple[Topic, ...]:
        """Topics carrying ``tag``, compared case-insensitively."""
        wanted = tag.strip().lower()
        return tuple(
            t for t in self.get_all_topics()
            if any(existing.lower() == wanted for existing in t.tags)
        )

    def load_topic_content(self, category: str, topic: str) -> Optional[LoadedTopic]:
        """Topic metadata plus its Markdown body, or None if unknown."""
        found = self.get_topic_by_slug(category, topic)
        if found is None:
            return None
        return LoadedTopic(topic=found, body=self._bodies.get((category, topic), ""))

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, slug: object) -> bool:
        return slug in self._categories

    def __repr__(self) -> str:
        return f"ContentIndex(categories={len(self)}, topics={self.topic_count})"
