"""API response schemas."""

from datetime import date
from typing import Optional, List
from pydantic import BaseModel, Field

from ..models.content import Category, LoadedTopic, Topic


# =============================================================================
# Generic Responses
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None


# =============================================================================
# Taxonomy Schemas
# =============================================================================


class TopicResponse(BaseModel):
    """Topic metadata as served to page components."""
    slug: str
    category: str
    title: str
    difficulty: str
    estimated_read_time: int
    tags: List[str] = Field(default_factory=list)
    last_updated: Optional[date] = None
    description: Optional[str] = None

    @classmethod
    def from_topic(cls, topic: Topic) -> "TopicResponse":
        return cls(
            slug=topic.slug,
            category=topic.category,
            title=topic.title,
            difficulty=topic.difficulty.value,
            estimated_read_time=topic.estimated_read_time,
            tags=list(topic.tags),
            last_updated=topic.last_updated,
            description=topic.description,
        )


class CategorySummaryResponse(BaseModel):
    """Category without its topic list."""
    slug: str
    title: str
    description: str
    topic_count: int

    @classmethod
    def from_category(cls, category: Category) -> "CategorySummaryResponse":
        return cls(
            slug=category.slug,
            title=category.title,
            description=category.description,
            topic_count=len(category.topics),
        )


class CategoryResponse(CategorySummaryResponse):
    """Category with its ordered topics."""
    topics: List[TopicResponse] = Field(default_factory=list)

    @classmethod
    def from_category(cls, category: Category) -> "CategoryResponse":
        return cls(
            slug=category.slug,
            title=category.title,
            description=category.description,
            topic_count=len(category.topics),
            topics=[TopicResponse.from_topic(t) for t in category.topics],
        )


class TopicContentResponse(BaseModel):
    """Topic metadata plus the raw Markdown body."""
    topic: TopicResponse
    content: str

    @classmethod
    def from_loaded(cls, loaded: LoadedTopic) -> "TopicContentResponse":
        return cls(topic=TopicResponse.from_topic(loaded.topic), content=loaded.body)


# =============================================================================
# Static Generation Schemas
# =============================================================================


class CategoryParam(BaseModel):
    category: str


class TopicParam(BaseModel):
    category: str
    topic: str
