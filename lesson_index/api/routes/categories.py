"""Category and topic browsing routes."""

from fastapi import APIRouter

from ...library.slugs import is_reserved
from ..dependencies import ConfigDep, IndexDep
from ..errors import APIError
from ..schemas import (
    CategoryResponse,
    CategorySummaryResponse,
    TopicContentResponse,
    TopicResponse,
)


router = APIRouter()


@router.get("", response_model=list[CategorySummaryResponse])
async def list_categories(index: IndexDep):
    """Get all categories in display order."""
    return [CategorySummaryResponse.from_category(c) for c in index.get_categories()]


@router.get("/{category}", response_model=CategoryResponse)
async def get_category(category: str, index: IndexDep, config: ConfigDep):
    """Get one category with its topics."""
    found = None
    if not is_reserved(category, config.reserved_routes):
        found = index.get_category_by_slug(category)

    if found is None:
        raise APIError.not_found("Category", category)

    return CategoryResponse.from_category(found)


@router.get("/{category}/topics", response_model=list[TopicResponse])
async def list_topics(category: str, index: IndexDep, config: ConfigDep):
    """Get the ordered topics of a category."""
    if is_reserved(category, config.reserved_routes) or category not in index:
        raise APIError.not_found("Category", category)

    return [TopicResponse.from_topic(t) for t in index.get_topics_by_category(category)]


@router.get("/{category}/topics/{topic}", response_model=TopicContentResponse)
async def get_topic(category: str, topic: str, index: IndexDep, config: ConfigDep):
    """Get a topic's metadata and Markdown body."""
    loaded = None
    if not is_reserved(category, config.reserved_routes):
        loaded = index.load_topic_content(category, topic)

    if loaded is None:
        raise APIError.not_found("Topic", f"{category}/{topic}")

    return TopicContentResponse.from_loaded(loaded)
