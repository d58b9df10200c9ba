"""Tests for the index pipeline and its query API."""

from datetime import date

import pytest

from lesson_index.config import Config, ContentConfig, RoutesConfig
from lesson_index.exceptions import ContentRootError, ReservedRouteError
from lesson_index.loader import (
    build_content_index,
    get_content_index,
    load_content_index,
    reset_content_index,
)
from lesson_index.models.content import Difficulty


@pytest.mark.asyncio
async def test_closures_round_trip(config, write_lesson):
    write_lesson("javascript", "closures.md", title="Closures")

    index = await load_content_index(config)

    category = index.get_category_by_slug("javascript")
    assert category is not None
    matches = [t for t in category.topics if t.slug == "closures"]
    assert len(matches) == 1
    assert matches[0].title == "Closures"


@pytest.mark.asyncio
async def test_every_topic_belongs_to_exactly_one_category(config, sample_content):
    index = await load_content_index(config)

    for topic in index.get_all_topics():
        owners = [c.slug for c in index.get_categories() if topic in c.topics]
        assert owners == [topic.category]
        assert topic.slug == topic.source_path.stem


@pytest.mark.asyncio
async def test_missing_fields_do_not_abort_siblings(config, write_lesson):
    write_lesson("nodejs-core", "buffers.md", title="Buffers")
    write_lesson("nodejs-core", "broken.md", raw="---\ntags: [x]\n---\nNo title.\n")
    write_lesson("nodejs-core", "streams.md", title="Streams", estimatedReadTime=10)

    index = await load_content_index(config)

    buffers = index.get_topic_by_slug("nodejs-core", "buffers")
    assert buffers.tags == ()
    assert buffers.estimated_read_time == 0
    assert [t.slug for t in index.get_topics_by_category("nodejs-core")] == ["buffers", "streams"]
    assert [s.path.name for s in index.skipped] == ["broken.md"]
    assert "title" in index.skipped[0].reason


@pytest.mark.asyncio
async def test_pathological_frontmatter_does_not_abort_siblings(config, write_lesson):
    write_lesson("javascript", "closures.md", title="Closures")
    write_lesson(
        "javascript", "huge.md",
        raw="---\ntitle: Huge\nestimatedReadTime: '" + "9" * 400 + "'\n---\nBody\n",
    )
    write_lesson(
        "javascript", "nested.md",
        raw="---\ntitle: Nested\nx: " + "[" * 5000 + "]" * 5000 + "\n---\nBody\n",
    )

    index = await load_content_index(config)

    assert [t.slug for t in index.get_topics_by_category("javascript")] == ["closures", "huge"]
    assert index.get_topic_by_slug("javascript", "huge").estimated_read_time == 0
    assert [s.path.name for s in index.skipped] == ["nested.md"]


@pytest.mark.asyncio
async def test_search_directory_is_build_fatal(config, write_lesson):
    write_lesson("javascript", "closures.md", title="Closures")
    write_lesson("search", "ranking.md", title="Ranking")

    with pytest.raises(ReservedRouteError):
        await load_content_index(config)


@pytest.mark.asyncio
async def test_no_category_is_reserved(config, sample_content):
    index = await load_content_index(config)

    slugs = {c.slug for c in index.get_categories()}
    assert not slugs & config.reserved_routes


@pytest.mark.asyncio
async def test_get_categories_is_repeatable(config, sample_content):
    index = await load_content_index(config)

    first = index.get_categories()
    second = index.get_categories()
    assert first == second
    assert [c.slug for c in first] == ["databases", "javascript", "nodejs-core"]


@pytest.mark.asyncio
async def test_topic_slugs_unique_per_category(config, sample_content):
    index = await load_content_index(config)

    for category in index.get_categories():
        slugs = [t.slug for t in index.get_topics_by_category(category.slug)]
        assert len(slugs) == len(set(slugs))


@pytest.mark.asyncio
async def test_lookups_for_unknown_slugs(config, sample_content):
    index = await load_content_index(config)

    assert index.get_category_by_slug("rust") is None
    assert index.get_topics_by_category("rust") == ()
    assert index.get_topic_by_slug("javascript", "missing") is None
    assert index.get_topic_by_slug("rust", "closures") is None
    assert index.load_topic_content("javascript", "missing") is None
    assert "rust" not in index


@pytest.mark.asyncio
async def test_empty_category_directory(config, sample_content):
    index = await load_content_index(config)

    # databases only holds an untitled lesson and a text file
    assert index.get_topics_by_category("databases") == ()
    assert index.get_category_by_slug("databases").title == "Databases"


@pytest.mark.asyncio
async def test_filters_by_difficulty_and_tag(config, sample_content):
    index = await load_content_index(config)

    assert [t.slug for t in index.get_topics_by_difficulty(Difficulty.ADVANCED)] == ["event-loop"]
    assert [t.slug for t in index.get_topics_by_difficulty("beginner")] == ["streams"]
    assert index.get_topics_by_difficulty("expert") == ()
    assert [t.slug for t in index.get_topics_by_tag("async")] == ["event-loop", "streams"]


@pytest.mark.asyncio
async def test_load_topic_content(config, sample_content):
    index = await load_content_index(config)

    loaded = index.load_topic_content("javascript", "closures")
    assert loaded.topic.last_updated == date(2024, 3, 1)
    assert loaded.body == "# Heading\n\nSome text.\n"


@pytest.mark.asyncio
async def test_category_metadata_file_is_applied(config, sample_content, content_root):
    (content_root / "topics" / "_index.yaml").write_text(
        "categories:\n"
        "  nodejs-core:\n"
        "    title: Node.js Core\n"
        "    order: 0\n"
    )

    index = await load_content_index(config)

    first = index.get_categories()[0]
    assert first.slug == "nodejs-core"
    assert first.title == "Node.js Core"


@pytest.mark.asyncio
async def test_missing_root_raises(tmp_path):
    config = Config(content=ContentConfig(path=str(tmp_path / "missing")))

    with pytest.raises(ContentRootError):
        await load_content_index(config)


def test_get_content_index_is_built_once(config, write_lesson):
    write_lesson("javascript", "closures.md", title="Closures")

    first = get_content_index(config)
    write_lesson("javascript", "hoisting.md", title="Hoisting")
    second = get_content_index(config)

    assert first is second
    assert second.get_topic_by_slug("javascript", "hoisting") is None

    reset_content_index()
    rebuilt = get_content_index(config)
    assert rebuilt is not first
    assert rebuilt.get_topic_by_slug("javascript", "hoisting") is not None


def test_get_content_index_follows_a_different_config(config, write_lesson, tmp_path):
    write_lesson("javascript", "closures.md", title="Closures")
    other_topics = tmp_path / "other" / "topics" / "rust"
    other_topics.mkdir(parents=True)
    (other_topics / "ownership.md").write_text("---\ntitle: Ownership\n---\nBody\n")
    other = Config(content=ContentConfig(path=str(tmp_path / "other")))

    first = get_content_index(config)
    switched = get_content_index(other)

    assert [c.slug for c in first.get_categories()] == ["javascript"]
    assert [c.slug for c in switched.get_categories()] == ["rust"]
    assert get_content_index() is switched
    assert get_content_index(other.model_copy(deep=True)) is switched


def test_config_cannot_unreserve_builtin_routes(write_lesson, content_root):
    write_lesson("search", "ranking.md", title="Ranking")
    config = Config(
        content=ContentConfig(path=str(content_root)),
        routes=RoutesConfig(reserved=[]),
    )

    with pytest.raises(ReservedRouteError):
        build_content_index(config)


def test_config_can_reserve_extra_routes(write_lesson, content_root):
    write_lesson("handbook", "intro.md", title="Intro")
    config = Config(
        content=ContentConfig(path=str(content_root)),
        routes=RoutesConfig(reserved=["handbook"]),
    )

    with pytest.raises(ReservedRouteError) as exc_info:
        build_content_index(config)

    assert exc_info.value.slug == "handbook"
