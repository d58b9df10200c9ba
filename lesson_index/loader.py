# lesson_index/loader.py
"""
Index construction: filesystem → scanner → parser → taxonomy builder.

The built index is process-wide state. It is created once behind
``get_content_index()`` and replaced wholesale, never patched.
"""

import logging
import threading
from typing import List, Optional, Tuple

import anyio

from .config import Config, load_config_sync
from .exceptions import FrontmatterError
from .index.content_index import ContentIndex
from .library.categories import CategoryCatalog
from .library.frontmatter import parse_frontmatter
from .library.scanner import ContentScanner
from .models.content import ContentFile, Frontmatter, SkippedFile
from .taxonomy.builder import TaxonomyBuilder

logger = logging.getLogger(__name__)


async def load_content_index(config: Config) -> ContentIndex:
    """
    Build a fresh index from the configured content tree.

    Files with unusable frontmatter are skipped with a warning. Whole-tree
    failures (ContentRootError) and taxonomy failures (TaxonomyError)
    propagate to the caller.
    """
    content = config.content
    scanner = ContentScanner(
        content_path=content.path,
        topics_dir=content.topics_dir,
        markdown_suffixes=content.markdown_suffixes,
        max_concurrent_reads=content.max_concurrent_reads,
    )
    catalog = CategoryCatalog(
        content_path=content.path,
        topics_dir=content.topics_dir,
        index_file=content.index_file,
    )

    scan = await scanner.scan()
    category_metadata = await catalog.load()

    records: List[Tuple[ContentFile, Frontmatter]] = []
    skipped: List[SkippedFile] = list(scan.skipped)
    for content_file in scan.files:
        try:
            frontmatter = parse_frontmatter(
                content_file.raw_frontmatter, source=content_file.absolute_path
            )
        except FrontmatterError as e:
            logger.warning("Excluding %s from the index: %s", content_file.absolute_path, e.reason)
            skipped.append(SkippedFile(path=content_file.absolute_path, reason=e.reason))
            continue
        records.append((content_file, frontmatter))

    builder = TaxonomyBuilder(
        reserved_routes=config.reserved_routes,
        category_metadata=category_metadata,
    )
    return builder.build(records, category_slugs=scan.categories, skipped=skipped)


def build_content_index(config: Config) -> ContentIndex:
    """Synchronous wrapper around ``load_content_index``."""
    return anyio.run(load_content_index, config)


_cached: Optional[Tuple[Config, ContentIndex]] = None
_index_lock = threading.Lock()


def get_content_index(config: Optional[Config] = None) -> ContentIndex:
    """
    Get the process-wide content index, building it on first use.

    Without ``config`` the current index is returned as is (or built from the
    settings file). A config that differs from the one the current index was
    built from replaces the index with a fresh build of that tree.

    Must not be called from inside a running event loop; async callers use
    ``anyio.to_thread.run_sync(get_content_index, config)``.
    """
    global _cached

    cached = _cached
    if cached is not None and (config is None or cached[0] == config):
        return cached[1]

    with _index_lock:
        if _cached is None or (config is not None and _cached[0] != config):
            if _cached is not None:
                logger.info("Content settings changed, rebuilding the content index")
            config = config or load_config_sync()
            _cached = (config.model_copy(deep=True), build_content_index(config))
        return _cached[1]


def reset_content_index() -> None:
    """Drop the cached index so the next access rebuilds it from scratch."""
    global _cached
    with _index_lock:
        _cached = None
