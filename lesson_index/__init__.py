"""Build-time index over the lesson content tree."""

from .config import Config, load_config, load_config_sync
from .exceptions import (
    ContentIndexError,
    ContentRootError,
    DuplicateCategoryError,
    DuplicateTopicError,
    FrontmatterError,
    ReservedRouteError,
    TaxonomyError,
)
from .index import ContentIndex
from .loader import (
    build_content_index,
    get_content_index,
    load_content_index,
    reset_content_index,
)
from .routing import StaticPathPlanner

__version__ = "0.1.0"

__all__ = [
    "Config",
    "ContentIndex",
    "StaticPathPlanner",
    "build_content_index",
    "get_content_index",
    "load_config",
    "load_config_sync",
    "load_content_index",
    "reset_content_index",
    # Errors
    "ContentIndexError",
    "ContentRootError",
    "DuplicateCategoryError",
    "DuplicateTopicError",
    "FrontmatterError",
    "ReservedRouteError",
    "TaxonomyError",
]
