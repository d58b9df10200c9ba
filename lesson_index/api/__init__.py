# lesson_index/api/__init__.py
"""Read-only REST API over the lesson index.

Endpoints:
- Categories and topics (list, get, topic content)
- Static generation params for the site build

Usage:
    from lesson_index.api import create_app

    app = create_app()
    # Run with: uvicorn --factory lesson_index.api:create_app
"""

from .main import create_app
from .dependencies import (
    # Config
    get_config,
    get_config_sync,
    ConfigDep,
    # Content index
    get_index,
    IndexDep,
    # Static paths
    get_planner,
    PlannerDep,
    # Utilities
    cleanup_dependencies,
)
from .errors import APIError
from .schemas import (
    ErrorResponse,
    TopicResponse,
    CategorySummaryResponse,
    CategoryResponse,
    TopicContentResponse,
    CategoryParam,
    TopicParam,
)

__all__ = [
    "create_app",
    # Dependencies
    "get_config",
    "get_config_sync",
    "ConfigDep",
    "get_index",
    "IndexDep",
    "get_planner",
    "PlannerDep",
    "cleanup_dependencies",
    # Errors
    "APIError",
    # Schemas
    "ErrorResponse",
    "TopicResponse",
    "CategorySummaryResponse",
    "CategoryResponse",
    "TopicContentResponse",
    "CategoryParam",
    "TopicParam",
]
