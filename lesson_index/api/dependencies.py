"""FastAPI dependency injection."""

from functools import lru_cache, partial
from typing import Annotated
import anyio

from fastapi import Depends, Request

from ..config import Config, load_config_sync
from ..index.content_index import ContentIndex
from ..loader import get_content_index
from ..routing.static_paths import StaticPathPlanner


# =============================================================================
# Configuration
# =============================================================================


@lru_cache()
def get_config_sync() -> Config:
    """Get configuration synchronously (cached)."""
    return load_config_sync()


async def get_config(request: Request) -> Config:
    """Get the configuration the running app was created with."""
    return request.app.state.config


ConfigDep = Annotated[Config, Depends(get_config)]


# =============================================================================
# Content Index
# =============================================================================


async def get_index(config: ConfigDep) -> ContentIndex:
    """Get the shared content index, building it in a worker thread on first use."""
    return await anyio.to_thread.run_sync(get_content_index, config)


IndexDep = Annotated[ContentIndex, Depends(get_index)]


# =============================================================================
# Static Path Planner
# =============================================================================


async def get_planner(config: ConfigDep) -> StaticPathPlanner:
    """Planner that resolves the index lazily so build failures degrade to empty."""
    return StaticPathPlanner(
        index_provider=partial(get_content_index, config),
        reserved_routes=config.reserved_routes,
    )


PlannerDep = Annotated[StaticPathPlanner, Depends(get_planner)]


def cleanup_dependencies() -> None:
    """Forget cached configuration."""
    get_config_sync.cache_clear()
