from .static_paths import IndexProvider, StaticPathPlanner

__all__ = ["IndexProvider", "StaticPathPlanner"]
