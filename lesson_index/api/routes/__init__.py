# lesson_index/api/routes/__init__.py
"""API route modules."""

from . import categories, static_params

__all__ = ["categories", "static_params"]
