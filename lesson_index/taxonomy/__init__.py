"""Taxonomy assembly and validation."""

from .builder import TaxonomyBuilder, default_description

__all__ = ["TaxonomyBuilder", "default_description"]
