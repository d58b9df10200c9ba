"""
Category metadata for the lesson library.

Category titles, descriptions and ordering may be declared in
``topics/_index.yaml``; any category without an entry falls back to a title
derived from its slug.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import anyio
import yaml
from pydantic import ValidationError

from ..exceptions import ContentRootError
from ..models.content import CategoryMetadata

logger = logging.getLogger(__name__)


class CategoryCatalog:
    """Load explicit category metadata from the index file."""

    def __init__(
        self,
        content_path: str = "./content",
        topics_dir: str = "topics",
        index_file: str = "_index.yaml",
    ):
        self.content_path = Path(content_path)
        self.index_file = self.content_path / topics_dir / index_file

    async def load(self) -> Dict[str, CategoryMetadata]:
        """
        Load category metadata keyed by slug.

        Expected layout::

            categories:
              nodejs-core:
                title: Node.js Core
                description: Event loop, streams and core modules.
                order: 1

        Returns:
            Mapping of category slug to metadata; empty if there is no index file

        Raises:
            ContentRootError: If the index file exists but is malformed
        """
        index_path = anyio.Path(self.index_file)

        if not await index_path.exists():
            return {}

        try:
            text = await index_path.read_text(encoding="utf-8")
            data = yaml.safe_load(text) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise ContentRootError(f"Cannot read category index {self.index_file}: {e}") from e

        if not isinstance(data, dict):
            raise ContentRootError(f"Category index {self.index_file} is not a mapping")

        raw_categories = data.get("categories") or {}
        if not isinstance(raw_categories, dict):
            raise ContentRootError(
                f"'categories' in {self.index_file} must map slugs to metadata"
            )

        catalog: Dict[str, CategoryMetadata] = {}
        for slug, cat_data in raw_categories.items():
            catalog[str(slug)] = self._parse_category(str(slug), cat_data)

        logger.debug("Loaded metadata for %d categories from %s", len(catalog), self.index_file)
        return catalog

    def _parse_category(self, slug: str, data: Any) -> CategoryMetadata:
        """Parse one category entry from YAML data."""
        if data is None:
            return CategoryMetadata()
        if isinstance(data, str):
            return CategoryMetadata(title=data)
        if not isinstance(data, dict):
            raise ContentRootError(f"Metadata for category '{slug}' must be a mapping")

        try:
            return CategoryMetadata(
                title=data.get("title"),
                description=data.get("description"),
                order=data.get("order"),
            )
        except ValidationError as e:
            raise ContentRootError(f"Invalid metadata for category '{slug}': {e}") from e
