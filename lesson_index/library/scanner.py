# lesson_index/library/scanner.py
"""
Content tree scanning.

Walks ``<content>/topics/<category>/<topic>.md`` and produces one raw
ContentFile per lesson. Frontmatter is split off here but not interpreted.
"""

import hashlib
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import anyio

from ..exceptions import ContentRootError
from ..models.content import ContentFile, ScanResult, SkippedFile
from .frontmatter import split_frontmatter
from .slugs import category_slug_for, is_hidden, topic_slug_for

logger = logging.getLogger(__name__)

_SECTION_HEADING = re.compile(r"^##\s+(.+?)\s*#*\s*$", re.MULTILINE)


class ContentScanner:
    """Scan the topics tree for lesson files."""

    def __init__(
        self,
        content_path: str = "./content",
        topics_dir: str = "topics",
        markdown_suffixes: Iterable[str] = (".md", ".markdown"),
        max_concurrent_reads: int = 32,
    ):
        self.content_path = Path(content_path)
        self.topics_path = self.content_path / topics_dir
        self.markdown_suffixes = frozenset(s.lower() for s in markdown_suffixes)
        self.max_concurrent_reads = max_concurrent_reads

    async def scan(self) -> ScanResult:
        """
        Scan the whole topics tree.

        Returns:
            ScanResult with files in deterministic order (categories, then
            files, sorted by name) and the files that had to be skipped.

        Raises:
            ContentRootError: If the topics directory is missing or unreadable
        """
        root = await anyio.Path(self.topics_path).absolute()
        if not await root.is_dir():
            raise ContentRootError(f"Topics directory not found: {self.topics_path}")

        skipped: List[SkippedFile] = []
        categories: List[str] = []
        paths = await self._collect_paths(root, categories, skipped)

        slots: List[Optional[ContentFile]] = [None] * len(paths)
        limiter = anyio.CapacityLimiter(self.max_concurrent_reads)

        async def read_one(position: int, path: anyio.Path) -> None:
            async with limiter:
                content_file = await self._read_file(path, Path(root), skipped)
            slots[position] = content_file

        async with anyio.create_task_group() as tg:
            for position, path in enumerate(paths):
                tg.start_soon(read_one, position, path)

        files = tuple(f for f in slots if f is not None)
        skipped.sort(key=lambda s: str(s.path))

        self._flag_duplicate_content(files)

        logger.info(
            "Scanned %s: %d lesson files, %d skipped",
            self.topics_path, len(files), len(skipped),
        )
        return ScanResult(
            files=files, categories=tuple(categories), skipped=tuple(skipped)
        )

    async def _collect_paths(
        self,
        root: anyio.Path,
        categories: List[str],
        skipped: List[SkippedFile],
    ) -> List[anyio.Path]:
        """List lesson files in scan order, recording each category directory."""
        try:
            entries = sorted([item async for item in root.iterdir()], key=lambda p: p.name)
        except OSError as e:
            raise ContentRootError(f"Cannot read topics directory {self.topics_path}: {e}") from e

        paths: List[anyio.Path] = []
        for entry in entries:
            if entry.name.startswith((".", "_")) or not await entry.is_dir():
                continue
            categories.append(entry.name)
            try:
                children = sorted(
                    [item async for item in entry.iterdir()], key=lambda p: p.name
                )
            except OSError as e:
                logger.warning("Skipping unreadable category directory %s: %s", entry, e)
                skipped.append(SkippedFile(path=Path(entry), reason=str(e)))
                continue

            for child in children:
                if is_hidden(child.name):
                    continue
                if child.suffix.lower() not in self.markdown_suffixes:
                    continue
                if not await child.is_file():
                    logger.debug("Ignoring nested directory %s", child)
                    continue
                paths.append(child)
        return paths

    async def _read_file(
        self, path: anyio.Path, root: Path, skipped: List[SkippedFile]
    ) -> Optional[ContentFile]:
        """Read one lesson file; unreadable files are recorded and skipped."""
        try:
            text = await path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping unreadable file %s: %s", path, e)
            skipped.append(SkippedFile(path=Path(path), reason=f"unreadable: {e}"))
            return None

        file_path = Path(path)
        raw, body = split_frontmatter(text)
        return ContentFile(
            absolute_path=file_path,
            category_slug=category_slug_for(file_path, root),
            topic_slug=topic_slug_for(file_path),
            raw_frontmatter=raw,
            body=body,
        )

    def _flag_duplicate_content(self, files: Tuple[ContentFile, ...]) -> None:
        """Warn about repeated sections and identical bodies. Output is unchanged."""
        seen_bodies: Dict[str, Path] = {}
        for content_file in files:
            for heading in find_repeated_sections(content_file.body):
                logger.warning(
                    "Section '%s' appears more than once in %s",
                    heading, content_file.absolute_path,
                )

            normalized = content_file.body.strip()
            if not normalized:
                continue
            digest = hashlib.sha256(normalized.encode("utf-8")).hexdigest()
            first = seen_bodies.setdefault(digest, content_file.absolute_path)
            if first != content_file.absolute_path:
                logger.warning(
                    "%s has the same body as %s", content_file.absolute_path, first
                )


def find_repeated_sections(body: str) -> List[str]:
    """``##`` headings that occur more than once in a document, in first-seen order."""
    seen = set()
    reported = set()
    repeated: List[str] = []
    for heading in _SECTION_HEADING.findall(body):
        key = heading.strip().lower()
        if key in seen and key not in reported:
            repeated.append(heading.strip())
            reported.add(key)
        seen.add(key)
    return repeated
