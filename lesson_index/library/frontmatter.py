"""
Frontmatter parsing for lesson files.

A lesson starts with a YAML block between ``---`` lines. Only ``title`` is
required; every other field is coerced to a safe default rather than
rejecting the file.
"""

import math
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Tuple

import yaml

from ..exceptions import FrontmatterError
from ..models.content import Difficulty, Frontmatter

_DELIMITER = "---"
_CLOSERS = ("---", "...")
_LEADING_NUMBER = re.compile(r"^\s*(\d+)(?:\.\d+)?")
_MAX_READ_TIME = 24 * 60   # Minutes; longer values are treated as typos


class _FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as strings, so a bad date is just a bad field."""


_FrontmatterLoader.add_constructor(
    "tag:yaml.org,2002:timestamp",
    lambda loader, node: loader.construct_scalar(node),
)


def _norm_text(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n").lstrip("\ufeff")


def split_frontmatter(text: str) -> Tuple[Optional[str], str]:
    """
    Split file text into its raw frontmatter block and body.

    Returns:
        ``(raw, body)``; ``raw`` is None when the text has no terminated
        frontmatter block, in which case ``body`` is the whole text.
    """
    text = _norm_text(text)
    lines = text.split("\n")
    if not lines or lines[0].rstrip() != _DELIMITER:
        return None, text

    for i in range(1, len(lines)):
        if lines[i].rstrip() in _CLOSERS:
            raw = "\n".join(lines[1:i])
            body = "\n".join(lines[i + 1:])
            return raw, body
    return None, text


def _coerce_title(value: Any) -> Optional[str]:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        title = str(value).strip()
        return title or None
    return None


def _coerce_difficulty(value: Any) -> Difficulty:
    if isinstance(value, str):
        try:
            return Difficulty(value.strip().lower())
        except ValueError:
            pass
    return Difficulty.INTERMEDIATE


def _coerce_read_time(value: Any) -> int:
    minutes = _read_time_minutes(value)
    return minutes if 0 < minutes <= _MAX_READ_TIME else 0


def _read_time_minutes(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and value <= _MAX_READ_TIME else 0
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match:
            try:
                return int(match.group(1))
            except ValueError:
                return 0
    return 0


def _coerce_tags(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        items: list[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = list(value)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        items = [value]
    else:
        return ()

    tags: list[str] = []
    for item in items:
        if isinstance(item, (dict, list, tuple)) or item is None:
            continue
        tag = str(item).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def _coerce_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip().strip('"').strip("'")
        try:
            return date.fromisoformat(s)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def _coerce_order(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r"\s*-?\d+\s*", value):
        return int(value)
    return None


def _coerce_optional_str(value: Any) -> Optional[str]:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        text = str(value).strip()
        return text or None
    return None


def parse_frontmatter(raw: Optional[str], *, source: Optional[Path] = None) -> Frontmatter:
    """
    Interpret a raw frontmatter block.

    Args:
        raw: Text between the ``---`` delimiters, or None if the file had none
        source: File the block came from, used in error messages

    Returns:
        Validated Frontmatter with defaults applied

    Raises:
        FrontmatterError: If the block is missing, is not a YAML mapping,
            has no title, or holds values that cannot be coerced
    """
    if raw is None:
        raise FrontmatterError("missing frontmatter block", source)

    try:
        data = yaml.load(raw, Loader=_FrontmatterLoader)
    except (yaml.YAMLError, RecursionError) as e:
        raise FrontmatterError(f"invalid YAML in frontmatter: {e}", source) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError("frontmatter is not a mapping", source)

    try:
        return _build_frontmatter(data, source)
    except (ValueError, OverflowError, RecursionError) as e:
        raise FrontmatterError(f"unusable frontmatter values: {e}", source) from e


def _build_frontmatter(data: dict, source: Optional[Path]) -> Frontmatter:
    title = _coerce_title(data.get("title"))
    if title is None:
        raise FrontmatterError("missing required field 'title'", source)

    return Frontmatter(
        title=title,
        category=_coerce_optional_str(data.get("category")),
        difficulty=_coerce_difficulty(data.get("difficulty")),
        estimated_read_time=_coerce_read_time(data.get("estimatedReadTime")),
        tags=_coerce_tags(data.get("tags")),
        last_updated=_coerce_date(data.get("lastUpdated")),
        order=_coerce_order(data.get("order")),
        description=_coerce_optional_str(data.get("description")),
    )


def parse_document(text: str, *, source: Optional[Path] = None) -> Tuple[Frontmatter, str]:
    """Parse whole file text into its frontmatter and Markdown body."""
    raw, body = split_frontmatter(text)
    return parse_frontmatter(raw, source=source), body
