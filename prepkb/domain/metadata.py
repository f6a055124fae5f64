"""Typed frontmatter record for a topic."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from prepkb.errors import DocumentParseError
from prepkb.utils import title_from_slug

logger = logging.getLogger(__name__)


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    SENIOR = "senior"
    EXPERT = "expert"
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, value: Any) -> "Difficulty":
        """Map a raw frontmatter value to a difficulty level.

        Missing values map to ``UNSPECIFIED``. Unknown strings also map to
        ``UNSPECIFIED`` and log a warning instead of failing the document.
        """
        if value is None:
            return cls.UNSPECIFIED
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise DocumentParseError(f"difficulty must be a string, got {type(value).__name__}")
        normalized = value.strip().lower()
        if not normalized:
            return cls.UNSPECIFIED
        try:
            return cls(normalized)
        except ValueError:
            logger.warning("Unknown difficulty %r, treating as unspecified", value)
            return cls.UNSPECIFIED


# Frontmatter keys understood by TopicMetadata. Both the camelCase keys used by
# the site's markdown files and snake_case spellings are accepted.
_KEY_ALIASES = {
    "title": "title",
    "difficulty": "difficulty",
    "estimatedReadTime": "estimated_read_time",
    "estimated_read_time": "estimated_read_time",
    "tags": "tags",
    "lastUpdated": "last_updated",
    "last_updated": "last_updated",
    "description": "description",
}


def _parse_tags(value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        raise DocumentParseError(f"tags must be a list or string, got {type(value).__name__}")

    tags = set()
    for item in items:
        if isinstance(item, (dict, list)):
            raise DocumentParseError(f"tag must be a scalar, got {type(item).__name__}")
        if item is None:
            continue
        tag = str(item).strip()
        if tag:
            tags.add(tag)
    return frozenset(tags)


def _parse_read_time(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise DocumentParseError("estimatedReadTime must be an integer, got bool")
    if isinstance(value, int):
        minutes = value
    elif isinstance(value, float) and value.is_integer():
        minutes = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        minutes = int(value.strip())
    else:
        raise DocumentParseError(f"estimatedReadTime must be an integer, got {value!r}")
    if minutes < 0:
        raise DocumentParseError(f"estimatedReadTime must not be negative, got {minutes}")
    return minutes


def _parse_date(value: Any) -> dt.date | None:
    if value is None:
        return None
    # YAML already turns unquoted ISO dates into date/datetime objects
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return dt.date.fromisoformat(text[:10])
        except ValueError as e:
            raise DocumentParseError(f"lastUpdated is not an ISO date: {value!r}") from e
    raise DocumentParseError(f"lastUpdated must be a date, got {type(value).__name__}")


@dataclass(frozen=True, slots=True)
class TopicMetadata:
    """Immutable metadata parsed from a topic's frontmatter.

    Attributes:
        title: Display title (defaults to the title-cased slug)
        difficulty: Difficulty level (defaults to ``Difficulty.UNSPECIFIED``)
        estimated_read_time: Reading time in minutes (optional)
        tags: Tag set (defaults to empty)
        last_updated: Last update date (optional)
        description: Short summary (defaults to empty string)
        extra: Any other frontmatter keys, passed through to the renderer
    """

    title: str
    difficulty: Difficulty = Difficulty.UNSPECIFIED
    estimated_read_time: int | None = None
    tags: frozenset[str] = frozenset()
    last_updated: dt.date | None = None
    description: str = ""
    extra: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, hash=False
    )

    @classmethod
    def from_frontmatter(cls, data: Mapping[str, Any], slug: str) -> "TopicMetadata":
        """Build metadata from a raw frontmatter mapping.

        Args:
            data: Mapping produced by the frontmatter parser
            slug: Topic slug, used for the default title

        Returns:
            TopicMetadata instance

        Raises:
            DocumentParseError: If a known field has the wrong type
        """
        known: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(str(key))
            if name is None:
                extra[str(key)] = value
            else:
                known[name] = value

        title = known.get("title")
        if title is None or (isinstance(title, str) and not title.strip()):
            title = title_from_slug(slug)
        elif not isinstance(title, (str, int, float)):
            raise DocumentParseError(f"title must be a string, got {type(title).__name__}")

        description = known.get("description") or ""
        if not isinstance(description, str):
            raise DocumentParseError(
                f"description must be a string, got {type(description).__name__}"
            )

        return cls(
            title=str(title).strip(),
            difficulty=Difficulty.parse(known.get("difficulty")),
            estimated_read_time=_parse_read_time(known.get("estimated_read_time")),
            tags=_parse_tags(known.get("tags")),
            last_updated=_parse_date(known.get("last_updated")),
            description=description.strip(),
            extra=MappingProxyType(extra),
        )

    def to_dict(self) -> dict:
        """Convert metadata to a JSON-friendly dictionary."""
        return {
            "title": self.title,
            "difficulty": self.difficulty.value,
            "estimatedReadTime": self.estimated_read_time,
            "tags": sorted(self.tags),
            "lastUpdated": self.last_updated.isoformat() if self.last_updated else None,
            "description": self.description,
        }
