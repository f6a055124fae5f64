"""Document entity for the content catalog."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from prepkb.domain.metadata import Difficulty, TopicMetadata


@dataclass(frozen=True, slots=True)
class TopicSummary:
    """Lightweight topic listing entry (no body).

    Used for category pages, related-topic cards and any index-only
    operation that should not carry every full body around.
    """

    category: str
    slug: str
    title: str
    difficulty: Difficulty
    estimated_read_time: int | None
    tags: frozenset[str]
    last_updated: dt.date | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.category, self.slug)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "slug": self.slug,
            "title": self.title,
            "difficulty": self.difficulty.value,
            "estimatedReadTime": self.estimated_read_time,
            "tags": sorted(self.tags),
            "lastUpdated": self.last_updated.isoformat() if self.last_updated else None,
        }


@dataclass(frozen=True, slots=True)
class Document:
    """Immutable topic document.

    Represents a single markdown file in the content tree.

    Attributes:
        category: Category slug (immediate parent directory name)
        slug: Topic slug (file name without extension)
        metadata: Parsed frontmatter
        body: Markdown body with the frontmatter block removed
        path: File path relative to the content root (e.g., "databases/sql.md")
    """

    category: str
    slug: str
    metadata: TopicMetadata
    body: str = ""
    path: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.category, self.slug)

    @property
    def title(self) -> str:
        return self.metadata.title

    @property
    def difficulty(self) -> Difficulty:
        return self.metadata.difficulty

    @property
    def tags(self) -> frozenset[str]:
        return self.metadata.tags

    def summary(self) -> TopicSummary:
        """Return the body-less listing entry for this document."""
        return TopicSummary(
            category=self.category,
            slug=self.slug,
            title=self.metadata.title,
            difficulty=self.metadata.difficulty,
            estimated_read_time=self.metadata.estimated_read_time,
            tags=self.metadata.tags,
            last_updated=self.metadata.last_updated,
        )

    def to_dict(self) -> dict:
        """Convert document to dictionary for serialization."""
        return {
            "category": self.category,
            "slug": self.slug,
            "path": self.path,
            "metadata": self.metadata.to_dict(),
            "body": self.body,
        }
