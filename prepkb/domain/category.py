"""Category entity."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Category:
    """A named group of topics (one first-level content directory)."""

    slug: str
    title: str
    description: str = ""
    topic_slugs: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "slug": self.slug,
            "title": self.title,
            "description": self.description,
            "topicCount": len(self.topic_slugs),
        }
