"""Route enumeration for static page generation.

Every topic in the catalog maps to exactly one ``/{category}/{topic}`` route
and every such route resolves back to its topic through ``TopicResolver``.
"""

from __future__ import annotations

from typing import Iterable, NamedTuple

from prepkb.config import DEFAULT_RESERVED_ROUTES
from prepkb.storage.catalog import Catalog


class TopicRoute(NamedTuple):
    category: str
    topic: str


class ParsedURL(NamedTuple):
    category: str | None
    topic: str | None
    is_home: bool
    is_category: bool
    is_topic: bool


def all_routes(catalog: Catalog) -> list[TopicRoute]:
    """List every (category, topic) pair in catalog order."""
    return [TopicRoute(doc.category, doc.slug) for doc in catalog.documents()]


def static_params(catalog: Catalog) -> list[dict[str, str]]:
    """Parameter objects for pre-rendering every topic page."""
    return [route._asdict() for route in all_routes(catalog)]


def category_routes(
    catalog: Catalog,
    reserved: Iterable[str] = DEFAULT_RESERVED_ROUTES,
) -> list[dict[str, str]]:
    """Parameter objects for every category page.

    Categories whose slug collides with a fixed site page (``search``,
    ``flashcards`` ...) are left out.
    """
    reserved = set(reserved)
    return [
        {"category": category.slug}
        for category in catalog.categories
        if category.slug not in reserved
    ]


def topic_url(category: str, topic: str) -> str:
    return f"/{category}/{topic}"


def category_url(category: str) -> str:
    return f"/{category}"


def parse_url(path: str) -> ParsedURL:
    segments = [segment for segment in path.split("?", 1)[0].split("/") if segment]
    return ParsedURL(
        category=segments[0] if segments else None,
        topic=segments[1] if len(segments) > 1 else None,
        is_home=len(segments) == 0,
        is_category=len(segments) == 1,
        is_topic=len(segments) == 2,
    )
