"""Render-ready view models for category and topic pages."""

from __future__ import annotations

from dataclasses import dataclass, field

from prepkb.domain.category import Category
from prepkb.domain.document import Document, TopicSummary
from prepkb.navigation import AdjacentTopics, Breadcrumb, adjacent_topics, breadcrumbs
from prepkb.retrieval.related import RelatedTopic, RelatedWeights, related_to
from prepkb.retrieval.resolver import NOT_FOUND, NotFound, TopicResolver
from prepkb.storage.catalog import Catalog


@dataclass(frozen=True)
class TopicPage:
    document: Document
    category: Category
    related: list[RelatedTopic] = field(default_factory=list)
    breadcrumbs: list[Breadcrumb] = field(default_factory=list)
    adjacent: AdjacentTopics = field(default_factory=AdjacentTopics)


@dataclass(frozen=True)
class CategoryPage:
    category: Category
    topics: tuple[TopicSummary, ...] = ()


def topic_page(
    catalog: Catalog,
    category: str,
    topic: str,
    limit: int | None = None,
    weights: RelatedWeights | None = None,
) -> TopicPage | NotFound:
    """Resolve a topic route and gather everything its page needs.

    Returns ``NOT_FOUND`` when the route does not match a topic.
    """
    resolver = TopicResolver(catalog)
    document = resolver.resolve(category, topic)
    if document is NOT_FOUND:
        return NOT_FOUND

    return TopicPage(
        document=document,
        category=catalog.get_category(document.category),
        related=related_to(document, catalog, limit=limit, weights=weights),
        breadcrumbs=breadcrumbs(catalog, document),
        adjacent=adjacent_topics(catalog, document),
    )


def category_page(
    catalog: Catalog,
    category: str,
    reserved: frozenset[str] | set[str] = frozenset(),
) -> CategoryPage | NotFound:
    if category in reserved:
        return NOT_FOUND
    resolved = TopicResolver(catalog).resolve_category(category)
    if resolved is NOT_FOUND:
        return NOT_FOUND
    return CategoryPage(category=resolved, topics=catalog.topics_in_category(resolved.slug))
