"""Breadcrumbs and previous/next links for topic pages."""

from __future__ import annotations

from dataclasses import dataclass

from prepkb.domain.document import Document, TopicSummary
from prepkb.routing import category_url, topic_url
from prepkb.storage.catalog import Catalog


@dataclass(frozen=True)
class Breadcrumb:
    title: str
    url: str


@dataclass(frozen=True)
class AdjacentTopics:
    previous: TopicSummary | None = None
    next: TopicSummary | None = None


def breadcrumbs(catalog: Catalog, document: Document) -> list[Breadcrumb]:
    """Home -> category -> topic trail for a document."""
    category = catalog.get_category(document.category)
    category_title = category.title if category else document.category
    return [
        Breadcrumb(title="Home", url="/"),
        Breadcrumb(title=category_title, url=category_url(document.category)),
        Breadcrumb(title=document.title, url=topic_url(document.category, document.slug)),
    ]


def adjacent_topics(catalog: Catalog, document: Document) -> AdjacentTopics:
    """Neighbouring topics of ``document`` within its category, in catalog order."""
    topics = catalog.index.get(document.category)
    if not topics or document.slug not in topics:
        return AdjacentTopics()

    slugs = list(topics)
    position = slugs.index(document.slug)
    previous = topics[slugs[position - 1]].summary() if position > 0 else None
    following = topics[slugs[position + 1]].summary() if position + 1 < len(slugs) else None
    return AdjacentTopics(previous=previous, next=following)
