"""Pydantic schemas for API responses."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from prepkb.domain.category import Category
from prepkb.domain.document import TopicSummary
from prepkb.navigation import Breadcrumb
from prepkb.retrieval.related import RelatedTopic
from prepkb.routing import category_url, topic_url


class TopicSummaryModel(BaseModel):
    """Topic card (no body)."""

    category: str
    slug: str
    title: str
    url: str
    difficulty: str
    estimated_read_time: int | None = None
    tags: list[str] = Field(default_factory=list)
    last_updated: dt.date | None = None

    @classmethod
    def from_summary(cls, summary: TopicSummary) -> "TopicSummaryModel":
        return cls(
            category=summary.category,
            slug=summary.slug,
            title=summary.title,
            url=topic_url(summary.category, summary.slug),
            difficulty=summary.difficulty.value,
            estimated_read_time=summary.estimated_read_time,
            tags=sorted(summary.tags),
            last_updated=summary.last_updated,
        )


class RelatedTopicModel(TopicSummaryModel):
    score: float
    shared_tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_related(cls, related: RelatedTopic) -> "RelatedTopicModel":
        base = TopicSummaryModel.from_summary(related.topic)
        return cls(
            **base.model_dump(),
            score=related.score,
            shared_tags=list(related.shared_tags),
        )


class CategoryModel(BaseModel):
    slug: str
    title: str
    description: str
    url: str
    topic_count: int

    @classmethod
    def from_category(cls, category: Category) -> "CategoryModel":
        return cls(
            slug=category.slug,
            title=category.title,
            description=category.description,
            url=category_url(category.slug),
            topic_count=len(category.topic_slugs),
        )


class CategoryListResponse(BaseModel):
    categories: list[CategoryModel]
    total: int


class CategoryDetailResponse(BaseModel):
    category: CategoryModel
    topics: list[TopicSummaryModel]


class BreadcrumbModel(BaseModel):
    title: str
    url: str

    @classmethod
    def from_breadcrumb(cls, crumb: Breadcrumb) -> "BreadcrumbModel":
        return cls(title=crumb.title, url=crumb.url)


class TopicMetadataModel(TopicSummaryModel):
    description: str = ""
    category_title: str


class TopicPageResponse(BaseModel):
    """Everything a topic page template needs to render."""

    metadata: TopicMetadataModel
    body: str
    related: list[RelatedTopicModel]
    breadcrumbs: list[BreadcrumbModel]
    previous: TopicSummaryModel | None = None
    next: TopicSummaryModel | None = None


class TopicListResponse(BaseModel):
    topics: list[TopicSummaryModel]
    total: int


class StaticPathsResponse(BaseModel):
    topics: list[dict[str, str]]
    categories: list[dict[str, str]]
