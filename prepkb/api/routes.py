"""FastAPI routes for the content API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from prepkb.api.dependencies import get_catalog, get_config
from prepkb.api.schemas import (
    BreadcrumbModel,
    CategoryDetailResponse,
    CategoryListResponse,
    CategoryModel,
    RelatedTopicModel,
    StaticPathsResponse,
    TopicListResponse,
    TopicMetadataModel,
    TopicPageResponse,
    TopicSummaryModel,
)
from prepkb.config import AppConfig
from prepkb.domain.metadata import Difficulty
from prepkb.pages import category_page, topic_page
from prepkb.retrieval.related import RelatedWeights
from prepkb.retrieval.resolver import NOT_FOUND
from prepkb.routing import category_routes, static_params
from prepkb.storage.catalog import Catalog

router = APIRouter()


@router.get("/categories", response_model=CategoryListResponse)
def list_categories(catalog: Catalog = Depends(get_catalog)):
    """List every category in display order."""
    categories = [CategoryModel.from_category(c) for c in catalog.categories]
    return CategoryListResponse(categories=categories, total=len(categories))


@router.get("/categories/{category}", response_model=CategoryDetailResponse)
def get_category(
    category: str,
    catalog: Catalog = Depends(get_catalog),
    config: AppConfig = Depends(get_config),
):
    """Category page: the category and its topic cards."""
    page = category_page(catalog, category, reserved=set(config.routes.reserved))
    if page is NOT_FOUND:
        raise HTTPException(status_code=404, detail="Category not found")
    return CategoryDetailResponse(
        category=CategoryModel.from_category(page.category),
        topics=[TopicSummaryModel.from_summary(t) for t in page.topics],
    )


@router.get("/topics/{category}/{topic}", response_model=TopicPageResponse)
def get_topic(
    category: str,
    topic: str,
    limit: int | None = Query(default=None, ge=0, le=20, description="Number of related topics"),
    catalog: Catalog = Depends(get_catalog),
    config: AppConfig = Depends(get_config),
):
    """Topic page: body, metadata, related topics and navigation links."""
    page = topic_page(
        catalog,
        category,
        topic,
        limit=config.related.limit if limit is None else limit,
        weights=RelatedWeights.from_config(config.related),
    )
    if page is NOT_FOUND:
        raise HTTPException(status_code=404, detail="Topic not found")

    document = page.document
    metadata = TopicMetadataModel(
        **TopicSummaryModel.from_summary(document.summary()).model_dump(),
        description=document.metadata.description,
        category_title=page.category.title,
    )
    previous = page.adjacent.previous
    following = page.adjacent.next
    return TopicPageResponse(
        metadata=metadata,
        body=document.body,
        related=[RelatedTopicModel.from_related(r) for r in page.related],
        breadcrumbs=[BreadcrumbModel.from_breadcrumb(b) for b in page.breadcrumbs],
        previous=TopicSummaryModel.from_summary(previous) if previous else None,
        next=TopicSummaryModel.from_summary(following) if following else None,
    )


@router.get("/tags/{tag}", response_model=TopicListResponse)
def topics_by_tag(tag: str, catalog: Catalog = Depends(get_catalog)):
    topics = [TopicSummaryModel.from_summary(t) for t in catalog.topics_by_tag(tag)]
    return TopicListResponse(topics=topics, total=len(topics))


@router.get("/difficulty/{level}", response_model=TopicListResponse)
def topics_by_difficulty(level: str, catalog: Catalog = Depends(get_catalog)):
    try:
        difficulty = Difficulty(level.lower())
    except ValueError:
        raise HTTPException(status_code=404, detail="Unknown difficulty level")
    topics = [TopicSummaryModel.from_summary(t) for t in catalog.topics_by_difficulty(difficulty)]
    return TopicListResponse(topics=topics, total=len(topics))


@router.get("/static-paths", response_model=StaticPathsResponse)
def get_static_paths(
    catalog: Catalog = Depends(get_catalog),
    config: AppConfig = Depends(get_config),
):
    """Every route the static build must pre-render."""
    return StaticPathsResponse(
        topics=static_params(catalog),
        categories=category_routes(catalog, reserved=config.routes.reserved),
    )
