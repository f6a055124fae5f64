"""Content catalog and related-topic resolution for the interview prep site."""

__version__ = "0.1.0"

# Errors
from prepkb.errors import (
    CatalogLoadError,
    DocumentParseError,
    DuplicateTopicError,
    PrepKBError,
)

# Domain entities
from prepkb.domain import Category, Difficulty, Document, TopicMetadata, TopicSummary

# Catalog
from prepkb.storage import Catalog, CatalogHolder, DocumentRepository, LoadStats

# Lookup and ranking
from prepkb.retrieval import (
    NOT_FOUND,
    NotFound,
    RelatedTopic,
    RelatedWeights,
    TopicResolver,
    related_summaries,
    related_to,
)
from prepkb.routing import TopicRoute, all_routes, category_routes, static_params

__all__ = [
    # Errors
    "PrepKBError",
    "CatalogLoadError",
    "DocumentParseError",
    "DuplicateTopicError",
    # Domain
    "Category",
    "Difficulty",
    "Document",
    "TopicMetadata",
    "TopicSummary",
    # Catalog
    "Catalog",
    "CatalogHolder",
    "DocumentRepository",
    "LoadStats",
    # Lookup and ranking
    "NOT_FOUND",
    "NotFound",
    "TopicResolver",
    "RelatedTopic",
    "RelatedWeights",
    "related_to",
    "related_summaries",
    # Routes
    "TopicRoute",
    "all_routes",
    "category_routes",
    "static_params",
]
