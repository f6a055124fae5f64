from prepkb.retrieval.resolver import NOT_FOUND, NotFound, TopicResolver
from prepkb.retrieval.related import (
    RelatedTopic,
    RelatedWeights,
    related_summaries,
    related_to,
)

__all__ = [
    "NOT_FOUND",
    "NotFound",
    "TopicResolver",
    "RelatedTopic",
    "RelatedWeights",
    "related_summaries",
    "related_to",
]
