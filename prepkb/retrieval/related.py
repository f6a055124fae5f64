"""Related-topic ranking.

Scores every other topic in the catalog by the signals it shares with the
source topic:

    score = same_category          (if the categories match)
          + shared_tag * n         (n = number of shared tags)
          + same_difficulty        (if both difficulties are set and equal)

Only topics in the same category or with at least one shared tag are
candidates. Ties are broken by category and then slug so the ranking is
reproducible.
"""

from __future__ import annotations

from dataclasses import dataclass

from prepkb.domain.document import Document, TopicSummary
from prepkb.domain.metadata import Difficulty
from prepkb.storage.catalog import Catalog

DEFAULT_LIMIT = 5


@dataclass(frozen=True)
class RelatedWeights:
    same_category: int = 3
    shared_tag: int = 2
    same_difficulty: int = 1

    def __post_init__(self):
        for name in ("same_category", "shared_tag", "same_difficulty"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} weight must not be negative")

    @classmethod
    def from_config(cls, related_config) -> "RelatedWeights":
        return cls(
            same_category=related_config.same_category,
            shared_tag=related_config.shared_tag,
            same_difficulty=related_config.same_difficulty,
        )


@dataclass(frozen=True)
class RelatedTopic:
    """A ranked candidate; built per request and never stored."""

    topic: TopicSummary
    score: int
    shared_tags: tuple[str, ...] = ()


def score_candidate(source: Document, candidate: Document, weights: RelatedWeights) -> tuple[int, tuple[str, ...]] | None:
    """Score one candidate, or return None if it shares no signal with the source."""
    same_category = candidate.category == source.category
    shared = tuple(sorted(source.tags & candidate.tags))
    if not same_category and not shared:
        return None

    score = weights.shared_tag * len(shared)
    if same_category:
        score += weights.same_category
    if (
        source.difficulty is not Difficulty.UNSPECIFIED
        and candidate.difficulty is source.difficulty
    ):
        score += weights.same_difficulty
    return score, shared


def related_to(
    document: Document,
    catalog: Catalog,
    limit: int | None = None,
    weights: RelatedWeights | None = None,
) -> list[RelatedTopic]:
    """Rank the topics most related to ``document``.

    Args:
        document: Source topic (never included in the result)
        catalog: Catalog to scan
        limit: Maximum number of results (default 5); values <= 0 give []
        weights: Scoring weights (defaults to RelatedWeights())

    Returns:
        Related topics ordered by score descending, then category and slug
    """
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        return []
    weights = weights or RelatedWeights()

    ranked = []
    for candidate in catalog.documents():
        if candidate.key == document.key:
            continue
        result = score_candidate(document, candidate, weights)
        if result is None:
            continue
        score, shared = result
        ranked.append(RelatedTopic(topic=candidate.summary(), score=score, shared_tags=shared))

    ranked.sort(key=lambda r: (-r.score, r.topic.category, r.topic.slug))
    return ranked[:limit]


def related_summaries(
    document: Document,
    catalog: Catalog,
    limit: int | None = None,
    weights: RelatedWeights | None = None,
) -> list[TopicSummary]:
    return [r.topic for r in related_to(document, catalog, limit=limit, weights=weights)]
