"""Immutable in-memory catalog of categories and topics."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Sequence

from prepkb.domain.category import Category
from prepkb.domain.document import Document, TopicSummary
from prepkb.domain.metadata import Difficulty
from prepkb.errors import DuplicateTopicError
from prepkb.utils import is_valid_slug, title_from_slug


CATEGORY_TITLES = {
    "nodejs-core": "Node.js Core",
    "databases": "Databases",
    "system-design": "System Design",
    "devops": "DevOps & Infrastructure",
    "object-oriented-design": "Object-Oriented Design",
    "advanced-topics": "Advanced Topics",
}

CATEGORY_DESCRIPTIONS = {
    "nodejs-core": "Master Node.js fundamentals including event loop, async programming, and core modules.",
    "databases": "Comprehensive coverage of SQL and NoSQL databases, optimization, and design patterns.",
    "system-design": "Learn scalable system architecture, microservices, and distributed system patterns.",
    "devops": "Docker, Kubernetes, CI/CD pipelines, and cloud platform best practices.",
    "object-oriented-design": "Design patterns, SOLID principles, and software architecture patterns.",
    "advanced-topics": "Message queues, security, monitoring, and other specialized backend topics.",
}


@dataclass(frozen=True)
class LoadStats:
    """Outcome of one catalog build.

    Attributes:
        total: Number of candidate files seen
        loaded: Number of documents added to the catalog
        skipped: Number of files skipped because of errors
        errors: One ``{"path": ..., "error": ...}`` dict per skipped file
    """

    total: int = 0
    loaded: int = 0
    skipped: int = 0
    errors: tuple[dict, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "loaded": self.loaded,
            "skipped": self.skipped,
            "errors": [dict(e) for e in self.errors],
        }


def category_title(slug: str, overrides: Mapping[str, str] | None = None) -> str:
    if overrides and slug in overrides:
        return overrides[slug]
    return CATEGORY_TITLES.get(slug) or title_from_slug(slug)


def category_description(
    slug: str,
    overrides: Mapping[str, str] | None = None,
    title_overrides: Mapping[str, str] | None = None,
) -> str:
    if overrides and slug in overrides:
        return overrides[slug]
    if slug in CATEGORY_DESCRIPTIONS:
        return CATEGORY_DESCRIPTIONS[slug]
    return f"Comprehensive coverage of {category_title(slug, title_overrides)} topics."


def _category_sort_key(order: Sequence[str]):
    positions = {slug: i for i, slug in enumerate(order)}

    def key(slug: str):
        if slug in positions:
            return (0, positions[slug], "")
        return (1, 0, slug)

    return key


class Catalog:
    """Read-only index of every topic, keyed by category then slug.

    A catalog is built once (normally by ``DocumentRepository.load_all``) and
    never mutated afterwards, so any number of threads may read it.
    """

    def __init__(
        self,
        categories: Iterable[Category],
        documents: Iterable[Document],
        stats: LoadStats | None = None,
    ):
        categories = tuple(categories)
        for category in categories:
            if not is_valid_slug(category.slug):
                raise ValueError(f"Invalid category slug '{category.slug}'")
        by_category: dict[str, dict[str, Document]] = {c.slug: {} for c in categories}
        if len(by_category) != len(categories):
            raise ValueError("Category slugs must be unique")

        for doc in documents:
            if not is_valid_slug(doc.category) or not is_valid_slug(doc.slug):
                raise ValueError(f"Document '{doc.path or doc.slug}' has an invalid route key {doc.key!r}")
            topics = by_category.get(doc.category)
            if topics is None:
                raise ValueError(f"Document '{doc.path or doc.slug}' has unknown category '{doc.category}'")
            existing = topics.get(doc.slug)
            if existing is not None:
                raise DuplicateTopicError(doc.key, [existing.path, doc.path])
            topics[doc.slug] = doc

        index: dict[str, Mapping[str, Document]] = {}
        for category in categories:
            topics = by_category[category.slug]
            if set(category.topic_slugs) != set(topics) or len(category.topic_slugs) != len(topics):
                raise ValueError(f"Category '{category.slug}' topic list does not match its documents")
            index[category.slug] = MappingProxyType(
                {slug: topics[slug] for slug in category.topic_slugs}
            )

        self._categories = categories
        self._category_by_slug = MappingProxyType({c.slug: c for c in categories})
        self._index = MappingProxyType(index)
        self._stats = stats or LoadStats(
            total=sum(len(t) for t in index.values()),
            loaded=sum(len(t) for t in index.values()),
        )

    @classmethod
    def from_documents(
        cls,
        documents: Iterable[Document],
        category_order: Sequence[str] = (),
        category_titles: Mapping[str, str] | None = None,
        category_descriptions: Mapping[str, str] | None = None,
        stats: LoadStats | None = None,
    ) -> "Catalog":
        """Build a catalog, deriving categories from the documents.

        Categories are ordered by ``category_order`` first and alphabetically
        after that. Topics inside a category are ordered by slug.

        Raises:
            DuplicateTopicError: If two documents share a (category, slug) pair
        """
        documents = list(documents)
        grouped: dict[str, list[Document]] = {}
        seen: dict[tuple[str, str], Document] = {}
        for doc in documents:
            if doc.key in seen:
                raise DuplicateTopicError(doc.key, [seen[doc.key].path, doc.path])
            seen[doc.key] = doc
            grouped.setdefault(doc.category, []).append(doc)

        categories = []
        for slug in sorted(grouped, key=_category_sort_key(category_order)):
            categories.append(
                Category(
                    slug=slug,
                    title=category_title(slug, category_titles),
                    description=category_description(slug, category_descriptions, category_titles),
                    topic_slugs=tuple(sorted(doc.slug for doc in grouped[slug])),
                )
            )
        return cls(categories, documents, stats=stats)

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._categories

    @property
    def stats(self) -> LoadStats:
        return self._stats

    @property
    def index(self) -> Mapping[str, Mapping[str, Document]]:
        """Two-level read-only mapping: category slug -> topic slug -> Document."""
        return self._index

    def get_category(self, slug: str) -> Category | None:
        return self._category_by_slug.get(slug)

    def get(self, category: str, slug: str) -> Document | None:
        topics = self._index.get(category)
        if topics is None:
            return None
        return topics.get(slug)

    def documents(self) -> Iterator[Document]:
        """Iterate every document in catalog order."""
        for topics in self._index.values():
            yield from topics.values()

    def all_topics(self) -> tuple[TopicSummary, ...]:
        return tuple(doc.summary() for doc in self.documents())

    def topics_in_category(self, slug: str) -> tuple[TopicSummary, ...]:
        topics = self._index.get(slug, {})
        return tuple(doc.summary() for doc in topics.values())

    def topics_by_tag(self, tag: str) -> tuple[TopicSummary, ...]:
        wanted = tag.strip().lower()
        return tuple(
            doc.summary()
            for doc in self.documents()
            if any(t.lower() == wanted for t in doc.tags)
        )

    def topics_by_difficulty(self, difficulty: Difficulty | str) -> tuple[TopicSummary, ...]:
        level = Difficulty.parse(difficulty) if isinstance(difficulty, str) else difficulty
        return tuple(doc.summary() for doc in self.documents() if doc.difficulty is level)

    def __len__(self) -> int:
        return sum(len(topics) for topics in self._index.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        category, slug = key
        return self.get(category, slug) is not None

    def __iter__(self) -> Iterator[Document]:
        return self.documents()

    def __repr__(self) -> str:
        return f"Catalog(categories={len(self._categories)}, topics={len(self)})"
