"""Single-topic lookup by route segments."""

from __future__ import annotations

from prepkb.domain.category import Category
from prepkb.domain.document import Document
from prepkb.storage.catalog import Catalog
from prepkb.utils import is_valid_slug


class NotFound:
    """Sentinel returned when a route does not match any catalog entry.

    It is falsy so callers can write ``if not result: ...``.
    """

    _instance: "NotFound | None" = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = NotFound()


class TopicResolver:
    """Resolves untrusted ``(category, topic)`` route values against a catalog.

    Lookups go through the catalog's in-memory index only; route values are
    never turned into filesystem paths.
    """

    def __init__(self, catalog: Catalog):
        self._catalog = catalog

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def resolve(self, category: object, slug: object) -> Document | NotFound:
        """Return the matching document or ``NOT_FOUND``.

        Args:
            category: Category route segment
            slug: Topic route segment

        Returns:
            Document, or ``NOT_FOUND`` for unknown or malformed input
        """
        if not is_valid_slug(category) or not is_valid_slug(slug):
            return NOT_FOUND
        document = self._catalog.get(category, slug)
        if document is None:
            return NOT_FOUND
        return document

    def resolve_category(self, slug: object) -> Category | NotFound:
        if not is_valid_slug(slug):
            return NOT_FOUND
        category = self._catalog.get_category(slug)
        if category is None:
            return NOT_FOUND
        return category
