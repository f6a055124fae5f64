"""Filesystem-backed document repository.

Walks the content tree, parses every topic file and builds a ``Catalog``.

Layout:
    content/topics/
        databases/                     - category "databases"
            sql-interview-questions.md - topic "sql-interview-questions"
        security/
            security-monitoring-interview-questions.md

This is the only module in the package that touches the filesystem.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Sequence

from tqdm import tqdm

from prepkb.domain.category import Category
from prepkb.domain.document import Document, TopicSummary
from prepkb.domain.metadata import TopicMetadata
from prepkb.errors import CatalogLoadError, DocumentParseError
from prepkb.parsing.frontmatter import parse_frontmatter
from prepkb.storage.catalog import Catalog, LoadStats
from prepkb.utils import is_valid_slug

logger = logging.getLogger(__name__)

SKIPPED_FILENAMES = {"readme.md"}


def _is_hidden(name: str) -> bool:
    return name.startswith(".") or name.startswith("_")


class DocumentRepository:
    """Discovers and parses topic files into a ``Catalog``.

    Per-file failures (malformed frontmatter, unreadable or non-UTF-8 files,
    invalid names) are skipped and recorded in ``Catalog.stats``. With
    ``strict=True`` the first such failure aborts the build with
    ``CatalogLoadError`` instead. Duplicate (category, slug) pairs always
    abort the build.
    """

    def __init__(
        self,
        root: str | Path,
        file_extensions: Iterable[str] = (".md",),
        strict: bool = False,
        category_order: Sequence[str] = (),
        category_titles: Mapping[str, str] | None = None,
        category_descriptions: Mapping[str, str] | None = None,
        show_progress: bool = False,
    ):
        """Initialize repository.

        Args:
            root: Content root; first-level subdirectories are categories
            file_extensions: File suffixes treated as topics
            strict: Fail the whole build on the first bad file
            category_order: Category slugs listed first, in this order
            category_titles: Display title overrides per category slug
            category_descriptions: Description overrides per category slug
            show_progress: Show a tqdm progress bar while parsing
        """
        self._root = Path(root)
        self._extensions = tuple(ext.lower() for ext in file_extensions)
        self._strict = strict
        self._category_order = tuple(category_order)
        self._category_titles = dict(category_titles or {})
        self._category_descriptions = dict(category_descriptions or {})
        self._show_progress = show_progress
        self._catalog: Catalog | None = None

    @classmethod
    def from_config(cls, config, show_progress: bool = False) -> "DocumentRepository":
        """Create a repository from an ``AppConfig``."""
        return cls(
            root=config.content.root,
            file_extensions=config.content.file_extensions,
            strict=config.content.strict,
            category_order=config.categories.order,
            category_titles=config.categories.titles,
            category_descriptions=config.categories.descriptions,
            show_progress=show_progress,
        )

    @property
    def root(self) -> Path:
        return self._root

    def load_all(self, root: str | Path | None = None) -> Catalog:
        """Walk the content tree and build a catalog.

        Args:
            root: Content root (defaults to the one given at construction)

        Returns:
            Catalog with every successfully parsed document

        Raises:
            CatalogLoadError: If the root is missing, or on any bad file in
                strict mode
            DuplicateTopicError: If two files map to the same (category, slug)
        """
        root = Path(root) if root is not None else self._root
        if not root.exists():
            raise CatalogLoadError(f"Content directory not found: {root}")
        if not root.is_dir():
            raise CatalogLoadError(f"Content path is not a directory: {root}")

        files = list(self._discover(root))
        documents: list[Document] = []
        errors: list[dict] = []

        iterator = tqdm(files, desc="Loading topics") if self._show_progress else files
        for path in iterator:
            rel_path = path.relative_to(root).as_posix()
            try:
                documents.append(self._load_document(path, rel_path))
            except (DocumentParseError, OSError, UnicodeDecodeError) as e:
                if self._strict:
                    raise CatalogLoadError(f"Failed to load {rel_path}: {e}") from e
                logger.warning("Skipping %s: %s", rel_path, e)
                errors.append({"path": rel_path, "error": str(e)})

        stats = LoadStats(
            total=len(files),
            loaded=len(documents),
            skipped=len(errors),
            errors=tuple(errors),
        )
        catalog = Catalog.from_documents(
            documents,
            category_order=self._category_order,
            category_titles=self._category_titles,
            category_descriptions=self._category_descriptions,
            stats=stats,
        )
        logger.info(
            "Loaded %d topics in %d categories from %s (%d skipped)",
            len(catalog),
            len(catalog.categories),
            root,
            stats.skipped,
        )
        self._catalog = catalog
        return catalog

    def get_categories(self) -> tuple[Category, ...]:
        """Return the categories of the last built catalog (building it if needed)."""
        return self._get_catalog().categories

    def get_all_topics(self) -> tuple[TopicSummary, ...]:
        """Return body-less summaries of every topic."""
        return self._get_catalog().all_topics()

    def _get_catalog(self) -> Catalog:
        if self._catalog is None:
            return self.load_all()
        return self._catalog

    def _discover(self, root: Path) -> Iterator[Path]:
        for path in sorted(root.rglob("*")):
            rel_parts = path.relative_to(root).parts
            if any(_is_hidden(part) for part in rel_parts):
                continue
            if not path.is_file() or path.suffix.lower() not in self._extensions:
                continue
            if len(rel_parts) < 2:
                logger.debug("Ignoring %s: not inside a category directory", path.name)
                continue
            if path.name.lower() in SKIPPED_FILENAMES:
                continue
            yield path

    def _load_document(self, path: Path, rel_path: str) -> Document:
        category = path.parent.name
        slug = path.stem
        if not is_valid_slug(category):
            raise DocumentParseError(f"invalid category name '{category}'")
        if not is_valid_slug(slug):
            raise DocumentParseError(f"invalid topic slug '{slug}'")

        logger.debug("Parsing %s", rel_path)
        text = path.read_text(encoding="utf-8")
        try:
            data, body = parse_frontmatter(text)
            metadata = TopicMetadata.from_frontmatter(data, slug)
        except DocumentParseError as e:
            raise DocumentParseError(str(e), path=rel_path) from e

        return Document(
            category=category,
            slug=slug,
            metadata=metadata,
            body=body,
            path=rel_path,
        )
