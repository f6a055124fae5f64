"""Exception hierarchy for the content catalog."""

from __future__ import annotations


class PrepKBError(Exception):
    """Base class for catalog errors."""


class CatalogLoadError(PrepKBError):
    """Raised when the catalog cannot be built at all.

    This is fatal: the site must not start (or the build must not finish)
    with a partial catalog.
    """


class DuplicateTopicError(CatalogLoadError):
    """Raised when two files map to the same (category, slug) pair."""

    def __init__(self, key: tuple[str, str], paths: list[str]):
        self.key = key
        self.paths = paths
        category, slug = key
        super().__init__(
            f"Duplicate topic '{category}/{slug}' defined by: {', '.join(paths)}"
        )


class DocumentParseError(PrepKBError, ValueError):
    """Raised when a single document has a malformed metadata block."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
