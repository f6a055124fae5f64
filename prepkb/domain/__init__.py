"""Domain entities for the content catalog.

This module contains immutable data structures that represent the core
concepts of the site: topics (documents), their metadata and categories.
"""

from prepkb.domain.metadata import Difficulty, TopicMetadata
from prepkb.domain.document import Document, TopicSummary
from prepkb.domain.category import Category

__all__ = ["Difficulty", "TopicMetadata", "Document", "TopicSummary", "Category"]
