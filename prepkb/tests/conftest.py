"""Pytest configuration for catalog tests."""

import sys
from pathlib import Path

import pytest

# Add repository root to path for imports
repo_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(repo_root))


def write_topic(root: Path, category: str, slug: str, frontmatter: str = "", body: str = "# Body\n") -> Path:
    """Write a topic file ``root/category/slug.md`` and return its path."""
    directory = root / category
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{slug}.md"
    if frontmatter:
        text = f"---\n{frontmatter.strip()}\n---\n\n{body}"
    else:
        text = body
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def content_root(tmp_path):
    """Content tree with two categories and three topics."""
    root = tmp_path / "topics"
    write_topic(
        root,
        "databases",
        "sql-interview-questions",
        """
title: SQL Interview Questions
difficulty: intermediate
estimatedReadTime: 20
tags: [sql, performance]
lastUpdated: 2024-01-15
""",
        "# SQL\n\nJoins, indexes and transactions.\n",
    )
    write_topic(
        root,
        "databases",
        "nosql-interview-questions",
        """
title: NoSQL Interview Questions
difficulty: advanced
estimatedReadTime: 25
tags: [nosql, performance]
""",
    )
    write_topic(
        root,
        "security",
        "security-monitoring-interview-questions",
        """
title: Security Monitoring Interview Questions
difficulty: intermediate
tags: [security]
""",
    )
    return root


@pytest.fixture
def catalog(content_root):
    from prepkb.storage.repository import DocumentRepository

    return DocumentRepository(content_root).load_all()
