"""Frontmatter splitting for markdown topics.

Format:
---
title: SQL Interview Questions
difficulty: intermediate
estimatedReadTime: 20
tags: [sql, performance]
lastUpdated: 2024-01-15
---
# Markdown body
"""

from __future__ import annotations

import re
from typing import Any

import yaml

from prepkb.errors import DocumentParseError

_OPEN_RE = re.compile(r"\A---[ \t]*\r?\n")
_CLOSE_RE = re.compile(r"^(?:---|\.\.\.)[ \t]*\r?$", re.MULTILINE)


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a raw markdown file into frontmatter metadata and body.

    Args:
        text: Raw file content

    Returns:
        Tuple of (metadata dict, body). Files without a frontmatter block
        return an empty dict and the unchanged text.

    Raises:
        DocumentParseError: If the block is unterminated, is not valid YAML,
            or does not contain a mapping

    Example:
        >>> meta, body = parse_frontmatter("---\\ntitle: Hi\\n---\\n# Hi\\n")
        >>> meta["title"]
        'Hi'
        >>> body
        '# Hi\\n'
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    opening = _OPEN_RE.match(text)
    if not opening:
        return {}, text

    closing = _CLOSE_RE.search(text, opening.end())
    if not closing:
        raise DocumentParseError("frontmatter block is not terminated")

    raw = text[opening.end():closing.start()]
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise DocumentParseError(f"invalid frontmatter YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DocumentParseError(
            f"frontmatter must be a mapping, got {type(data).__name__}"
        )

    body = text[closing.end():].lstrip("\r\n")
    return data, body
