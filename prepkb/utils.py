from __future__ import annotations

import re


_slug_re = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*")


def is_valid_slug(value: object) -> bool:
    if not isinstance(value, str) or not value:
        return False
    if ".." in value:
        return False
    return _slug_re.fullmatch(value) is not None


def title_from_slug(slug: str) -> str:
    words = [word for word in slug.split("-") if word]
    return " ".join(word[:1].upper() + word[1:] for word in words)
