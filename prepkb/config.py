from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any
import json
import os
import re

import yaml


DEFAULT_RESERVED_ROUTES = ["demo", "progress", "quick-reference", "search", "flashcards"]


@dataclass(frozen=True)
class ContentConfig:
    root: str = "content/topics"
    file_extensions: list[str] = field(default_factory=lambda: [".md"])
    strict: bool = False


@dataclass(frozen=True)
class CategoriesConfig:
    order: list[str] = field(default_factory=list)
    titles: dict[str, str] = field(default_factory=dict)
    descriptions: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RelatedConfig:
    limit: int = 5
    same_category: int = 3
    shared_tag: int = 2
    same_difficulty: int = 1


@dataclass(frozen=True)
class RoutesConfig:
    reserved: list[str] = field(default_factory=lambda: list(DEFAULT_RESERVED_ROUTES))


@dataclass(frozen=True)
class APIConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    content: ContentConfig = field(default_factory=ContentConfig)
    categories: CategoriesConfig = field(default_factory=CategoriesConfig)
    related: RelatedConfig = field(default_factory=RelatedConfig)
    routes: RoutesConfig = field(default_factory=RoutesConfig)
    api: APIConfig = field(default_factory=APIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS = {
    "content": ContentConfig,
    "categories": CategoriesConfig,
    "related": RelatedConfig,
    "routes": RoutesConfig,
    "api": APIConfig,
    "logging": LoggingConfig,
}

_env_re = re.compile(r"\$\{([^:}]+):-?([^}]*)\}")


def _expand_env_var(value: str) -> str:
    """Expand environment variables in the form ${VAR:-default}."""

    def replace_env(match):
        return os.environ.get(match.group(1), match.group(2))

    return _env_re.sub(replace_env, value)


def _expand_env(value):
    """Recursively expand env vars in strings inside dicts/lists."""
    if isinstance(value, str):
        return _expand_env_var(value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def _coalesce(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _coalesce(merged[key], value)
        else:
            merged[key] = value
    return merged


def _build_section(name: str, cls: type, data: Any):
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    allowed = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValueError(f"Unknown keys in config section '{name}': {', '.join(unknown)}")
    return cls(**data)


def _from_dict(data: dict[str, Any]) -> AppConfig:
    unknown = sorted(set(data) - set(_SECTIONS))
    if unknown:
        raise ValueError(f"Unknown config sections: {', '.join(unknown)}")

    config = AppConfig(
        **{name: _build_section(name, cls, data.get(name)) for name, cls in _SECTIONS.items()}
    )
    _validate(config)
    return config


def _validate(config: AppConfig) -> None:
    related = config.related
    for name in ("same_category", "shared_tag", "same_difficulty"):
        if getattr(related, name) < 0:
            raise ValueError(f"related.{name} must not be negative")
    if related.limit < 0:
        raise ValueError("related.limit must not be negative")
    if not config.content.file_extensions:
        raise ValueError("content.file_extensions must not be empty")


def load_config(path: str | Path | None) -> AppConfig:
    """Load configuration from a YAML or JSON file.

    Values are deep-merged over the defaults, so a file only needs the keys
    it changes. ``${VAR:-default}`` references are expanded from the
    environment.

    Args:
        path: Config file path, or None for defaults

    Returns:
        AppConfig instance

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file contains unknown sections or keys
    """
    if path is None:
        return AppConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".json"}:
        data = json.loads(raw)
    else:
        data = yaml.safe_load(raw) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping: {path}")

    merged = _coalesce(asdict(AppConfig()), _expand_env(data))
    return _from_dict(merged)


def apply_env_overrides(config: AppConfig) -> AppConfig:
    env_root = os.getenv("PREPKB_CONTENT_DIR")
    if env_root:
        content = ContentConfig(
            root=env_root,
            file_extensions=config.content.file_extensions,
            strict=config.content.strict,
        )
        return AppConfig(
            content=content,
            categories=config.categories,
            related=config.related,
            routes=config.routes,
            api=config.api,
            logging=config.logging,
        )
    return config

