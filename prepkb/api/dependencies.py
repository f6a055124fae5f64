"""FastAPI dependency injection for config and the catalog."""

from __future__ import annotations

import os
from functools import lru_cache

from fastapi import Depends, HTTPException

from prepkb.config import AppConfig, apply_env_overrides, load_config
from prepkb.errors import CatalogLoadError
from prepkb.storage.cache import CatalogHolder
from prepkb.storage.catalog import Catalog
from prepkb.storage.repository import DocumentRepository


@lru_cache
def get_config() -> AppConfig:
    """Get application configuration.

    Loads configuration from the file named by the PREPKB_CONFIG env var,
    or uses defaults when it is unset.

    Returns:
        AppConfig: Application configuration
    """
    config_path = os.getenv("PREPKB_CONFIG")
    config = load_config(config_path)
    return apply_env_overrides(config)


def build_catalog_holder(config: AppConfig) -> CatalogHolder:
    repository = DocumentRepository.from_config(config)
    return CatalogHolder(repository.load_all)


@lru_cache
def get_catalog_holder() -> CatalogHolder:
    """Process-wide catalog holder, created on first use."""
    return build_catalog_holder(get_config())


def get_catalog(holder: CatalogHolder = Depends(get_catalog_holder)) -> Catalog:
    """Return the shared catalog, building it on the first request.

    Raises:
        HTTPException: 503 if the content tree cannot be loaded
    """
    try:
        return holder.get()
    except CatalogLoadError as e:
        raise HTTPException(status_code=503, detail=f"Content catalog unavailable: {e}")
