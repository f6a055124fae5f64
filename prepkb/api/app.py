"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prepkb.api.dependencies import (
    build_catalog_holder,
    get_catalog,
    get_catalog_holder,
    get_config,
)
from prepkb.api.routes import router
from prepkb.config import AppConfig
from prepkb.logging_utils import configure_logging
from prepkb.storage.cache import CatalogHolder
from prepkb.storage.catalog import Catalog

logger = logging.getLogger(__name__)


def create_app(
    config: AppConfig | None = None,
    catalog_holder: CatalogHolder | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    The catalog is built during startup, so a missing content root or a
    strict-mode parse failure stops the server from starting.

    Args:
        config: Application config (defaults to ``get_config()``)
        catalog_holder: Catalog holder to serve from (defaults to one built
            from the config)

    Returns:
        FastAPI: Configured application
    """
    explicit_config = config is not None
    if config is None:
        config = get_config()
    configure_logging(config.logging.level)

    holder = catalog_holder
    if holder is None and explicit_config:
        holder = build_catalog_holder(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the catalog on startup; a CatalogLoadError aborts startup."""
        logger.info("Serving content from %s", config.content.root)
        catalog = (holder or get_catalog_holder()).get()
        logger.info("Catalog ready: %r", catalog)
        yield

    app = FastAPI(
        title="Interview Prep Content API",
        description="Topic catalog, related topics and static routes for the content site",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if holder is not None:
        app.dependency_overrides[get_config] = lambda: config
        app.dependency_overrides[get_catalog_holder] = lambda: holder

    app.include_router(router, prefix="/api/v1")

    @app.get("/health")
    def health(catalog: Catalog = Depends(get_catalog)):
        """Health check endpoint."""
        return {"status": "healthy", "topics": len(catalog)}

    return app
