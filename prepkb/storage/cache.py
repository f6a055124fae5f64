"""Process-wide catalog holder with a build-once guarantee."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from prepkb.storage.catalog import Catalog

logger = logging.getLogger(__name__)


class CatalogHolder:
    """Lazily builds a catalog exactly once and shares it with every caller.

    The first ``get()`` runs the loader while holding a lock; concurrent
    callers wait for that build and receive the same instance instead of
    scanning the filesystem again. A failed build is not cached: the
    exception propagates and the next ``get()`` tries again.
    """

    def __init__(self, loader: Callable[[], Catalog]):
        self._loader = loader
        self._lock = threading.Lock()
        self._catalog: Catalog | None = None

    @property
    def loaded(self) -> bool:
        return self._catalog is not None

    def get(self) -> Catalog:
        catalog = self._catalog
        if catalog is not None:
            return catalog

        with self._lock:
            if self._catalog is None:
                logger.debug("Building catalog")
                self._catalog = self._loader()
            return self._catalog

    def reset(self) -> None:
        """Drop the cached catalog so the next ``get()`` rebuilds it."""
        with self._lock:
            self._catalog = None
