from prepkb.storage.catalog import Catalog, LoadStats
from prepkb.storage.cache import CatalogHolder
from prepkb.storage.repository import DocumentRepository

__all__ = ["Catalog", "LoadStats", "CatalogHolder", "DocumentRepository"]
