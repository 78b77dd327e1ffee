"""Services layer: persistence, catalogs, collection and the draw engine."""

from .store import KeyValueStore, InMemoryStore, JSONFileStore
from .random_source import RandomSource, SystemRandomSource
from .quote_pool import QuotePool, CatalogStatus, read_catalog
from .collection import CollectionStore
from .engine import AffirmationEngine

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JSONFileStore",
    "RandomSource",
    "SystemRandomSource",
    "QuotePool",
    "CatalogStatus",
    "read_catalog",
    "CollectionStore",
    "AffirmationEngine",
]
