"""Daily Affirmation - draw a card a day, send it to the universe"""

__version__ = "1.0.0"
__author__ = "Daily Affirmation Team"

from .config import Config, LANG_CONFIG
from .models import Language, Quote, SavedCard, StateSnapshot, UniverseReply, ViewState
from .services import (
    AffirmationEngine,
    CollectionStore,
    InMemoryStore,
    JSONFileStore,
    QuotePool,
)


def create_engine(store_path=None, quotes_path=None, replies_path=None):
    """Build an engine wired to the on-disk store and the bundled catalogs."""
    store = JSONFileStore(store_path)
    pool = QuotePool.from_files(quotes_path, replies_path)
    return AffirmationEngine(store, pool)


__all__ = [
    'AffirmationEngine',
    'CollectionStore',
    'Config',
    'InMemoryStore',
    'JSONFileStore',
    'LANG_CONFIG',
    'Language',
    'Quote',
    'QuotePool',
    'SavedCard',
    'StateSnapshot',
    'UniverseReply',
    'ViewState',
    'create_engine',
]
