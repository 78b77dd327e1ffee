"""
Quote Pool - read-only catalogs of quotes and universe replies.

Catalogs are loaded once from bundled JSON arrays of ``{chinese, english}``
objects. A catalog that is missing or malformed leaves that side of the pool
empty; draws then return ``None`` and the caller substitutes a placeholder.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..config import Config
from ..errors import CatalogMissingError, RecordDecodeError
from ..models import Quote, UniverseReply
from .random_source import RandomSource, SystemRandomSource

logger = logging.getLogger(__name__)


class CatalogStatus(Enum):
    """Outcome of loading one catalog."""
    LOADED = "loaded"
    MISSING = "missing"
    MALFORMED = "malformed"


def read_catalog(path: str) -> List[Tuple[str, str]]:
    """
    Read a catalog file into (chinese, english) pairs.

    Entries without both text fields are skipped.

    Raises:
        CatalogMissingError: the file does not exist
        RecordDecodeError: the file is not a JSON array
    """
    catalog_path = Path(path)
    if not catalog_path.is_file():
        raise CatalogMissingError(str(catalog_path))

    try:
        with open(catalog_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        raise RecordDecodeError(catalog_path.name, str(e)) from e

    if not isinstance(data, list):
        raise RecordDecodeError(catalog_path.name, "catalog must be a JSON array")

    entries = []
    for item in data:
        if not isinstance(item, dict):
            continue
        chinese, english = item.get("chinese"), item.get("english")
        if isinstance(chinese, str) and isinstance(english, str):
            entries.append((chinese, english))
    return entries


def _load(path: str) -> Tuple[List[Tuple[str, str]], CatalogStatus]:
    try:
        return read_catalog(path), CatalogStatus.LOADED
    except CatalogMissingError as e:
        logger.warning("%s", e)
        return [], CatalogStatus.MISSING
    except RecordDecodeError as e:
        logger.warning("Error loading catalog: %s", e)
        return [], CatalogStatus.MALFORMED


class QuotePool:
    """
    Supplies uniform random quotes and replies.

    Usage:
        pool = QuotePool.from_files()
        quote = pool.draw_quote()   # None when the catalog is unavailable
    """

    def __init__(
        self,
        quotes: Sequence[Quote],
        replies: Sequence[UniverseReply],
        rng: Optional[RandomSource] = None,
        quote_status: CatalogStatus = CatalogStatus.LOADED,
        reply_status: CatalogStatus = CatalogStatus.LOADED,
    ):
        self._quotes: Tuple[Quote, ...] = tuple(quotes)
        self._replies: Tuple[UniverseReply, ...] = tuple(replies)
        self.rng = rng if rng is not None else SystemRandomSource()
        self.quote_status = quote_status
        self.reply_status = reply_status

    @classmethod
    def from_files(
        cls,
        quotes_path: Optional[str] = None,
        replies_path: Optional[str] = None,
        rng: Optional[RandomSource] = None,
    ) -> "QuotePool":
        """Load both catalogs. Never raises."""
        quote_rows, quote_status = _load(quotes_path or Config.QUOTES_FILE)
        reply_rows, reply_status = _load(replies_path or Config.REPLIES_FILE)
        logger.info("Loaded %d quotes and %d replies", len(quote_rows), len(reply_rows))
        return cls(
            quotes=[Quote(chinese=c, english=e) for c, e in quote_rows],
            replies=[UniverseReply(chinese=c, english=e) for c, e in reply_rows],
            rng=rng,
            quote_status=quote_status,
            reply_status=reply_status,
        )

    @property
    def quote_count(self) -> int:
        return len(self._quotes)

    @property
    def reply_count(self) -> int:
        return len(self._replies)

    @property
    def has_replies(self) -> bool:
        return bool(self._replies)

    def draw_quote(self) -> Optional[Quote]:
        """Uniformly random quote with ``sent_to_universe=False``, or None."""
        if not self._quotes:
            return None
        return self.rng.choice(self._quotes)

    def draw_reply(self) -> Optional[UniverseReply]:
        """Uniformly random reply, or None."""
        if not self._replies:
            return None
        return self.rng.choice(self._replies)

    def quotes(self) -> List[Quote]:
        return list(self._quotes)

    def replies(self) -> List[UniverseReply]:
        return list(self._replies)

    def __repr__(self) -> str:
        return f"QuotePool(quotes={self.quote_count}, replies={self.reply_count})"
