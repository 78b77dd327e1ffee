"""
Collection Store - the user's saved cards.

The whole collection is persisted as one serialized sequence under
``savedCards``. Entries are unique per quote text (``quote.chinese``) and kept
in save order; listing returns them most recent first.
"""

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from ..config import Config, localized
from ..errors import RecordDecodeError
from ..models import Language, ReplyPresent, SavedCard
from ..models.codec import decode_saved_cards_raw, encode_saved_cards, saved_card_from_dict
from ..utils.dates import format_timestamp
from .store import KeyValueStore

logger = logging.getLogger(__name__)

SAVED_CARDS_KEY = "savedCards"

EXPORT_COLUMNS = [
    "id", "date", "chinese", "english", "reply_chinese", "reply_english",
]


class CollectionStore:
    """
    Append-only, de-duplicated list of saved cards.

    The capacity is a soft limit: it drives the reminder text but never blocks
    an insertion.

    Usage:
        collection = CollectionStore(store)
        added = collection.append(card)
        cards = collection.list()  # newest first
    """

    def __init__(self, store: KeyValueStore, capacity: int = Config.COLLECTION_CAPACITY):
        self.store = store
        self.capacity = capacity

    def _read(self) -> List[SavedCard]:
        """Decode the persisted sequence in save order, skipping bad entries."""
        blob = self.store.get(SAVED_CARDS_KEY)
        if blob is None:
            return []

        try:
            entries = decode_saved_cards_raw(blob)
        except RecordDecodeError as e:
            logger.warning("Ignoring saved cards: %s", e)
            return []

        cards = []
        for entry in entries:
            try:
                cards.append(saved_card_from_dict(entry))
            except RecordDecodeError as e:
                logger.warning("Skipping saved card: %s", e)
        return cards

    def _write(self, cards: List[SavedCard]) -> None:
        self.store.set(SAVED_CARDS_KEY, encode_saved_cards(cards))

    def append(self, card: SavedCard) -> bool:
        """Add card unless one with the same quote text exists. Returns True if added."""
        cards = self._read()
        if any(existing.key == card.key for existing in cards):
            return False

        cards.append(card)
        self._write(cards)
        if len(cards) > self.capacity:
            logger.info("Collection holds %d cards, above the %d reminder", len(cards), self.capacity)
        return True

    def list(self) -> List[SavedCard]:
        """All saved cards, most recent first."""
        return list(reversed(self._read()))

    def contains(self, quote_text: str) -> bool:
        """Exact (case and whitespace sensitive) match on the primary-language text."""
        return any(card.key == quote_text for card in self._read())

    def count(self) -> int:
        return len(self._read())

    def __len__(self) -> int:
        return self.count()

    def clear(self) -> None:
        self.store.delete(SAVED_CARDS_KEY)

    @property
    def is_over_capacity(self) -> bool:
        return self.count() > self.capacity

    def capacity_reminder(self, language: Language = Language.CHINESE) -> str:
        """Reminder text such as '12/1000 cards saved'; the empty-collection text when empty."""
        count = self.count()
        if count == 0:
            return localized("collection_empty", language)
        return localized("collection_reminder", language).format(count=count, capacity=self.capacity)

    # ==================== Export ====================

    def to_dataframe(self) -> pd.DataFrame:
        """Collection as a table, newest first."""
        rows = []
        for card in self.list():
            reply = card.universe_reply.value if isinstance(card.universe_reply, ReplyPresent) else None
            rows.append({
                "id": card.id,
                "date": format_timestamp(card.date),
                "chinese": card.quote.chinese,
                "english": card.quote.english,
                "reply_chinese": reply.chinese if reply else "",
                "reply_english": reply.english if reply else "",
            })
        return pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    def export_csv(self, csv_path: str, sep: Optional[str] = None) -> bool:
        """Export the collection to a CSV file. Returns True on success."""
        try:
            path = Path(csv_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self.to_dataframe().to_csv(path, sep=sep or ",", index=False, encoding="utf-8-sig")
            return True
        except OSError as e:
            logger.error("Error exporting collection: %s", e)
            return False
