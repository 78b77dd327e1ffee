"""
Affirmation Engine - the daily draw state machine.

Screens:
    INITIAL  -- draw() -->  DRAWN  -- send() -->  RECEIVED
    RECEIVED: flip() toggles the face (only with a reply), save() adds to the collection
    any     -- reset() --> INITIAL

On every start, resolve_state() rebuilds the screen from the persisted draw
record and today's calendar day. Every failure degrades to INITIAL or a
placeholder quote; nothing is raised to the caller.
"""

import logging
from dataclasses import replace
from datetime import datetime, time
from typing import Callable, Optional, Union

from ..config import Config, localized
from ..errors import RecordDecodeError
from ..models import (
    NO_REPLY,
    CardFace,
    DailyDrawRecord,
    Language,
    Quote,
    Reply,
    ReplyPresent,
    SavedCard,
    StateSnapshot,
    ViewState,
)
from ..models.codec import decode_quote, decode_reply, encode_quote, encode_reply
from ..utils.dates import (
    format_time_of_day,
    format_timestamp,
    is_same_day,
    parse_time_of_day,
    parse_timestamp,
)
from .collection import CollectionStore
from .quote_pool import CatalogStatus, QuotePool
from .random_source import RandomSource
from .store import KeyValueStore

logger = logging.getLogger(__name__)

# Persisted keys
LAST_DRAW_DATE_KEY = "lastDrawDate"
DAILY_QUOTE_KEY = "dailyQuote"
UNIVERSE_REPLY_KEY = "universeReply"
SELECTED_LANGUAGE_KEY = "selectedLanguage"
REMINDER_TIME_KEY = "reminderTime"


class AffirmationEngine:
    """
    Owns today's card and the transitions between screens.

    Usage:
        engine = AffirmationEngine(store, QuotePool.from_files())
        snapshot = engine.resolve_state()
        if snapshot.state is ViewState.INITIAL:
            snapshot = engine.draw()
    """

    def __init__(
        self,
        store: KeyValueStore,
        pool: QuotePool,
        collection: Optional[CollectionStore] = None,
        rng: Optional[RandomSource] = None,
        clock: Optional[Callable[[], datetime]] = None,
        reply_chance: int = Config.REPLY_CHANCE,
    ):
        """
        Initialize the engine.

        Args:
            store: Key-value store holding the draw record and preferences
            pool: Quote and reply catalogs
            collection: Saved cards (defaults to one backed by ``store``)
            rng: Random source for the reply roll (defaults to the pool's)
            clock: Returns the current local time (defaults to datetime.now)
            reply_chance: Percent chance, 0-100, of a reply per send
        """
        self.store = store
        self.pool = pool
        self.collection = collection if collection is not None else CollectionStore(store)
        self.rng = rng if rng is not None else pool.rng
        self.clock = clock if clock is not None else datetime.now
        self.reply_chance = reply_chance

        self._state = ViewState.INITIAL
        self._record: Optional[DailyDrawRecord] = None
        self._saved = False
        self._face = CardFace.QUOTE
        self._language = self._read_language()

    # ==================== State ====================

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def record(self) -> Optional[DailyDrawRecord]:
        return self._record

    @property
    def language(self) -> Language:
        return self._language

    def snapshot(self) -> StateSnapshot:
        """Current state for the presentation layer. No I/O."""
        record = self._record
        return StateSnapshot(
            state=self._state,
            language=self._language,
            quote=record.quote if record else None,
            reply=record.universe_reply if record else NO_REPLY,
            sent=bool(record and record.quote.sent_to_universe),
            saved=self._saved,
            face=self._face,
        )

    def _enter_initial(self) -> None:
        self._state = ViewState.INITIAL
        self._record = None
        self._saved = False
        self._face = CardFace.QUOTE

    # ==================== Startup reconciliation ====================

    def resolve_state(self) -> StateSnapshot:
        """Rebuild the current screen from persisted state and today's date."""
        self._language = self._read_language()
        self._enter_initial()

        last_draw = parse_timestamp(self.store.get(LAST_DRAW_DATE_KEY))
        if last_draw is None:
            if self.store.get(LAST_DRAW_DATE_KEY) is not None:
                logger.warning("Ignoring undecodable %s", LAST_DRAW_DATE_KEY)
            return self.snapshot()

        if not is_same_day(last_draw, self.clock()):
            # New day: the stale record stays on disk until the next draw
            logger.info("Last draw on %s is not today; starting fresh", last_draw.date())
            return self.snapshot()

        try:
            quote = decode_quote(self.store.get(DAILY_QUOTE_KEY))
        except RecordDecodeError as e:
            logger.warning("Ignoring today's draw: %s", e)
            return self.snapshot()

        reply = self._read_reply() if quote.sent_to_universe else NO_REPLY

        self._record = DailyDrawRecord(quote=quote, last_draw_date=last_draw, universe_reply=reply)
        self._state = ViewState.RECEIVED if quote.sent_to_universe else ViewState.DRAWN
        self._saved = self.collection.contains(quote.chinese)
        self._face = CardFace.REPLY if reply else CardFace.QUOTE

        logger.info("Resumed today's draw in state %s", self._state.value)
        return self.snapshot()

    def _read_reply(self) -> Reply:
        blob = self.store.get(UNIVERSE_REPLY_KEY)
        if blob is None:
            return NO_REPLY
        try:
            return ReplyPresent(decode_reply(blob))
        except RecordDecodeError as e:
            logger.warning("Ignoring stored reply: %s", e)
            return NO_REPLY

    # ==================== Intents ====================

    def draw(self) -> StateSnapshot:
        """Pick today's quote. Only valid on the initial screen."""
        if self._state is not ViewState.INITIAL:
            logger.debug("draw() ignored in state %s", self._state.value)
            return self.snapshot()

        quote = self.pool.draw_quote()
        if quote is None:
            quote = self._placeholder_quote()
        quote = replace(quote, sent_to_universe=False)

        now = self.clock()
        self.store.set(LAST_DRAW_DATE_KEY, format_timestamp(now))
        self.store.set(DAILY_QUOTE_KEY, encode_quote(quote))
        self.store.delete(UNIVERSE_REPLY_KEY)

        self._record = DailyDrawRecord(quote=quote, last_draw_date=now)
        self._state = ViewState.DRAWN
        self._saved = self.collection.contains(quote.chinese)
        self._face = CardFace.QUOTE

        logger.info("Drew quote: %s", quote.chinese)
        return self.snapshot()

    def _placeholder_quote(self) -> Quote:
        key = "failed_to_load" if self.pool.quote_status is CatalogStatus.MALFORMED else "file_not_found"
        logger.warning("Quote catalog unavailable (%s); using placeholder", self.pool.quote_status.value)
        return Quote(
            chinese=localized(key, Language.CHINESE),
            english=localized(key, Language.ENGLISH),
        )

    def send(self) -> StateSnapshot:
        """Send today's card to the universe; maybe receive a reply."""
        if self._state is not ViewState.DRAWN or self._record is None:
            logger.debug("send() ignored in state %s", self._state.value)
            return self.snapshot()

        quote = self._record.quote.mark_sent()
        reply: Reply = NO_REPLY

        roll = self.rng.randint(1, 100)
        if roll <= self.reply_chance:
            drawn = self.pool.draw_reply()
            if drawn is not None:
                reply = ReplyPresent(drawn)
            else:
                logger.warning("Reply granted but the reply catalog is empty")

        self.store.set(DAILY_QUOTE_KEY, encode_quote(quote))
        if isinstance(reply, ReplyPresent):
            self.store.set(UNIVERSE_REPLY_KEY, encode_reply(reply.value))
        else:
            self.store.delete(UNIVERSE_REPLY_KEY)

        self._record = replace(self._record, quote=quote, universe_reply=reply)
        self._state = ViewState.RECEIVED
        self._face = CardFace.REPLY if reply else CardFace.QUOTE

        logger.info("Sent to the universe (roll=%d, reply=%s)", roll, bool(reply))
        return self.snapshot()

    def flip(self) -> StateSnapshot:
        """Toggle between quote and reply. No-op without a reply."""
        if self._state is not ViewState.RECEIVED or self._record is None:
            return self.snapshot()
        if not isinstance(self._record.universe_reply, ReplyPresent):
            return self.snapshot()

        self._face = CardFace.QUOTE if self._face is CardFace.REPLY else CardFace.REPLY
        return self.snapshot()

    def save(self) -> bool:
        """Save today's card to the collection. Returns True if it was added."""
        if self._state is not ViewState.RECEIVED or self._record is None:
            logger.debug("save() ignored in state %s", self._state.value)
            return False

        card = SavedCard(
            date=self.clock(),
            quote=self._record.quote,
            universe_reply=self._record.universe_reply,
        )
        added = self.collection.append(card)
        self._saved = True
        if added:
            logger.info("Saved card %s", card.id)
        return added

    def reset(self) -> StateSnapshot:
        """Erase every persisted key and the collection."""
        self.collection.clear()
        self.store.clear()

        self._language = Language.default()
        self._enter_initial()
        logger.info("All data reset")
        return self.snapshot()

    # ==================== Preferences ====================

    def _read_language(self) -> Language:
        return Language.parse(self.store.get(SELECTED_LANGUAGE_KEY))

    def set_language(self, language: Union[Language, str]) -> StateSnapshot:
        self._language = Language.parse(language)
        self.store.set(SELECTED_LANGUAGE_KEY, self._language.value)
        return self.snapshot()

    def reminder_time(self) -> time:
        """Saved daily reminder time, 09:00 when unset or unreadable."""
        value = parse_time_of_day(self.store.get(REMINDER_TIME_KEY))
        if value is None:
            return parse_time_of_day(Config.DEFAULT_REMINDER)
        return value

    def set_reminder_time(self, value: Union[time, str]) -> time:
        """Persist the reminder time. Unparseable strings keep the current value."""
        if isinstance(value, str):
            parsed = parse_time_of_day(value)
            if parsed is None:
                logger.warning("Ignoring invalid reminder time %r", value)
                return self.reminder_time()
            value = parsed
        self.store.set(REMINDER_TIME_KEY, format_time_of_day(value))
        return value
