"""Data models for Daily Affirmation."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Union
import uuid


class Language(Enum):
    """Display language preference. Values are the persisted raw strings."""
    CHINESE = "中文"
    ENGLISH = "English"
    BILINGUAL = "双语"

    @classmethod
    def default(cls) -> "Language":
        return cls.CHINESE

    @classmethod
    def parse(cls, value: Union["Language", str, None]) -> "Language":
        """Accept an enum, a raw value or a member name; anything else is the default."""
        if isinstance(value, Language):
            return value
        if isinstance(value, str):
            for member in cls:
                if value == member.value or value.upper() == member.name:
                    return member
        return cls.default()


class ViewState(Enum):
    """Mutually exclusive screens of the daily draw."""
    INITIAL = "initial"
    DRAWN = "drawn"
    RECEIVED = "received"


class CardFace(Enum):
    QUOTE = "quote"
    REPLY = "reply"


@dataclass(frozen=True)
class Quote:
    """A catalog affirmation plus today's sent flag."""

    chinese: str
    english: str
    sent_to_universe: bool = False

    def mark_sent(self) -> "Quote":
        return replace(self, sent_to_universe=True)

    def text(self, language: Language) -> str:
        return _render(self.chinese, self.english, language)


@dataclass(frozen=True)
class UniverseReply:
    chinese: str
    english: str

    def text(self, language: Language) -> str:
        return _render(self.chinese, self.english, language)


class NoReply:
    """Marker for a draw that has no universe reply attached."""

    _instance: Optional["NoReply"] = None

    def __new__(cls) -> "NoReply":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    value = None

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_REPLY"


NO_REPLY = NoReply()


@dataclass(frozen=True)
class ReplyPresent:
    value: UniverseReply

    def __bool__(self) -> bool:
        return True


Reply = Union[NoReply, ReplyPresent]


@dataclass(frozen=True)
class DailyDrawRecord:
    """Today's draw. A new draw overwrites the previous record."""

    quote: Quote
    last_draw_date: datetime
    universe_reply: Reply = NO_REPLY


@dataclass(frozen=True)
class SavedCard:
    """A collection member. Identity for de-duplication is ``quote.chinese``."""

    date: datetime
    quote: Quote
    universe_reply: Reply = NO_REPLY
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def key(self) -> str:
        return self.quote.chinese

    @property
    def front_face(self) -> CardFace:
        # Saved cards open on the reply when one was granted
        return CardFace.REPLY if self.universe_reply else CardFace.QUOTE


@dataclass(frozen=True)
class StateSnapshot:
    """Everything the presentation layer needs to render one screen."""

    state: ViewState
    language: Language
    quote: Optional[Quote] = None
    reply: Reply = NO_REPLY
    sent: bool = False
    saved: bool = False
    face: CardFace = CardFace.QUOTE

    def front_text(self) -> str:
        """Text of the card's current front face, or '' before a draw."""
        if self.face is CardFace.REPLY and isinstance(self.reply, ReplyPresent):
            return self.reply.value.text(self.language)
        if self.quote is None:
            return ""
        return self.quote.text(self.language)


def _render(chinese: str, english: str, language: Language) -> str:
    if language is Language.ENGLISH:
        return english
    if language is Language.BILINGUAL:
        return f"{chinese}\n{english}"
    return chinese
