"""Data models for Daily Affirmation."""

from .card import (
    NO_REPLY,
    CardFace,
    DailyDrawRecord,
    Language,
    NoReply,
    Quote,
    Reply,
    ReplyPresent,
    SavedCard,
    StateSnapshot,
    UniverseReply,
    ViewState,
)

__all__ = [
    'NO_REPLY',
    'CardFace',
    'DailyDrawRecord',
    'Language',
    'NoReply',
    'Quote',
    'Reply',
    'ReplyPresent',
    'SavedCard',
    'StateSnapshot',
    'UniverseReply',
    'ViewState',
]
