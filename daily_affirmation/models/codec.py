"""
Record codec - conversion between models and persisted blobs.

Every record is stored as a JSON string so that a store holds opaque blobs,
one per key. Field names on disk stay camelCase.
"""

import json
from typing import Any, Dict, List, Optional

from ..errors import RecordDecodeError
from ..utils.dates import format_timestamp, parse_timestamp
from .card import (
    NO_REPLY,
    Quote,
    Reply,
    ReplyPresent,
    SavedCard,
    UniverseReply,
)


def _load_json(key: str, blob: Any) -> Any:
    if not isinstance(blob, (str, bytes, bytearray)):
        raise RecordDecodeError(key, f"expected a JSON string, got {type(blob).__name__}")
    try:
        return json.loads(blob)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RecordDecodeError(key, str(e)) from e


def _require_text(key: str, data: Any, field: str) -> str:
    if not isinstance(data, dict):
        raise RecordDecodeError(key, "expected an object")
    value = data.get(field)
    if not isinstance(value, str):
        raise RecordDecodeError(key, f"missing text field '{field}'")
    return value


# ==================== Quote ====================

def quote_to_dict(quote: Quote) -> Dict[str, Any]:
    return {
        "chinese": quote.chinese,
        "english": quote.english,
        "sentToUniverse": quote.sent_to_universe,
    }


def quote_from_dict(data: Any, key: str = "dailyQuote") -> Quote:
    chinese = _require_text(key, data, "chinese")
    english = _require_text(key, data, "english")
    sent = data.get("sentToUniverse", False)
    if not isinstance(sent, bool):
        raise RecordDecodeError(key, "sentToUniverse must be a boolean")
    return Quote(chinese=chinese, english=english, sent_to_universe=sent)


def encode_quote(quote: Quote) -> str:
    return json.dumps(quote_to_dict(quote), ensure_ascii=False)


def decode_quote(blob: Any) -> Quote:
    return quote_from_dict(_load_json("dailyQuote", blob))


# ==================== UniverseReply ====================

def reply_to_dict(reply: UniverseReply) -> Dict[str, str]:
    return {"chinese": reply.chinese, "english": reply.english}


def reply_from_dict(data: Any, key: str = "universeReply") -> UniverseReply:
    return UniverseReply(
        chinese=_require_text(key, data, "chinese"),
        english=_require_text(key, data, "english"),
    )


def encode_reply(reply: UniverseReply) -> str:
    return json.dumps(reply_to_dict(reply), ensure_ascii=False)


def decode_reply(blob: Any) -> UniverseReply:
    return reply_from_dict(_load_json("universeReply", blob))


# ==================== SavedCard ====================

def saved_card_to_dict(card: SavedCard) -> Dict[str, Any]:
    reply: Optional[Dict[str, str]] = None
    if isinstance(card.universe_reply, ReplyPresent):
        reply = reply_to_dict(card.universe_reply.value)
    return {
        "id": card.id,
        "date": format_timestamp(card.date),
        "quote": quote_to_dict(card.quote),
        "universeReply": reply,
    }


def saved_card_from_dict(data: Any) -> SavedCard:
    key = "savedCards"
    if not isinstance(data, dict):
        raise RecordDecodeError(key, "card entry must be an object")

    card_id = data.get("id")
    if not isinstance(card_id, str) or not card_id:
        raise RecordDecodeError(key, "card entry has no id")

    saved_at = parse_timestamp(data.get("date"))
    if saved_at is None:
        raise RecordDecodeError(key, f"bad date for card {card_id}")

    raw_reply = data.get("universeReply")
    reply: Reply = NO_REPLY
    if raw_reply is not None:
        reply = ReplyPresent(reply_from_dict(raw_reply, key))

    return SavedCard(
        id=card_id,
        date=saved_at,
        quote=quote_from_dict(data.get("quote"), key),
        universe_reply=reply,
    )


def encode_saved_cards(cards: List[SavedCard]) -> str:
    return json.dumps([saved_card_to_dict(c) for c in cards], ensure_ascii=False)


def decode_saved_cards_raw(blob: Any) -> List[Any]:
    """Parse the outer array only; entries are decoded one by one by the caller."""
    entries = _load_json("savedCards", blob)
    if not isinstance(entries, list):
        raise RecordDecodeError("savedCards", "expected an array")
    return entries
