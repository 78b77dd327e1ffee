"""Global settings and configuration."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load from project root
_env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(_env_path)

_PACKAGE_DIR = Path(__file__).parent.parent.resolve()

logger = logging.getLogger(__name__)

DEFAULT_REPLY_CHANCE = 20


def parse_reply_chance(value: Optional[str], default: int = DEFAULT_REPLY_CHANCE) -> int:
    """Percent chance from an env string; anything but an integer in 0..100 is the default."""
    if value is None or not value.strip():
        return default
    try:
        chance = int(value.strip())
    except ValueError:
        logger.warning("Ignoring non-integer AFFIRM_REPLY_CHANCE=%r", value)
        return default
    if not 0 <= chance <= 100:
        logger.warning("Ignoring out-of-range AFFIRM_REPLY_CHANCE=%r", value)
        return default
    return chance


@dataclass
class Config:
    """Application-wide configuration."""

    # Reply odds: a roll in 1..100 grants a reply iff roll <= REPLY_CHANCE
    REPLY_CHANCE: int = parse_reply_chance(os.environ.get("AFFIRM_REPLY_CHANCE"))

    # Shown to the user as a reminder only
    COLLECTION_CAPACITY: int = 1000

    DEFAULT_REMINDER: str = "09:00"

    LOG_LEVEL: str = os.environ.get("AFFIRM_LOG_LEVEL", "WARNING")

    # Bundled catalogs ship inside the package
    DATA_DIR: str = str(_PACKAGE_DIR / "data")
    QUOTES_FILE: str = os.environ.get("AFFIRM_QUOTES_FILE", str(Path(DATA_DIR) / "quotes.json"))
    REPLIES_FILE: str = os.environ.get(
        "AFFIRM_REPLIES_FILE", str(Path(DATA_DIR) / "universe_replies.json")
    )

    # Key-value store backing file (user state)
    STORE_FILE: str = os.environ.get(
        "AFFIRM_STORE_FILE", str(Path.home() / ".daily_affirmation" / "store.json")
    )
