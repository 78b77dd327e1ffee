"""Shared fixtures for the engine, store and collection tests."""

import json
from datetime import datetime, timedelta
from typing import List, Sequence

import pytest

from daily_affirmation.models import Quote, UniverseReply
from daily_affirmation.services import (
    AffirmationEngine,
    InMemoryStore,
    QuotePool,
    RandomSource,
    SystemRandomSource,
)

QUOTES = [
    Quote(chinese="我值得被温柔以待。", english="I deserve to be treated with kindness."),
    Quote(chinese="小小的进步也是进步。", english="Small steps are still steps forward."),
    Quote(chinese="此刻，我是安全的。", english="In this moment, I am safe."),
]

REPLIES = [
    UniverseReply(chinese="宇宙听见了你。", english="The universe has heard you."),
    UniverseReply(chinese="好运已经悄悄出发。", english="Good fortune has quietly set out toward you."),
]


class FixedClock:
    """Callable clock the tests can move forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class ScriptedRandom(RandomSource):
    """Returns queued randint rolls and picks catalog entries by queued index."""

    def __init__(self, rolls: Sequence[int] = (), picks: Sequence[int] = ()):
        self.rolls: List[int] = list(rolls)
        self.picks: List[int] = list(picks)

    def choice(self, items):
        index = self.picks.pop(0) if self.picks else 0
        return items[index]

    def randint(self, low, high):
        roll = self.rolls.pop(0) if self.rolls else high
        assert low <= roll <= high
        return roll


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 9, 18, 9, 30))


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def rng():
    return ScriptedRandom()


@pytest.fixture
def pool(rng):
    return QuotePool(QUOTES, REPLIES, rng=rng)


@pytest.fixture
def engine(store, pool, rng, clock):
    return AffirmationEngine(store, pool, rng=rng, clock=clock)


@pytest.fixture
def seeded_engine(clock):
    rng = SystemRandomSource(seed=1234)
    return AffirmationEngine(InMemoryStore(), QuotePool(QUOTES, REPLIES, rng=rng), clock=clock)


@pytest.fixture
def catalog_files(tmp_path):
    quotes = tmp_path / "quotes.json"
    replies = tmp_path / "universe_replies.json"
    quotes.write_text(json.dumps(
        [{"chinese": q.chinese, "english": q.english} for q in QUOTES], ensure_ascii=False
    ), encoding="utf-8")
    replies.write_text(json.dumps(
        [{"chinese": r.chinese, "english": r.english} for r in REPLIES], ensure_ascii=False
    ), encoding="utf-8")
    return str(quotes), str(replies)
