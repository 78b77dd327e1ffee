"""Collection store: de-duplication, ordering, soft capacity and export."""

import json
from datetime import datetime

import pandas as pd

from daily_affirmation.models import NO_REPLY, Language, Quote, ReplyPresent, SavedCard, UniverseReply
from daily_affirmation.services import CollectionStore, InMemoryStore


def make_card(chinese: str, day: int = 1, reply: UniverseReply = None) -> SavedCard:
    quote = Quote(chinese=chinese, english=f"EN {chinese}", sent_to_universe=True)
    return SavedCard(
        date=datetime(2025, 9, day, 12, 0),
        quote=quote,
        universe_reply=ReplyPresent(reply) if reply else NO_REPLY,
    )


class TestCollectionStore:

    def test_append_and_list_newest_first(self):
        collection = CollectionStore(InMemoryStore())
        for i, text in enumerate(["一", "二", "三"], start=1):
            assert collection.append(make_card(text, day=i)) is True

        assert [c.quote.chinese for c in collection.list()] == ["三", "二", "一"]
        assert collection.count() == 3
        assert len(collection) == 3

    def test_duplicate_quote_text_rejected(self):
        collection = CollectionStore(InMemoryStore())
        assert collection.append(make_card("同一句", day=1)) is True
        assert collection.append(make_card("同一句", day=2)) is False
        assert collection.count() == 1
        assert collection.list()[0].date.day == 1

    def test_match_is_exact(self):
        collection = CollectionStore(InMemoryStore())
        collection.append(make_card("Hello"))
        assert collection.contains("Hello")
        assert not collection.contains("hello")
        assert not collection.contains("Hello ")
        assert collection.append(make_card("Hello ")) is True

    def test_list_does_not_mutate(self):
        store = InMemoryStore()
        collection = CollectionStore(store)
        collection.append(make_card("一"))
        before = store.get("savedCards")
        collection.list()
        collection.list().clear()
        assert store.get("savedCards") == before

    def test_persisted_as_one_sequence(self):
        store = InMemoryStore()
        collection = CollectionStore(store)
        reply = UniverseReply(chinese="宇宙听见了你。", english="The universe has heard you.")
        card = make_card("一", reply=reply)
        collection.append(card)

        data = json.loads(store.get("savedCards"))
        assert data == [{
            "id": card.id,
            "date": "2025-09-01T12:00:00",
            "quote": {"chinese": "一", "english": "EN 一", "sentToUniverse": True},
            "universeReply": {"chinese": "宇宙听见了你。", "english": "The universe has heard you."},
        }]

        reopened = CollectionStore(store).list()[0]
        assert reopened == card

    def test_cap_is_not_enforced(self):
        collection = CollectionStore(InMemoryStore(), capacity=2)
        for i in range(3):
            assert collection.append(make_card(f"q{i}")) is True
        assert collection.count() == 3
        assert collection.is_over_capacity

    def test_capacity_reminder(self):
        collection = CollectionStore(InMemoryStore())
        assert collection.capacity_reminder(Language.ENGLISH) == "Your collection is empty"
        collection.append(make_card("一"))
        assert collection.capacity_reminder(Language.ENGLISH) == "1/1000 cards saved"
        assert collection.capacity_reminder(Language.CHINESE) == "已收藏 1/1000 张卡片"

    def test_clear(self):
        store = InMemoryStore()
        collection = CollectionStore(store)
        collection.append(make_card("一"))
        collection.clear()
        assert collection.list() == []
        assert "savedCards" not in store

    def test_corrupted_blob_reads_empty(self):
        store = InMemoryStore({"savedCards": "not json"})
        collection = CollectionStore(store)
        assert collection.list() == []
        assert collection.append(make_card("一")) is True
        assert collection.count() == 1

    def test_bad_entries_skipped(self):
        good = {
            "id": "abc",
            "date": "2025-09-02T08:00:00",
            "quote": {"chinese": "好", "english": "Good"},
            "universeReply": None,
        }
        store = InMemoryStore({"savedCards": json.dumps([{"id": "x"}, good, "junk"])})
        cards = CollectionStore(store).list()
        assert [c.id for c in cards] == ["abc"]
        assert cards[0].quote.sent_to_universe is False


class TestCollectionExport:

    def test_to_dataframe(self):
        collection = CollectionStore(InMemoryStore())
        collection.append(make_card("一", day=1))
        collection.append(make_card("二", day=2, reply=UniverseReply(chinese="回", english="Back")))

        df = collection.to_dataframe()
        assert list(df.columns) == ["id", "date", "chinese", "english", "reply_chinese", "reply_english"]
        assert df["chinese"].tolist() == ["二", "一"]
        assert df["reply_english"].tolist() == ["Back", ""]

    def test_empty_dataframe_has_columns(self):
        df = CollectionStore(InMemoryStore()).to_dataframe()
        assert df.empty
        assert "chinese" in df.columns

    def test_export_csv(self, tmp_path):
        collection = CollectionStore(InMemoryStore())
        collection.append(make_card("一"))
        target = tmp_path / "out" / "collection.csv"

        assert collection.export_csv(str(target)) is True
        df = pd.read_csv(target, encoding="utf-8-sig", keep_default_na=False)
        assert df["chinese"].tolist() == ["一"]

    def test_export_csv_unwritable_returns_false(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        collection = CollectionStore(InMemoryStore())
        collection.append(make_card("一"))

        assert collection.export_csv(str(blocker / "out" / "collection.csv")) is False
        assert blocker.read_text(encoding="utf-8") == "not a directory"
