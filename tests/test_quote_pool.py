"""Quote pool loading and draws."""

import json

import pytest

from daily_affirmation.config import Config
from daily_affirmation.errors import CatalogMissingError, RecordDecodeError
from daily_affirmation.services import CatalogStatus, QuotePool, SystemRandomSource, read_catalog

from conftest import QUOTES, REPLIES


class TestReadCatalog:

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogMissingError):
            read_catalog(str(tmp_path / "absent.json"))

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "quotes.json"
        path.write_text(json.dumps({"chinese": "a"}), encoding="utf-8")
        with pytest.raises(RecordDecodeError):
            read_catalog(str(path))

    def test_skips_incomplete_entries(self, tmp_path):
        path = tmp_path / "quotes.json"
        path.write_text(json.dumps([
            {"chinese": "一", "english": "One"},
            {"chinese": "二"},
            "three",
        ]), encoding="utf-8")
        assert read_catalog(str(path)) == [("一", "One")]


class TestQuotePool:

    def test_from_files(self, catalog_files):
        pool = QuotePool.from_files(*catalog_files)
        assert pool.quote_status is CatalogStatus.LOADED
        assert pool.quotes() == QUOTES
        assert pool.replies() == REPLIES

    def test_missing_reply_catalog_only(self, catalog_files, tmp_path):
        quotes_path, _ = catalog_files
        pool = QuotePool.from_files(quotes_path, str(tmp_path / "gone.json"))
        assert pool.reply_status is CatalogStatus.MISSING
        assert pool.draw_reply() is None
        assert pool.draw_quote() in QUOTES

    def test_empty_pool_returns_none(self):
        pool = QuotePool([], [])
        assert pool.draw_quote() is None
        assert pool.draw_reply() is None
        assert not pool.has_replies

    def test_drawn_quotes_are_unsent(self, catalog_files):
        pool = QuotePool.from_files(*catalog_files)
        assert all(not pool.draw_quote().sent_to_universe for _ in range(20))

    def test_draws_cover_catalog(self):
        pool = QuotePool(QUOTES, REPLIES, rng=SystemRandomSource(seed=7))
        seen = {pool.draw_quote().chinese for _ in range(200)}
        assert seen == {q.chinese for q in QUOTES}

    def test_bundled_catalogs_load(self):
        pool = QuotePool.from_files(Config.QUOTES_FILE, Config.REPLIES_FILE)
        assert pool.quote_status is CatalogStatus.LOADED
        assert pool.reply_status is CatalogStatus.LOADED
        assert pool.quote_count > 0
        assert pool.reply_count > 0
