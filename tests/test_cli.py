"""Command-line driver, one process launch per call."""

import pytest

import affirm


@pytest.fixture
def run(tmp_path, capsys):
    store = str(tmp_path / "store.json")

    def _run(*args):
        ok = affirm.main(["--store", store, *args])
        return ok, capsys.readouterr().out

    return _run


class TestCli:

    def test_status_on_fresh_store(self, run):
        ok, out = run("status")
        assert ok
        assert "[initial]" in out

    def test_draw_send_save_flow(self, run):
        ok, out = run("draw")
        assert ok and "[drawn]" in out

        ok, out = run("status")
        assert "[drawn]" in out

        ok, out = run("send")
        assert ok and "[received]" in out

        ok, out = run("save")
        assert ok and "Saved to your collection." in out

        ok, out = run("save")
        assert ok and "Already in your collection." in out

        ok, out = run("collection")
        assert "1/1000" in out

    def test_send_requires_draw(self, run):
        ok, out = run("send")
        assert not ok
        assert "Nothing to send" in out

    def test_save_requires_send(self, run):
        run("draw")
        ok, out = run("save")
        assert not ok

    def test_language_and_reminder(self, run):
        ok, _ = run("language", "english")
        assert ok
        ok, out = run("reminder", "07:30")
        assert "07:30" in out
        ok, out = run("reminder")
        assert "07:30" in out

    def test_reset(self, run):
        run("draw")
        ok, out = run("reset")
        assert ok and "[initial]" in out
        ok, out = run("status")
        assert "[initial]" in out

    def test_export(self, run, tmp_path):
        run("draw")
        run("send")
        run("save")
        target = tmp_path / "collection.csv"
        ok, out = run("export", str(target))
        assert ok
        assert target.exists()
