from __future__ import annotations

import json

from tetromino_rl.persistence import HIGH_SCORE_KEY, HighScoreStore


def test_missing_file_reads_zero(tmp_path):
    assert HighScoreStore(str(tmp_path / "none.json")).load() == 0


def test_submit_keeps_best(tmp_path):
    store = HighScoreStore(str(tmp_path / "sub" / "hs.json"))
    assert store.submit(500)
    assert not store.submit(300)
    assert store.load() == 500
    assert store.submit(900)
    with open(store.path, encoding="utf-8") as fh:
        assert json.load(fh) == {HIGH_SCORE_KEY: 900}


def test_corrupt_file_reads_zero(tmp_path, caplog):
    path = tmp_path / "hs.json"
    path.write_text("not json", encoding="utf-8")
    assert HighScoreStore(str(path)).load() == 0
    assert "could not read high score" in caplog.text
