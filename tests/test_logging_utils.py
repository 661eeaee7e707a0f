import json

import pytest

from cryptforge import logging_utils


@pytest.fixture()
def debug_level(monkeypatch):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])


def test_key_value_format(debug_level, capsys):
    log = logging_utils.get_logger("cryptforge.test")
    log.debug(event="rooms_placed", placed=3, note="two words", skipped=None)
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=debug ts=")
    assert "event=rooms_placed" in out
    assert "placed=3" in out
    assert "note=two_words" in out
    assert "logger=cryptforge.test" in out
    assert "skipped" not in out


def test_json_mode(debug_level, monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    logging_utils.get_logger("cryptforge.test").info(event="dungeon_generated", rooms=4)
    rec = json.loads(capsys.readouterr().out)
    assert rec["level"] == "info"
    assert rec["event"] == "dungeon_generated"
    assert rec["rooms"] == 4


def test_errors_go_to_stderr(capsys):
    logging_utils.get_logger("cryptforge.test").error(event="boom")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=boom" in captured.err


def test_level_threshold(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    log = logging_utils.get_logger("cryptforge.test")
    log.debug(event="hidden")
    assert capsys.readouterr().out == ""
    assert not log.enabled_for("debug")
    logging_utils.set_level("warn")
    assert logging_utils.CURRENT_LEVEL == 30
    logging_utils.set_level("nonsense")
    assert logging_utils.CURRENT_LEVEL == 30


def test_loggers_are_cached():
    assert logging_utils.get_logger("cryptforge.x") is logging_utils.get_logger("cryptforge.x")
