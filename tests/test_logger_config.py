import logging

from playlist_converter.logger_config import LOG_LEVEL_ENV, resolve_level, setup_logger


def test_default_level_is_info(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)

    assert resolve_level() == logging.INFO


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")

    assert resolve_level() == logging.DEBUG


def test_unknown_level_falls_back_to_info():
    assert resolve_level("chatty") == logging.INFO
    assert resolve_level("Warning") == logging.WARNING


def test_setup_logger_sets_root_level(monkeypatch):
    root = logging.getLogger()
    previous = root.level
    try:
        setup_logger("error")
        assert root.level == logging.ERROR
    finally:
        root.setLevel(previous)
