import logging

import config
from logging_config import APP_LOGGER, get_logger


def test_loggers_live_under_app_namespace():
    assert get_logger("logic.dispo.ledger").name == f"{APP_LOGGER}.logic.dispo.ledger"
    assert get_logger(APP_LOGGER).name == APP_LOGGER


def test_env_int_falls_back_on_bad_values(monkeypatch):
    monkeypatch.setenv("IMPORT_WORKERS", "x")
    assert config._env_int("IMPORT_WORKERS", 1) == 1
    monkeypatch.setenv("IMPORT_WORKERS", "0")
    assert config._env_int("IMPORT_WORKERS", 1) == 1
    monkeypatch.setenv("IMPORT_WORKERS", "3")
    assert config._env_int("IMPORT_WORKERS", 1) == 3


def test_env_bool(monkeypatch):
    monkeypatch.delenv("LOG_TO_FILE", raising=False)
    assert config._env_bool("LOG_TO_FILE", True) is True
    monkeypatch.setenv("LOG_TO_FILE", "no")
    assert config._env_bool("LOG_TO_FILE", True) is False
    monkeypatch.setenv("LOG_TO_FILE", "Si")
    assert config._env_bool("LOG_TO_FILE", False) is True


def test_defaults():
    assert config.Config.ACCEPTED_EXTENSION == ".xls"
    assert isinstance(config.Config.LOG_LEVEL, int)
    assert logging.getLevelName(config.Config.LOG_LEVEL) in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
