# src/blog_api/tests/test_logging/test_builder_setup.py
import logging

import pytest

from blog_api.config import get_settings
from blog_api.core.logging.builder import make_dict_config, setup_logging
from blog_api.core.logging.filters import RequestIdFilter


# Minimal Settings-like object for testing
class DummySettings:
    LOG_FORMAT = "json"
    LOG_LEVEL = "INFO"
    LOG_TO_STDOUT = False
    LOG_DIR = None  # set in each test
    LOG_MAX_BYTES = 1000
    LOG_BACKUP_COUNT = 1
    ENV = "development"
    ENABLE_SQL_LOGGING = False


@pytest.fixture(autouse=True)
def restore_app_logging():
    yield
    setup_logging(get_settings())


def test_make_dict_config_with_file_logging(tmp_path):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path
    cfg = make_dict_config(settings)

    assert set(cfg["handlers"]) == {"console", "file", "error_file"}
    assert cfg["handlers"]["file"]["filename"] == str(tmp_path / "app.log")
    assert cfg["handlers"]["error_file"]["level"] == "ERROR"
    assert {"json", "standard"} <= set(cfg["formatters"])
    assert {"request_id", "redact"} <= set(cfg["filters"])


def test_make_dict_config_stdout_only(tmp_path):
    settings = DummySettings()
    settings.LOG_TO_STDOUT = True
    settings.LOG_DIR = tmp_path
    cfg = make_dict_config(settings)

    assert set(cfg["handlers"]) == {"console", "error_console"}


def test_sql_logging_level_follows_setting(tmp_path):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path

    assert make_dict_config(settings)["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    settings.ENABLE_SQL_LOGGING = True
    assert make_dict_config(settings)["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"


def test_setup_logging_creates_log_dir(tmp_path):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path / "logs"
    assert not settings.LOG_DIR.exists()

    setup_logging(settings)

    assert settings.LOG_DIR.exists()
    root = logging.getLogger()
    assert root.handlers
    assert any(isinstance(f, RequestIdFilter) for f in root.filters)
