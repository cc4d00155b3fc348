from pathlib import Path

import pytest

from config import LogLevel, StreakSource, TrackerConfig

CONFIG_VARS = [
    "ENVIRONMENT", "DATA_DIR", "DATA_FILE", "EXPORT_DIR", "LOG_DIR", "LOG_LEVEL",
    "LOG_TO_FILE", "LOG_FORMAT", "TRACKER_TIMEZONE", "HISTORY_DAYS",
    "STREAK_SOURCE", "RECORDS_KEY", "TASKS_KEY", "THEME_KEY",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    cfg = TrackerConfig()
    assert cfg.is_development()
    assert cfg.storage.path == Path("data") / "tracker_store.json"
    assert cfg.storage.records_key == "dsa_records"
    assert cfg.storage.tasks_key == "dsa_tasks"
    assert cfg.storage.theme_key == "dsa_theme"
    assert cfg.tracker.history_days == 365
    assert cfg.tracker.streak_source is StreakSource.COMBINED
    assert cfg.tracker.timezone is None
    assert cfg.log_level is LogLevel.INFO
    assert cfg.to_dict()["tracker"]["timezone"] == "local"


def test_environment_overrides(clean_env, tmp_path):
    clean_env.setenv("ENVIRONMENT", "production")
    clean_env.setenv("DATA_FILE", str(tmp_path / "prep.json"))
    clean_env.setenv("HISTORY_DAYS", "90")
    clean_env.setenv("STREAK_SOURCE", "Categories")
    clean_env.setenv("TRACKER_TIMEZONE", "Europe/Berlin")
    clean_env.setenv("LOG_LEVEL", "debug")

    cfg = TrackerConfig()
    assert cfg.is_production()
    assert cfg.storage.path == tmp_path / "prep.json"
    assert cfg.tracker.history_days == 90
    assert cfg.tracker.streak_source is StreakSource.CATEGORIES
    assert cfg.tracker.timezone == "Europe/Berlin"
    assert cfg.log_level is LogLevel.DEBUG


def test_every_problem_is_reported(clean_env):
    clean_env.setenv("HISTORY_DAYS", "3")
    clean_env.setenv("STREAK_SOURCE", "vibes")
    clean_env.setenv("LOG_LEVEL", "LOUD")
    clean_env.setenv("TRACKER_TIMEZONE", "Mars/Olympus_Mons")
    clean_env.setenv("TASKS_KEY", "dsa_records")

    with pytest.raises(ValueError) as excinfo:
        TrackerConfig()

    message = str(excinfo.value)
    assert message.startswith("Configuration errors:")
    for fragment in ["HISTORY_DAYS", "STREAK_SOURCE", "LOG_LEVEL", "TRACKER_TIMEZONE", "distinct"]:
        assert fragment in message


def test_history_days_must_be_integer(clean_env):
    clean_env.setenv("HISTORY_DAYS", "a year")
    with pytest.raises(ValueError, match="HISTORY_DAYS must be an integer"):
        TrackerConfig()


def test_console_logging_only_by_default(clean_env):
    logging_config = TrackerConfig().get_logging_config()
    assert list(logging_config["handlers"]) == ["console"]
    assert logging_config["loggers"][""]["handlers"] == ["console"]


def test_file_logging(clean_env, tmp_path):
    clean_env.setenv("LOG_TO_FILE", "true")
    clean_env.setenv("LOG_DIR", str(tmp_path / "logs"))
    clean_env.setenv("DATA_DIR", str(tmp_path / "data"))
    clean_env.setenv("EXPORT_DIR", str(tmp_path / "exports"))

    cfg = TrackerConfig()
    file_handler = cfg.get_logging_config()["handlers"]["file"]
    assert file_handler["class"] == "logging.handlers.RotatingFileHandler"
    assert file_handler["filename"].endswith("tracker_development.log")

    cfg.ensure_directories()
    for name in ["logs", "data", "exports"]:
        assert (tmp_path / name).is_dir()
