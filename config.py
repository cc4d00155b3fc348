#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Interview Prep Tracker - Configuration
Centralized configuration loaded from environment variables and validated
at construction time.
"""

import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz


class Environment(Enum):
    """Runtime environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(Enum):
    """Logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StreakSource(Enum):
    """Which activity feeds streaks, rollups and the heatmap"""
    CATEGORIES = "categories"
    TASKS = "tasks"
    COMBINED = "combined"


@dataclass
class StorageConfig:
    """Key-value store configuration"""
    path: Path
    records_key: str = "dsa_records"
    tasks_key: str = "dsa_tasks"
    theme_key: str = "dsa_theme"


@dataclass
class TrackerSettings:
    """Aggregation settings"""
    timezone: Optional[str] = None  # None: system local date
    history_days: int = 365
    streak_source: StreakSource = StreakSource.COMBINED


def _env_flag(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() == 'true'


class TrackerConfig:
    """Main configuration class"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Load configuration from environment variables"""

        # Directories
        self.data_dir = Path(os.getenv('DATA_DIR', 'data'))
        self.export_dir = Path(os.getenv('EXPORT_DIR', 'exports'))
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        # Storage
        data_file = os.getenv('DATA_FILE')
        self.storage = StorageConfig(
            path=Path(data_file) if data_file else self.data_dir / "tracker_store.json",
            records_key=os.getenv('RECORDS_KEY', 'dsa_records'),
            tasks_key=os.getenv('TASKS_KEY', 'dsa_tasks'),
            theme_key=os.getenv('THEME_KEY', 'dsa_theme')
        )

        # Aggregation
        self._raw_history_days = os.getenv('HISTORY_DAYS', '365')
        self._raw_streak_source = os.getenv('STREAK_SOURCE', StreakSource.COMBINED.value)
        self.tracker = TrackerSettings(timezone=os.getenv('TRACKER_TIMEZONE') or None)

        # Logging
        self._raw_log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.log_level = LogLevel.INFO
        self.log_to_file = _env_flag('LOG_TO_FILE', 'false')
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Validate configuration, collecting every problem before failing"""
        errors = []

        try:
            self.log_level = LogLevel(self._raw_log_level)
        except ValueError:
            errors.append(f"LOG_LEVEL has unknown value {self._raw_log_level!r}")

        try:
            self.tracker.history_days = int(self._raw_history_days)
            if self.tracker.history_days < 7:
                errors.append("HISTORY_DAYS must be at least 7")
        except ValueError:
            errors.append(f"HISTORY_DAYS must be an integer, got {self._raw_history_days!r}")

        try:
            self.tracker.streak_source = StreakSource(self._raw_streak_source.lower())
        except ValueError:
            valid = [s.value for s in StreakSource]
            errors.append(f"STREAK_SOURCE must be one of {valid}")

        if self.tracker.timezone:
            try:
                pytz.timezone(self.tracker.timezone)
            except pytz.UnknownTimeZoneError:
                errors.append(f"TRACKER_TIMEZONE {self.tracker.timezone!r} is not a known timezone")

        keys = [self.storage.records_key, self.storage.tasks_key, self.storage.theme_key]
        if len(set(keys)) != len(keys):
            errors.append("RECORDS_KEY, TASKS_KEY and THEME_KEY must be distinct")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Create the directories the tracker writes to"""
        directories = [self.storage.path.parent, self.export_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """dictConfig-compatible logging configuration"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        logging_config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stderr
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            logging_config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"tracker_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return logging_config

    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration into a dictionary"""
        return {
            'environment': self.environment.value,
            'storage': {
                'path': str(self.storage.path),
                'records_key': self.storage.records_key,
                'tasks_key': self.storage.tasks_key,
                'theme_key': self.storage.theme_key
            },
            'tracker': {
                'timezone': self.tracker.timezone or 'local',
                'history_days': self.tracker.history_days,
                'streak_source': self.tracker.streak_source.value
            },
            'export_dir': str(self.export_dir),
            'log_level': self.log_level.value,
            'log_to_file': self.log_to_file
        }


# Global configuration instance
config = TrackerConfig()

__all__ = [
    'config',
    'TrackerConfig',
    'Environment',
    'LogLevel',
    'StreakSource',
    'StorageConfig',
    'TrackerSettings'
]
