#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Interview Prep Tracker - Storage
A flat string-keyed store holding JSON values, and the tracker database that
reads and writes the activity records, the task list and the theme through it.

Reads never raise: a missing key, invalid JSON or a value of the wrong shape
falls back to the empty default. Writes that fail are logged and swallowed,
the in-memory state stays authoritative for the session.
"""

import json
import logging
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from core.models import CategoryLog, TaskLog, Theme

logger = logging.getLogger(__name__)

# ===== EXCEPTIONS =====

class StorageError(Exception):
    """A store could not persist a value"""
    pass

# ===== KEY-VALUE STORES =====

class KeyValueStore:
    """String keys to string (JSON) values"""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """In-process store"""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStore(KeyValueStore):
    """All items kept in one JSON object file, rewritten atomically on change"""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Store file {self.path} is corrupted: {e}")
            self._move_aside()
            return {}
        except OSError as e:
            logger.warning(f"Store file {self.path} could not be read: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Store file {self.path} does not hold an object")
            self._move_aside()
            return {}

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _move_aside(self) -> None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        target = self.path.with_name(f"{self.path.name}.corrupted-{timestamp}")
        try:
            shutil.move(str(self.path), str(target))
            logger.warning(f"Corrupted store moved to {target}")
        except OSError as e:
            logger.error(f"Could not move corrupted store aside: {e}")

    def _write_all(self, items: Dict[str, str]) -> None:
        temp_file = self.path.with_suffix(self.path.suffix + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(items, f, ensure_ascii=False, indent=2)
            temp_file.replace(self.path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise StorageError(f"Failed to write {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)

# ===== TRACKER DATABASE =====

@dataclass
class TrackerState:
    """Everything the tracker persists"""
    records: CategoryLog = field(default_factory=CategoryLog)
    tasks: TaskLog = field(default_factory=TaskLog)
    theme: Theme = Theme.DARK


class TrackerDatabase:
    """Load/save of the tracker state over a key-value store"""

    def __init__(self, store: KeyValueStore, records_key: str = "dsa_records",
                 tasks_key: str = "dsa_tasks", theme_key: str = "dsa_theme"):
        self.store = store
        self.records_key = records_key
        self.tasks_key = tasks_key
        self.theme_key = theme_key
        self.save_count = 0
        self.error_count = 0

    @classmethod
    def from_config(cls, cfg, store: Optional[KeyValueStore] = None) -> "TrackerDatabase":
        return cls(
            store or JsonFileStore(cfg.storage.path),
            records_key=cfg.storage.records_key,
            tasks_key=cfg.storage.tasks_key,
            theme_key=cfg.storage.theme_key,
        )

    # ----- raw access -----

    def _read(self, key: str, fallback: Any, expected_type: type) -> Any:
        try:
            raw = self.store.get_item(key)
        except Exception as e:
            logger.warning(f"Reading {key!r} failed, using default: {e}")
            return fallback

        if raw is None:
            return fallback

        try:
            value = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Stored value for {key!r} is not valid JSON, using default: {e}")
            return fallback

        if not isinstance(value, expected_type):
            logger.warning(f"Stored value for {key!r} is a {type(value).__name__}, "
                           f"expected {expected_type.__name__}; using default")
            return fallback

        return value

    def _write(self, key: str, value: Any) -> bool:
        try:
            self.store.set_item(key, json.dumps(value, ensure_ascii=False))
        except (StorageError, OSError, TypeError, ValueError) as e:
            self.error_count += 1
            logger.error(f"Failed to save {key!r}: {e}")
            return False

        self.save_count += 1
        logger.debug(f"Saved {key!r}")
        return True

    # ----- typed access -----

    def load_records(self) -> CategoryLog:
        return CategoryLog.from_dict(self._read(self.records_key, {}, dict))

    def save_records(self, records: CategoryLog) -> bool:
        return self._write(self.records_key, records.to_dict())

    def load_tasks(self, today: Optional[str] = None) -> TaskLog:
        """Tasks in stored order; today backs tasks with no usable date"""
        return TaskLog.from_list(self._read(self.tasks_key, [], list), today)

    def save_tasks(self, tasks: TaskLog) -> bool:
        return self._write(self.tasks_key, tasks.to_list())

    def load_theme(self) -> Theme:
        value = self._read(self.theme_key, Theme.DARK.value, str)
        try:
            return Theme(value)
        except ValueError:
            logger.warning(f"Unknown theme {value!r}, using dark")
            return Theme.DARK

    def save_theme(self, theme: Theme) -> bool:
        return self._write(self.theme_key, theme.value)

    def load(self, today: Optional[str] = None) -> TrackerState:
        state = TrackerState(
            records=self.load_records(),
            tasks=self.load_tasks(today),
            theme=self.load_theme(),
        )
        logger.info(f"Loaded {len(state.records.records)} day records and {len(state.tasks)} tasks")
        return state

    def save(self, state: TrackerState) -> bool:
        results = [
            self.save_records(state.records),
            self.save_tasks(state.tasks),
            self.save_theme(state.theme),
        ]
        return all(results)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "save_count": self.save_count,
            "error_count": self.error_count,
            "store": type(self.store).__name__,
        }
