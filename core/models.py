#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Interview Prep Tracker - Core Data Models
Practice categories, problem tasks and the activity logs built from them.

Both front-end representations (daily category check-offs and the task list
with solved dates) reduce to the same shape: a mapping of DayKey to the number
of activities recorded that day. The statistics engine only sees that shape.
"""

import uuid
import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Any, Iterable, Tuple

from utils.datetime_utils import DayLike, to_day_key

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class Difficulty(Enum):
    """Problem difficulty"""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class TaskCategory(Enum):
    """Problem categories"""
    DSA = "DSA"
    SYSTEM_DESIGN = "System Design"
    CS_FUNDAMENTALS = "CS Fundamentals"
    MOCK_INTERVIEW = "Mock Interview"


class TaskStatusFilter(Enum):
    """Task list status filter"""
    ALL = "All"
    PENDING = "Pending"
    DONE = "Done"


class Theme(Enum):
    """Color themes"""
    DARK = "dark"
    LIGHT = "light"

    def toggled(self) -> "Theme":
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


ALL_FILTER = "All"

# ===== VALIDATION HELPERS =====

class ValidationError(Exception):
    """Invalid user input"""
    pass


def validate_text(text: str, min_length: int = 1, max_length: int = 1000, field_name: str = "text") -> str:
    """Validate and trim a text field"""
    if not isinstance(text, str):
        raise ValidationError(f"{field_name} must be a string")

    text = text.strip()
    if len(text) < min_length:
        raise ValidationError(f"{field_name} must contain at least {min_length} characters")

    if len(text) > max_length:
        raise ValidationError(f"{field_name} must contain at most {max_length} characters")

    return text


def validate_enum_value(value: str, enum_class: type, field_name: str = "value") -> str:
    """Validate an enum value given as its string form"""
    try:
        enum_class(value)
        return value
    except ValueError:
        valid_values = [e.value for e in enum_class]
        raise ValidationError(f"{field_name} must be one of: {valid_values}")

# ===== PRACTICE CATEGORIES =====

@dataclass(frozen=True)
class PracticeCategory:
    """A daily practice area that can be checked off once per day"""
    category_id: str
    label: str
    icon: str


PRACTICE_CATEGORIES: Tuple[PracticeCategory, ...] = (
    PracticeCategory("dsa", "DSA Problems", "⚡"),
    PracticeCategory("sysdesign", "System Design", "🏗️"),
    PracticeCategory("cs", "CS Fundamentals", "🧠"),
    PracticeCategory("mock", "Mock Interviews", "🎯"),
)

PRACTICE_CATEGORY_IDS: Tuple[str, ...] = tuple(c.category_id for c in PRACTICE_CATEGORIES)


def get_practice_category(category_id: str) -> Optional[PracticeCategory]:
    for category in PRACTICE_CATEGORIES:
        if category.category_id == category_id:
            return category
    return None


@dataclass(frozen=True)
class PracticeSite:
    """Online judge linked from the dashboard"""
    name: str
    url: str
    icon: str


PRACTICE_SITES: Tuple[PracticeSite, ...] = (
    PracticeSite("LeetCode", "https://leetcode.com", "LC"),
    PracticeSite("Codeforces", "https://codeforces.com", "CF"),
    PracticeSite("HackerRank", "https://hackerrank.com", "HR"),
    PracticeSite("GeeksForGeeks", "https://geeksforgeeks.org", "GFG"),
)

# ===== TASKS =====

@dataclass
class Task:
    """A single interview problem"""
    task_id: str
    title: str
    difficulty: str = Difficulty.MEDIUM.value
    category: str = TaskCategory.DSA.value
    note: str = ""
    done: bool = False
    added_on: str = ""
    solved_on: Optional[str] = None

    def __post_init__(self):
        self.title = self.title.strip()
        self.note = (self.note or "").strip()

    def toggle(self, today: DayLike) -> bool:
        """Flip the done flag; solved_on follows it"""
        self.done = not self.done
        self.solved_on = to_day_key(today) if self.done else None
        return self.done

    def is_solved_on(self, day: DayLike) -> bool:
        return self.done and self.solved_on == to_day_key(day)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.task_id,
            "title": self.title,
            "difficulty": self.difficulty,
            "category": self.category,
            "note": self.note,
            "done": self.done,
            "addedOn": self.added_on,
        }
        if self.solved_on is not None:
            data["solvedOn"] = self.solved_on
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], today: Optional[DayLike] = None) -> "Task":
        """Restore a stored task

        Only a missing id or a missing or blank title makes a task unreadable.
        Unparsable dates are repaired: addedOn falls back to createdAt, then
        solvedOn, then today; a bad solvedOn is dropped. A solvedOn/done
        mismatch is repaired the same way.
        """
        task_id = data.get("id")
        title = data.get("title")
        if task_id is None or not str(task_id).strip():
            raise ValidationError("Cannot load task: missing id")
        if not isinstance(title, str) or not title.strip():
            raise ValidationError(f"Cannot load task {task_id}: missing title")

        solved_on = _day_key_or_none(data.get("solvedOn"))
        added_on = (_day_key_or_none(data.get("addedOn"))
                    or _day_key_or_none(data.get("createdAt"))
                    or solved_on
                    or _day_key_or_none(today))
        if added_on is None:
            raise ValidationError(f"Cannot load task {task_id}: no usable date")

        task = cls(
            task_id=str(task_id),
            title=title,
            difficulty=str(data.get("difficulty", Difficulty.MEDIUM.value)),
            category=str(data.get("category", TaskCategory.DSA.value)),
            note=str(data.get("note") or ""),
            done=data.get("done") is True,
            added_on=added_on,
            solved_on=solved_on,
        )

        if not task.done:
            task.solved_on = None
        elif task.solved_on is None:
            task.solved_on = task.added_on
        return task

    @classmethod
    def create(cls, title: str, difficulty: str = Difficulty.MEDIUM.value,
               category: str = TaskCategory.DSA.value, note: str = "", *, today: DayLike) -> "Task":
        """Create a new task, rejecting blank or overlong titles and unknown enum values"""
        return cls(
            task_id=str(uuid.uuid4()),
            title=validate_text(title, min_length=1, max_length=200, field_name="title"),
            difficulty=validate_enum_value(difficulty, Difficulty, "difficulty"),
            category=validate_enum_value(category, TaskCategory, "category"),
            note=note,
            added_on=to_day_key(today),
        )


def _day_key_or_none(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    try:
        return to_day_key(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparsable date {value!r}")
        return None

# ===== ACTIVITY LOGS =====

class ActivityLog:
    """A log of dated activity reduced to per-day counts"""

    def daily_counts(self) -> Dict[str, int]:
        raise NotImplementedError

    def count_on(self, day: DayLike) -> int:
        return self.daily_counts().get(to_day_key(day), 0)


class CategoryLog(ActivityLog):
    """Per-day practice category check-offs: {DayKey: {CategoryId: bool}}"""

    def __init__(self, records: Optional[Dict[str, Dict[str, bool]]] = None,
                 categories: Iterable[str] = PRACTICE_CATEGORY_IDS):
        self.records: Dict[str, Dict[str, bool]] = records if records is not None else {}
        self.categories: Tuple[str, ...] = tuple(categories)

    def completed_on(self, day: DayLike) -> List[str]:
        """Known categories marked done that day, in category order"""
        record = self.records.get(to_day_key(day)) or {}
        return [c for c in self.categories if record.get(c) is True]

    def is_done(self, day: DayLike, category_id: str) -> bool:
        return category_id in self.completed_on(day)

    def toggle(self, day: DayLike, category_id: str) -> bool:
        if category_id not in self.categories:
            raise ValidationError(f"Unknown practice category: {category_id}")

        day_key = to_day_key(day)
        record = dict(self.records.get(day_key) or {})
        record[category_id] = not (record.get(category_id) is True)
        self.records[day_key] = record
        return record[category_id]

    def daily_counts(self) -> Dict[str, int]:
        counts = {}
        for day_key in self.records:
            completed = len(self.completed_on(day_key))
            if completed:
                counts[day_key] = completed
        return counts

    def to_dict(self) -> Dict[str, Dict[str, bool]]:
        return {day: dict(record) for day, record in self.records.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategoryLog":
        """Restore records, dropping entries that are not day -> object"""
        records = {}
        for day_key, record in data.items():
            if not isinstance(record, dict):
                logger.warning(f"Skipping malformed record for {day_key!r}")
                continue
            try:
                records[to_day_key(day_key)] = {str(k): v for k, v in record.items()}
            except ValueError:
                logger.warning(f"Skipping record with invalid day key {day_key!r}")
        return cls(records)


class TaskLog(ActivityLog):
    """Problem list, newest first; a day's count is the tasks solved on it"""

    def __init__(self, tasks: Optional[List[Task]] = None):
        self.tasks: List[Task] = tasks if tasks is not None else []

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self):
        return iter(self.tasks)

    def get(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.task_id == task_id:
                return task
        return None

    def add(self, task: Task) -> Task:
        self.tasks.insert(0, task)
        return task

    def toggle(self, task_id: str, today: DayLike) -> Optional[Task]:
        task = self.get(task_id)
        if task is not None:
            task.toggle(today)
        return task

    def remove(self, task_id: str) -> bool:
        initial_count = len(self.tasks)
        self.tasks = [t for t in self.tasks if t.task_id != task_id]
        return len(self.tasks) < initial_count

    def solved_count(self, day: DayLike) -> int:
        return sum(1 for t in self.tasks if t.is_solved_on(day))

    @property
    def pending(self) -> List[Task]:
        return [t for t in self.tasks if not t.done]

    @property
    def completed(self) -> List[Task]:
        return [t for t in self.tasks if t.done]

    def daily_counts(self) -> Dict[str, int]:
        return dict(Counter(t.solved_on for t in self.tasks if t.done and t.solved_on))

    def to_list(self) -> List[Dict[str, Any]]:
        return [t.to_dict() for t in self.tasks]

    @classmethod
    def from_list(cls, data: List[Any], today: Optional[DayLike] = None) -> "TaskLog":
        tasks = []
        for item in data:
            if not isinstance(item, dict):
                logger.warning("Skipping task entry that is not an object")
                continue
            try:
                tasks.append(Task.from_dict(item, today))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable task: {e}")
        return cls(tasks)


class CombinedLog(ActivityLog):
    """Sum of several logs"""

    def __init__(self, *logs: ActivityLog):
        self.logs = logs

    def daily_counts(self) -> Dict[str, int]:
        totals: Counter = Counter()
        for log in self.logs:
            totals.update(log.daily_counts())
        return dict(totals)
