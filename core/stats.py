#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Interview Prep Tracker - Streak and Rollup Engine

Pure functions over an ActivityLog. "Today" is always passed in explicitly so
every result is reproducible across midnight, month and year boundaries.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from core.models import (
    ALL_FILTER, ActivityLog, CategoryLog, Difficulty, Task, TaskCategory,
    TaskStatusFilter
)
from utils.datetime_utils import (
    DayLike, as_date, day_range, days_in_month, start_of_week, sunday_index,
    to_day_key
)
from utils.text_utils import pluralize

logger = logging.getLogger(__name__)

HISTORY_DAYS = 365
WEEK_LENGTH = 7
MAX_INTENSITY = 4

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
DOW_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# ===== RESULT TYPES =====

@dataclass
class MonthLabel:
    """Month name anchored to a heatmap week column"""
    week_index: int
    label: str


@dataclass
class HeatmapGrid:
    """Calendar-aligned weeks of 7 slots, Sunday first; None pads the edges"""
    weeks: List[List[Optional[str]]] = field(default_factory=list)
    month_labels: List[MonthLabel] = field(default_factory=list)

    @property
    def day_count(self) -> int:
        return sum(1 for week in self.weeks for day in week if day is not None)

    def label_for(self, week_index: int) -> Optional[str]:
        for month_label in self.month_labels:
            if month_label.week_index == week_index:
                return month_label.label
        return None


@dataclass
class MonthSummary:
    """Activity within one calendar month"""
    year: int
    month: int
    label: str
    days_in_month: int
    active_days: int = 0
    total: int = 0


@dataclass
class WeekBar:
    """One day of the recent-days bar chart"""
    day: str
    label: str
    count: int
    is_today: bool = False

# ===== DAY SETS =====

def last_n_days(today: DayLike, n: int = HISTORY_DAYS) -> List[str]:
    """The n days ending at today, oldest first"""
    end = as_date(today)
    return day_range(end - timedelta(days=n - 1), end)


def week_to_date(today: DayLike) -> List[str]:
    """Most recent Sunday through today"""
    return day_range(start_of_week(today), today)


def month_to_date(today: DayLike, window: int = HISTORY_DAYS) -> List[str]:
    """Days of the trailing window that fall in today's month"""
    prefix = to_day_key(today)[:7]
    return [d for d in last_n_days(today, window) if d.startswith(prefix)]

# ===== STREAKS =====

def has_activity(log: ActivityLog, day: DayLike) -> bool:
    return log.count_on(day) > 0


def _current_streak(counts: Dict[str, int], today: date) -> int:
    cursor = today
    if counts.get(cursor.isoformat(), 0) <= 0:
        cursor -= timedelta(days=1)

    streak = 0
    while counts.get(cursor.isoformat(), 0) > 0:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def current_streak(log: ActivityLog, today: DayLike) -> int:
    """Consecutive active days ending today, or yesterday if today is still open"""
    return _current_streak(log.daily_counts(), as_date(today))


def longest_streak(log: ActivityLog, today: DayLike, window: int = HISTORY_DAYS) -> int:
    """Longest run of active days in the trailing window

    A streak still running today is counted in full even when it began
    before the window, so the result never falls below current_streak.
    """
    counts = log.daily_counts()
    best = run = 0
    for day_key in last_n_days(today, window):
        if counts.get(day_key, 0) > 0:
            run += 1
            best = max(best, run)
        else:
            run = 0
    return max(best, _current_streak(counts, as_date(today)))

# ===== ROLLUPS =====

def period_total(log: ActivityLog, days: Iterable[DayLike]) -> int:
    """Sum of activity over a set of days; each day counted once"""
    counts = log.daily_counts()
    return sum(counts.get(day_key, 0) for day_key in {to_day_key(d) for d in days})


def day_intensity(count: int) -> int:
    """Heatmap level: 0 none, 1-3 exact, 4 for four or more"""
    if count <= 0:
        return 0
    return min(count, MAX_INTENSITY)


def monthly_aggregate(log: ActivityLog, year: int) -> List[MonthSummary]:
    counts = log.daily_counts()
    summaries = []
    for month in range(1, 13):
        summary = MonthSummary(
            year=year,
            month=month,
            label=MONTH_NAMES[month - 1],
            days_in_month=days_in_month(year, month),
        )
        for day in range(1, summary.days_in_month + 1):
            count = counts.get(date(year, month, day).isoformat(), 0)
            if count > 0:
                summary.active_days += 1
                summary.total += count
        summaries.append(summary)
    return summaries


def week_bar_data(log: ActivityLog, today: DayLike, days: int = WEEK_LENGTH) -> List[WeekBar]:
    counts = log.daily_counts()
    today_key = to_day_key(today)
    return [
        WeekBar(
            day=day_key,
            label=DOW_NAMES[sunday_index(day_key)],
            count=counts.get(day_key, 0),
            is_today=day_key == today_key,
        )
        for day_key in last_n_days(today, days)
    ]

# ===== HEATMAP =====

def build_heatmap_grid(days: Sequence[DayLike]) -> HeatmapGrid:
    """Lay out ordered days as week columns with month anchors

    A month is labeled on the first column whose first non-null day falls in
    it, so a month starting mid-week is labeled on the following column.
    """
    grid = HeatmapGrid()
    if not days:
        return grid

    day_keys = [to_day_key(d) for d in days]
    week: List[Optional[str]] = [None] * sunday_index(day_keys[0])
    for day_key in day_keys:
        week.append(day_key)
        if len(week) == WEEK_LENGTH:
            grid.weeks.append(week)
            week = []
    if week:
        week.extend([None] * (WEEK_LENGTH - len(week)))
        grid.weeks.append(week)

    labeled = set()
    for week_index, week in enumerate(grid.weeks):
        first = next((d for d in week if d is not None), None)
        if first is None:
            continue
        month_key = first[:7]
        if month_key not in labeled:
            labeled.add(month_key)
            grid.month_labels.append(MonthLabel(week_index, MONTH_NAMES[int(first[5:7]) - 1]))

    return grid


def heatmap_tooltip(day: str, count: int) -> str:
    return f"{day}: {pluralize(count, 'activity', 'activities')}"

# ===== CATEGORY AND TASK BREAKDOWNS =====

def today_completed(log: CategoryLog, today: DayLike) -> int:
    return len(log.completed_on(today))


def today_progress(log: CategoryLog, today: DayLike) -> float:
    """Fraction of practice categories checked off today"""
    if not log.categories:
        return 0.0
    return today_completed(log, today) / len(log.categories)


def category_totals(log: CategoryLog) -> Dict[str, int]:
    """Days each known category was checked off, across all records"""
    totals = {category_id: 0 for category_id in log.categories}
    for record in log.records.values():
        for category_id in log.categories:
            if record.get(category_id) is True:
                totals[category_id] += 1
    return totals


_BREAKDOWN_VALUES = {
    "difficulty": [d.value for d in Difficulty],
    "category": [c.value for c in TaskCategory],
}


def task_breakdown(tasks: Iterable[Task], attribute: str = "difficulty",
                   done_only: bool = False) -> Dict[str, int]:
    """Task counts per difficulty or category; unknown values are ignored"""
    if attribute not in _BREAKDOWN_VALUES:
        raise ValueError(f"Cannot break tasks down by {attribute!r}")

    breakdown = {value: 0 for value in _BREAKDOWN_VALUES[attribute]}
    for task in tasks:
        if done_only and not task.done:
            continue
        value = getattr(task, attribute)
        if value in breakdown:
            breakdown[value] += 1
        else:
            logger.debug(f"Ignoring task {task.task_id} with unknown {attribute} {value!r}")
    return breakdown


def filter_tasks(tasks: Iterable[Task], category: str = ALL_FILTER,
                 status: str = TaskStatusFilter.ALL.value) -> List[Task]:
    status_filter = TaskStatusFilter(status)
    result = []
    for task in tasks:
        if category != ALL_FILTER and task.category != category:
            continue
        if status_filter is TaskStatusFilter.PENDING and task.done:
            continue
        if status_filter is TaskStatusFilter.DONE and not task.done:
            continue
        result.append(task)
    return result
