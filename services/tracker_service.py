# services/tracker_service.py

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional

from config import StreakSource, config
from core import stats
from core.database import TrackerDatabase, TrackerState
from core.models import (
    ALL_FILTER, ActivityLog, CategoryLog, CombinedLog, Difficulty, Task,
    TaskCategory, TaskLog, TaskStatusFilter, Theme, ValidationError
)
from utils.datetime_utils import local_today, make_clock

logger = logging.getLogger(__name__)


@dataclass
class DashboardSummary:
    """Everything the dashboard shows for one day"""
    today: str
    current_streak: int
    longest_streak: int
    today_completed: int
    category_count: int
    today_solved: int
    week_total: int
    month_total: int
    pending_count: int
    done_count: int
    category_totals: Dict[str, int] = field(default_factory=dict)
    difficulty_breakdown: Dict[str, int] = field(default_factory=dict)
    today_progress: float = 0.0
    week_bars: List[stats.WeekBar] = field(default_factory=list)


class TrackerService:
    """
    Boundary between the tracker state and whatever renders it

    Mutations are read-modify-write on the in-memory state followed by a
    synchronous save of the touched key. Queries are read-only and pass the
    clock's current date into the statistics engine.
    """

    def __init__(self, database: TrackerDatabase,
                 clock: Optional[Callable[[], date]] = None,
                 streak_source: StreakSource = StreakSource.COMBINED,
                 history_days: int = stats.HISTORY_DAYS):
        self.database = database
        self.clock = clock or local_today
        self.streak_source = streak_source
        self.history_days = history_days
        self.state = TrackerState()
        self.load()

    # ===== STATE =====

    def load(self) -> TrackerState:
        self.state = self.database.load(self.today())
        return self.state

    def save(self) -> bool:
        return self.database.save(self.state)

    @property
    def records(self) -> CategoryLog:
        return self.state.records

    @property
    def tasks(self) -> TaskLog:
        return self.state.tasks

    @property
    def theme(self) -> Theme:
        return self.state.theme

    def today(self) -> str:
        return self.clock().isoformat()

    @property
    def activity_log(self) -> ActivityLog:
        """Log feeding streaks, rollups and the heatmap"""
        if self.streak_source is StreakSource.CATEGORIES:
            return self.records
        if self.streak_source is StreakSource.TASKS:
            return self.tasks
        return CombinedLog(self.records, self.tasks)

    # ===== MUTATIONS =====

    def add_task(self, title: str, difficulty: str = Difficulty.MEDIUM.value,
                 category: str = TaskCategory.DSA.value, note: str = "") -> Optional[Task]:
        """Add a task to the top of the list; blank titles are ignored"""
        try:
            task = Task.create(title, difficulty, category, note, today=self.today())
        except ValidationError as e:
            logger.debug(f"Task not added: {e}")
            return None

        self.tasks.add(task)
        self.database.save_tasks(self.tasks)
        logger.info(f"Added task {task.task_id} ({task.difficulty}, {task.category})")
        return task

    def toggle_task(self, task_id: str) -> Optional[Task]:
        task = self.tasks.toggle(task_id, self.today())
        if task is None:
            logger.debug(f"Toggle ignored, no task {task_id}")
            return None

        self.database.save_tasks(self.tasks)
        logger.info(f"Task {task_id} {'solved on ' + task.solved_on if task.done else 'reopened'}")
        return task

    def delete_task(self, task_id: str) -> bool:
        if not self.tasks.remove(task_id):
            logger.debug(f"Delete ignored, no task {task_id}")
            return False

        self.database.save_tasks(self.tasks)
        logger.info(f"Deleted task {task_id}")
        return True

    def toggle_category(self, category_id: str) -> Optional[bool]:
        """Flip today's check-off for a practice category; None if unknown"""
        try:
            done = self.records.toggle(self.today(), category_id)
        except ValidationError as e:
            logger.debug(f"Category toggle ignored: {e}")
            return None

        self.database.save_records(self.records)
        logger.info(f"Category {category_id} {'done' if done else 'cleared'} for {self.today()}")
        return done

    def toggle_theme(self) -> Theme:
        self.state.theme = self.state.theme.toggled()
        self.database.save_theme(self.state.theme)
        return self.state.theme

    # ===== QUERIES =====

    def current_streak(self) -> int:
        return stats.current_streak(self.activity_log, self.today())

    def longest_streak(self) -> int:
        return stats.longest_streak(self.activity_log, self.today(), self.history_days)

    def today_solved(self) -> int:
        return self.tasks.solved_count(self.today())

    def today_completed(self) -> int:
        return stats.today_completed(self.records, self.today())

    def week_total(self) -> int:
        return stats.period_total(self.activity_log, stats.week_to_date(self.today()))

    def month_total(self) -> int:
        return stats.period_total(self.activity_log, stats.month_to_date(self.today(), self.history_days))

    def history(self) -> List[str]:
        return stats.last_n_days(self.today(), self.history_days)

    def heatmap(self) -> stats.HeatmapGrid:
        return stats.build_heatmap_grid(self.history())

    def daily_counts(self) -> Dict[str, int]:
        return self.activity_log.daily_counts()

    def monthly(self, year: Optional[int] = None) -> List[stats.MonthSummary]:
        if year is None:
            year = self.clock().year
        return stats.monthly_aggregate(self.activity_log, year)

    def week_bars(self) -> List[stats.WeekBar]:
        return stats.week_bar_data(self.activity_log, self.today())

    def filtered_tasks(self, category: str = ALL_FILTER,
                       status: str = TaskStatusFilter.ALL.value) -> List[Task]:
        return stats.filter_tasks(self.tasks, category, status)

    def summary(self) -> DashboardSummary:
        today = self.today()
        log = self.activity_log
        return DashboardSummary(
            today=today,
            current_streak=stats.current_streak(log, today),
            longest_streak=stats.longest_streak(log, today, self.history_days),
            today_completed=stats.today_completed(self.records, today),
            today_progress=stats.today_progress(self.records, today),
            category_count=len(self.records.categories),
            today_solved=self.tasks.solved_count(today),
            week_total=stats.period_total(log, stats.week_to_date(today)),
            month_total=stats.period_total(log, stats.month_to_date(today, self.history_days)),
            pending_count=len(self.tasks.pending),
            done_count=len(self.tasks.completed),
            category_totals=stats.category_totals(self.records),
            difficulty_breakdown=stats.task_breakdown(self.tasks, "difficulty", done_only=True),
            week_bars=stats.week_bar_data(log, today),
        )

# ===== GLOBAL INSTANCE =====

_global_tracker_service = None


def create_tracker_service(cfg, store=None, clock: Optional[Callable[[], date]] = None) -> TrackerService:
    """Build a service from configuration"""
    return TrackerService(
        TrackerDatabase.from_config(cfg, store),
        clock=clock or make_clock(cfg.tracker.timezone),
        streak_source=cfg.tracker.streak_source,
        history_days=cfg.tracker.history_days,
    )


def get_tracker_service() -> TrackerService:
    """Global TrackerService built from the process configuration"""
    global _global_tracker_service
    if _global_tracker_service is None:
        _global_tracker_service = create_tracker_service(config)
    return _global_tracker_service


def initialize_tracker_service(service: TrackerService) -> TrackerService:
    """Replace the global TrackerService"""
    global _global_tracker_service
    _global_tracker_service = service
    return _global_tracker_service
