#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Interview Prep Tracker - command line

Usage: python main.py [--data-file PATH] [--date YYYY-MM-DD] <command> [options]
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional

from config import config
from core.database import JsonFileStore
from core.models import (
    ALL_FILTER, PRACTICE_CATEGORY_IDS, PRACTICE_SITES, Difficulty, TaskCategory,
    TaskStatusFilter, get_practice_category
)
from services import (
    TrackerService, create_tracker_service, export_daily_csv, export_tasks_csv,
    export_to_json
)
from ui import messages
from ui.themes import get_theme
from utils.datetime_utils import parse_day_key
from utils.logger import setup_logger
from utils.validators import is_valid_date, is_valid_task_title

logger = logging.getLogger(__name__)

MIN_YEAR = 1
MAX_YEAR = 9999


def _day_argument(value: str) -> date:
    if not is_valid_date(value):
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")
    try:
        return parse_day_key(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _year_argument(value: str) -> int:
    try:
        year = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a year, got {value!r}")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise argparse.ArgumentTypeError(f"year must be between {MIN_YEAR} and {MAX_YEAR}")
    return year


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prep-tracker", description="Interview prep habit tracker")
    parser.add_argument("--data-file", type=Path, help="store file (default from DATA_FILE / DATA_DIR)")
    parser.add_argument("--date", type=_day_argument, help="act as if today were this day")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("status", help="dashboard summary")
    sub.add_parser("heatmap", help="year activity heatmap")
    sub.add_parser("week", help="last 7 days")
    sub.add_parser("sites", help="practice site links")

    monthly = sub.add_parser("monthly", help="per-month aggregates")
    monthly.add_argument("--year", type=_year_argument)

    check = sub.add_parser("check", help="toggle today's practice category")
    check.add_argument("category", choices=PRACTICE_CATEGORY_IDS)

    add = sub.add_parser("add", help="add a problem")
    add.add_argument("title")
    add.add_argument("--difficulty", default=Difficulty.MEDIUM.value, choices=[d.value for d in Difficulty])
    add.add_argument("--category", default=TaskCategory.DSA.value, choices=[c.value for c in TaskCategory])
    add.add_argument("--note", default="")

    toggle = sub.add_parser("toggle", help="mark a problem solved / unsolved")
    toggle.add_argument("task_id", help="task id or unique id prefix")

    delete = sub.add_parser("delete", help="delete a problem")
    delete.add_argument("task_id", help="task id or unique id prefix")

    tasks = sub.add_parser("tasks", help="list problems")
    tasks.add_argument("--category", default=ALL_FILTER, choices=[ALL_FILTER] + [c.value for c in TaskCategory])
    tasks.add_argument("--status", default=TaskStatusFilter.ALL.value, choices=[s.value for s in TaskStatusFilter])

    sub.add_parser("theme", help="switch between dark and light")

    export = sub.add_parser("export", help="export data")
    export.add_argument("--format", default="json", choices=["json", "csv"])

    return parser


def _resolve_task_id(service: TrackerService, prefix: str) -> Optional[str]:
    matches = [t.task_id for t in service.tasks if t.task_id.startswith(prefix)]
    return matches[0] if len(matches) == 1 else None


def run(args: argparse.Namespace, service: TrackerService, export_dir: Optional[Path] = None) -> List[str]:
    """Execute one command and return the lines to print"""
    theme = get_theme(service.theme.value)
    command = args.command

    if command == "status":
        summary = service.summary()
        return [
            messages.dashboard_message(summary, theme),
            "",
            messages.categories_message(service.records, summary.today, summary.category_totals, theme),
            "",
            "Solved by difficulty: " + messages.difficulty_message(summary.difficulty_breakdown),
        ]

    if command == "heatmap":
        counts = service.daily_counts()
        return [messages.heatmap_message(service.heatmap(), counts, theme),
                messages.busiest_days_message(counts, service.history())]

    if command == "sites":
        return [messages.sites_message(PRACTICE_SITES)]

    if command == "week":
        bars = service.week_bars()
        max_count = max([len(service.records.categories), 1] + [bar.count for bar in bars])
        return [messages.week_bars_message(bars, max_count)]

    if command == "monthly":
        return [messages.monthly_message(service.monthly(args.year))]

    if command == "check":
        done = service.toggle_category(args.category)
        category = get_practice_category(args.category)
        state = "done" if done else "cleared"
        return [messages.success_message(f"{category.icon} {category.label} {state} for {service.today()}"),
                messages.streak_message(service.current_streak())]

    if command == "add":
        if not is_valid_task_title(args.title):
            return [messages.error_message("Task title must not be empty")]
        task = service.add_task(args.title, args.difficulty, args.category, args.note)
        if task is None:
            return [messages.error_message("Task was not added")]
        return [messages.success_message(f"Added {task.title} [{task.task_id[:8]}]")]

    if command in ("toggle", "delete"):
        task_id = _resolve_task_id(service, args.task_id)
        if task_id is None:
            return [messages.error_message(f"No single task matches {args.task_id!r}")]
        if command == "delete":
            service.delete_task(task_id)
            return [messages.success_message("Task deleted")]
        task = service.toggle_task(task_id)
        state = f"solved on {task.solved_on}" if task.done else "reopened"
        return [messages.success_message(f"{task.title} {state}"),
                messages.streak_message(service.current_streak())]

    if command == "tasks":
        selected = service.filtered_tasks(args.category, args.status)
        return [messages.tasks_list_message(selected, theme, has_any=len(service.tasks) > 0)]

    if command == "theme":
        new_theme = service.toggle_theme()
        return [messages.success_message(f"Theme: {get_theme(new_theme.value)['name']}")]

    if command == "export":
        today = service.today()
        export_dir = export_dir or config.export_dir
        if args.format == "json":
            paths = [export_to_json(service.state, export_dir, today)]
        else:
            paths = [
                export_tasks_csv(service.tasks, export_dir, today),
                export_daily_csv(service.daily_counts(), service.history(), export_dir, today),
            ]
        return [messages.success_message(f"Exported {path}") for path in paths]

    raise ValueError(f"Unknown command {command!r}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(config)

    clock: Optional[Callable[[], date]] = None
    if args.date is not None:
        fixed_day = args.date
        clock = lambda: fixed_day

    store = JsonFileStore(args.data_file) if args.data_file else None
    service = create_tracker_service(config, store=store, clock=clock)
    logger.debug(f"Running {args.command} as of {service.today()}")

    for line in run(args, service):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
