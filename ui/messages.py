# ui/messages.py

from typing import Dict, List, Sequence

from core.models import PRACTICE_CATEGORIES, CategoryLog, PracticeSite, Task
from core.stats import (
    DOW_NAMES, HeatmapGrid, MonthSummary, WeekBar, day_intensity, heatmap_tooltip
)
from ui.progress import count_bar, progress_bar, ratio_bar, streak_emoji
from ui.themes import intensity_glyph
from utils.text_utils import pluralize, truncate

CELL_WIDTH = 2


def streak_message(streak: int) -> str:
    return f"{streak_emoji(streak)} Current streak: {pluralize(streak, 'day')}"


def dashboard_message(summary, theme: dict) -> str:
    lines = [
        f"{theme['emoji']} Interview prep · {summary.today}",
        streak_message(summary.current_streak),
        f"🏅 Longest streak: {summary.longest_streak}",
        f"📅 This week: {summary.week_total}   🗓 This month: {summary.month_total}",
        f"🧩 Solved today: {summary.today_solved}   "
        f"Pending: {summary.pending_count}   Done: {summary.done_count}",
        f"Today: {summary.today_completed}/{summary.category_count} "
        + progress_bar(int(summary.today_progress * 100)),
    ]
    return "\n".join(lines)


def categories_message(records: CategoryLog, day: str, totals: Dict[str, int], theme: dict) -> str:
    lines = []
    for category in PRACTICE_CATEGORIES:
        mark = theme["check"] if records.is_done(day, category.category_id) else theme["uncheck"]
        total = totals.get(category.category_id, 0)
        lines.append(f"{mark} {category.icon} {category.label:<16} {total}d  [{category.category_id}]")
    return "\n".join(lines)


def tasks_list_message(tasks: List[Task], theme: dict, has_any: bool = True) -> str:
    if not tasks:
        if not has_any:
            return "// No tasks yet. Use 'add' to get started!"
        return "// No tasks match filters."

    lines = []
    for task in tasks:
        mark = theme["check"] if task.done else theme["uncheck"]
        line = f"{mark} {truncate(task.title, 48):<48} {task.difficulty:<6} {task.category:<16} {task.task_id[:8]}"
        if task.done and task.solved_on:
            line += f"  solved {task.solved_on}"
        lines.append(line)
        if task.note:
            lines.append(f"    ↳ {truncate(task.note, 60)}")
    return "\n".join(lines)


def difficulty_message(breakdown: Dict[str, int]) -> str:
    return "   ".join(f"{name}: {count}" for name, count in breakdown.items())


def heatmap_message(grid: HeatmapGrid, counts: Dict[str, int], theme: dict) -> str:
    """Weekday rows by week columns, with month names above their first column"""
    header = [" "] * (len(grid.weeks) * CELL_WIDTH)
    for week_index in range(len(grid.weeks)):
        label = grid.label_for(week_index)
        if label is None:
            continue
        start = week_index * CELL_WIDTH
        for offset, char in enumerate(label):
            if start + offset < len(header):
                header[start + offset] = char

    lines = ["    " + "".join(header).rstrip()]
    for row in range(7):
        cells = []
        for week in grid.weeks:
            day = week[row]
            if day is None:
                cells.append(theme["empty_glyph"])
            else:
                cells.append(intensity_glyph(theme, day_intensity(counts.get(day, 0))))
        lines.append(f"{DOW_NAMES[row]} " + " ".join(cells))

    legend = " ".join(intensity_glyph(theme, level) for level in range(5))
    lines.append(f"    Less {legend} More")
    return "\n".join(lines)


def busiest_days_message(counts: Dict[str, int], days: Sequence[str], limit: int = 3) -> str:
    """The most active days of the range, newest first among equals"""
    active = [d for d in days if counts.get(d, 0) > 0]
    if not active:
        return "No activity yet"
    ranked = sorted(reversed(active), key=lambda d: counts[d], reverse=True)[:limit]
    return "Busiest: " + ", ".join(heatmap_tooltip(d, counts[d]) for d in ranked)


def monthly_message(summaries: List[MonthSummary]) -> str:
    lines = []
    for summary in summaries:
        lines.append(
            f"{summary.label} {summary.year}  "
            f"{summary.active_days:>2}/{summary.days_in_month} days  "
            f"{summary.total:>3} total  "
            + ratio_bar(summary.active_days, summary.days_in_month, length=10)
        )
    return "\n".join(lines)


def week_bars_message(bars: List[WeekBar], max_count: int) -> str:
    lines = []
    for bar in bars:
        marker = "▶" if bar.is_today else " "
        lines.append(f"{marker} {bar.label} {bar.day} {count_bar(bar.count, max_count):<20} {bar.count}")
    return "\n".join(lines)


def success_message(text: str) -> str:
    return f"✅ {text}"


def sites_message(sites: Sequence[PracticeSite]) -> str:
    return "\n".join(f"{site.icon:<4}{site.name:<14} {site.url}" for site in sites)


def error_message(text: str) -> str:
    return f"⚠️ {text}"
