# services/data_export.py

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable

import pandas as pd

from core.database import TrackerState
from core.models import TaskLog

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"

TASK_COLUMNS = ["id", "title", "difficulty", "category", "note", "done", "addedOn", "solvedOn"]


def export_to_json(state: TrackerState, export_dir: Path, today: str) -> Path:
    """Full snapshot of the persisted state"""
    export_dir.mkdir(parents=True, exist_ok=True)
    filename = export_dir / f"tracker_export_{today}.json"
    export_data = {
        "export_info": {
            "format": "json",
            "version": EXPORT_VERSION,
            "exported_at": datetime.now().isoformat(),
        },
        "records": state.records.to_dict(),
        "tasks": state.tasks.to_list(),
        "theme": state.theme.value,
    }
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(export_data, f, ensure_ascii=False, indent=2)
    logger.info(f"Exported state to {filename}")
    return filename


def export_tasks_csv(tasks: TaskLog, export_dir: Path, today: str) -> Path:
    """One row per task, newest first"""
    export_dir.mkdir(parents=True, exist_ok=True)
    filename = export_dir / f"tasks_export_{today}.csv"
    df = pd.DataFrame(tasks.to_list(), columns=TASK_COLUMNS)
    df.to_csv(filename, index=False)
    logger.info(f"Exported {len(df)} tasks to {filename}")
    return filename


def export_daily_csv(counts: Dict[str, int], days: Iterable[str], export_dir: Path, today: str) -> Path:
    """Activity count for each day of the given range, zeros included"""
    export_dir.mkdir(parents=True, exist_ok=True)
    filename = export_dir / f"daily_activity_{today}.csv"
    df = pd.DataFrame({"day": list(days)})
    df["count"] = df["day"].map(lambda d: counts.get(d, 0)).astype(int)
    df.to_csv(filename, index=False)
    logger.info(f"Exported {len(df)} days of activity to {filename}")
    return filename
