# services/__init__.py

"""
Interview Prep Tracker services

Tracker state mutations and queries, and data export.
"""

from .tracker_service import (
    DashboardSummary,
    TrackerService,
    create_tracker_service,
    get_tracker_service,
    initialize_tracker_service
)
from .data_export import export_to_json, export_tasks_csv, export_daily_csv

__all__ = [
    'DashboardSummary',
    'TrackerService',
    'create_tracker_service',
    'get_tracker_service',
    'initialize_tracker_service',
    'export_to_json',
    'export_tasks_csv',
    'export_daily_csv'
]
