"""Monitoring module for boxpack.

Provides metrics tracking and Telegram notifications for packing experiments.
"""

from .metrics import (
    BinMetrics,
    ExperimentMetrics,
    export_to_csv,
    export_to_json,
    format_packing_report,
    format_summary,
)
from .telegram_notifier import (
    format_dataset_milestone,
    format_error,
    format_experiment_start,
    format_final_summary,
    send_telegram,
)

__all__ = [
    # Metrics
    "BinMetrics",
    "ExperimentMetrics",
    "export_to_csv",
    "export_to_json",
    "format_packing_report",
    "format_summary",
    # Telegram
    "send_telegram",
    "format_experiment_start",
    "format_dataset_milestone",
    "format_error",
    "format_final_summary",
]
