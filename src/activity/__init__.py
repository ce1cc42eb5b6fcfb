"""
Activity Module - Append-only user activity log.
"""

from src.activity.service import (
    format_activity,
    get_activity_stats,
    get_activity_types,
    get_user_activity_logs,
    log_activity,
    log_activity_safe,
)

__all__ = [
    "format_activity",
    "get_activity_stats",
    "get_activity_types",
    "get_user_activity_logs",
    "log_activity",
    "log_activity_safe",
]
