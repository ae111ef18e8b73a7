"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    format_clock_time,
    get_app_timezone,
    next_occurrence,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    parse_clock_time,
)

__all__ = [
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "format_clock_time",
    "get_app_timezone",
    "next_occurrence",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "parse_clock_time",
]
