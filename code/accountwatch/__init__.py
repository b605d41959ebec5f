"""
Grouped Markdown reports of screen name changes and suspensions for tracked accounts.
"""

from .config import Settings, build_settings
from .grouping import DateBucket, build_buckets, most_recent
from .io import load_items, load_settings, read_rows
from .kinds import KINDS, SCREEN_NAMES, SUSPENSIONS, ReportKind
from .records import (
    InvalidRecord,
    ScreenNameRecord,
    SuspensionRecord,
    UnknownSuspension,
    parse_screen_name_row,
    parse_suspension_row,
)
from .report import render_report
from .thumbnails import resolve_thumbnail

__all__ = [
    "Settings",
    "build_settings",
    "DateBucket",
    "build_buckets",
    "most_recent",
    "load_items",
    "load_settings",
    "read_rows",
    "KINDS",
    "SCREEN_NAMES",
    "SUSPENSIONS",
    "ReportKind",
    "InvalidRecord",
    "ScreenNameRecord",
    "SuspensionRecord",
    "UnknownSuspension",
    "parse_screen_name_row",
    "parse_suspension_row",
    "render_report",
    "resolve_thumbnail",
]
