"""Validation and utility functions for schedule processing."""

import re
from datetime import date, time, timedelta
from pathlib import Path
from typing import List, Optional

from .models import ScheduleDocument, Weekday

SUPPORTED_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.bmp', '.tiff', '.tif', '.pdf', '.json', '.txt'}


def is_supported_file(file_path: str) -> bool:
    """Quick check if the file extension is supported."""
    return Path(file_path).suffix.lower() in SUPPORTED_EXTENSIONS


def validate_document(document: ScheduleDocument, placeholder_title: str = "Занятие") -> List[str]:
    """
    Validate a parsed schedule and return warnings for the caller to show.

    Args:
        document: ScheduleDocument to validate
        placeholder_title: Title used when no title was found

    Returns:
        List of validation warning messages
    """
    status = document.status
    if status == "no_fragments":
        return ["No text was recognized in the source"]
    if status == "no_anchors":
        return ["Text was recognized but no time ranges were found"]
    if status == "no_items":
        return [f"All {document.anchor_count} time ranges were invalid (end not after start)"]

    warnings = []

    missing_weekday = sum(1 for item in document.items if item.weekday is None)
    if missing_weekday > 0:
        warnings.append(f"{missing_weekday} items missing weekday information")

    untitled = sum(1 for item in document.items if item.title == placeholder_title)
    if untitled > 0:
        warnings.append(f"{untitled} items have no recognized title")

    return warnings


def sanitize_text(text: str) -> str:
    """
    Normalize OCR text: unify dashes, collapse whitespace, drop NUL characters.

    Args:
        text: Text to sanitize

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    text = text.replace('\x00', '')
    text = re.sub(r'[–—]', '-', text)
    text = re.sub(r'\s+', ' ', text)

    return text.strip()


def format_hhmm(value: time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def weekday_short_name(code: Optional[int]) -> str:
    weekday = Weekday.from_code(code)
    return weekday.short_name if weekday else "-"


def next_monday(from_date: date) -> date:
    """Return ``from_date`` if it is a Monday, else the following Monday."""
    days_ahead = (7 - from_date.weekday()) % 7
    return from_date + timedelta(days=days_ahead)


def next_working_day(from_date: date, today: Optional[date] = None) -> date:
    """
    Pick the first day a single-day schedule should land on.

    Today (on a weekday) moves to tomorrow; Saturday and Sunday move to the
    next Monday.

    Args:
        from_date: Starting date
        today: Reference "today" (defaults to date.today())

    Returns:
        A Monday-to-Friday date
    """
    today = today or date.today()
    d = from_date
    if d.weekday() < 5 and d == today:
        d = d + timedelta(days=1)
    if d.weekday() >= 5:
        return next_monday(d)
    return d
