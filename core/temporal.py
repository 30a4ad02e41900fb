"""
Context Keeper - Temporal Formatting
Human-readable time spans for bridge messages and the inspector
"""

from datetime import datetime
from typing import Optional


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''}"


def format_elapsed_span(start: datetime, end: datetime) -> str:
    """
    Describe the time elapsed between two points, coarsely.

    Buckets into whole days, then whole hours, then minutes. Spans of
    ten minutes or less are not worth mentioning and return an empty
    string, as do negative spans (out-of-order timestamps).

    Args:
        start: Earlier point in time
        end: Later point in time

    Returns:
        '2 days', '1 hour', '45 minutes', or ''
    """
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        return ""

    days = int(seconds // 86400)
    if days > 0:
        return _plural(days, "day")

    hours = int(seconds // 3600)
    if hours > 0:
        return _plural(hours, "hour")

    minutes = int(seconds // 60)
    if minutes > 10:
        return f"{minutes} minutes"

    return ""


def format_fuzzy_relative_time(dt: datetime, now: Optional[datetime] = None) -> str:
    """
    Format datetime relative to now using fuzzy, human-like descriptions.

    Args:
        dt: The datetime to format
        now: Reference point (defaults to the current time)

    Returns:
        Fuzzy relative time like 'A few minutes ago', 'Earlier today', etc.
    """
    now = now or datetime.now()
    diff = now - dt
    seconds = diff.total_seconds()

    # Future timestamps read as "now"
    if seconds < 30:
        return "Just now"
    elif seconds < 120:  # 2 minutes
        return "A moment ago"
    elif seconds < 600:  # 10 minutes
        return "A few minutes ago"
    elif seconds < 2700:  # 45 minutes
        return "Around half an hour ago"
    elif seconds < 5400:  # 90 minutes
        return "About an hour ago"
    elif seconds < 10800:  # 3 hours
        return "A couple hours ago"

    if dt.date() == now.date():
        return "Earlier today"

    if dt.date().toordinal() == now.date().toordinal() - 1:
        return "Yesterday"

    days = diff.days
    if days < 7:
        return "A few days ago"
    elif days < 14:
        return "Last week"
    elif days < 60:
        return "A few weeks ago"
    return "A while ago"
