"""
Read-side display helpers for activity feed entries.

Stored ActivityLog rows stay plain records; everything the feed shows
beyond the raw columns (title, icon, colours, "3 minutes ago") is derived
here at read time.
"""
from datetime import datetime, timezone
from typing import Optional

from app.models.activity_log import ActivityLog


_ICONS = {
    "add": "ri-add-line",
    "remove": "ri-subtract-line",
    "update": "ri-edit-line",
    "move": "ri-arrow-left-right-line",
    "login": "ri-login-box-line",
    "logout": "ri-logout-box-line",
}
_DEFAULT_ICON = "ri-information-line"

# (background, text)
_COLORS = {
    "add": ("bg-blue-100", "text-blue-600"),
    "remove": ("bg-red-100", "text-red-600"),
    "update": ("bg-yellow-100", "text-yellow-600"),
    "move": ("bg-green-100", "text-green-600"),
    "login": ("bg-purple-100", "text-purple-600"),
    "logout": ("bg-gray-100", "text-gray-600"),
}
_DEFAULT_COLORS = ("bg-gray-100", "text-gray-600")


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything is stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def relative_time(timestamp: datetime, now: Optional[datetime] = None) -> str:
    """
    Human-friendly age of a timestamp.

    < 60s "Just now", < 60min minutes, < 24h hours, < 7d days,
    < 30d weeks, otherwise an absolute date like "Mar 5, 2025".
    Magnitudes are truncated; the unit is singular only for exactly 1.
    """
    timestamp = as_utc(timestamp)
    now = as_utc(now) if now else datetime.now(timezone.utc)
    seconds = (now - timestamp).total_seconds()

    if seconds < 60:
        return "Just now"

    minutes = seconds / 60
    if minutes < 60:
        return _plural(int(minutes), "minute")

    hours = minutes / 60
    if hours < 24:
        return _plural(int(hours), "hour")

    days = hours / 24
    if days < 7:
        return _plural(int(days), "day")

    if days < 30:
        return _plural(int(days / 7), "week")

    return f"{timestamp:%b} {timestamp.day}, {timestamp.year}"


def title(description: str) -> str:
    """Short title: the first word of the description."""
    return description.split(" ")[0] if description else ""


def icon_class(action_type: str) -> str:
    return _ICONS.get((action_type or "").lower(), _DEFAULT_ICON)


def color_classes(action_type: str) -> str:
    background, text = _COLORS.get((action_type or "").lower(), _DEFAULT_COLORS)
    return f"{background} {text}"


def item_link(item_sku: Optional[str]) -> str:
    return f"/items/{item_sku}" if item_sku else "#"


def present(log: ActivityLog, now: Optional[datetime] = None) -> dict:
    """Flatten an entry and its display fields into one response dict."""
    return {
        "id": log.id,
        "action_type": log.action_type,
        "description": log.description,
        "item_sku": log.item_sku,
        "user_id": log.user_id,
        "user_name": log.user_name,
        "timestamp": log.timestamp,
        "title": title(log.description),
        "icon": icon_class(log.action_type),
        "color_classes": color_classes(log.action_type),
        "relative_time": relative_time(log.timestamp, now),
        "item_link": item_link(log.item_sku),
    }
