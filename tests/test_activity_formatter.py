from datetime import datetime, timedelta, timezone

import pytest

from app.models.activity_log import ActivityLog
from app.services import activity_formatter
from app.services.activity_formatter import relative_time


NOW = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "age, expected",
    [
        (timedelta(seconds=30), "Just now"),
        (timedelta(seconds=90), "1 minute ago"),
        (timedelta(minutes=3), "3 minutes ago"),
        (timedelta(minutes=61), "1 hour ago"),
        (timedelta(hours=5), "5 hours ago"),
        (timedelta(hours=25), "1 day ago"),
        (timedelta(days=3), "3 days ago"),
        (timedelta(days=10), "1 week ago"),
        (timedelta(days=20), "2 weeks ago"),
    ],
)
def test_relative_time_buckets(age, expected):
    assert relative_time(NOW - age, now=NOW) == expected


def test_relative_time_falls_back_to_date_after_30_days():
    assert relative_time(datetime(2025, 3, 5, 8, 0, tzinfo=timezone.utc), now=NOW) == "Mar 5, 2025"


def test_relative_time_treats_naive_timestamps_as_utc():
    naive = (NOW - timedelta(minutes=2)).replace(tzinfo=None)
    assert relative_time(naive, now=NOW) == "2 minutes ago"


def test_display_fields():
    log = ActivityLog(
        id=7,
        action_type="Move",
        description="Item moved to shipment IN001",
        item_sku="ITEM-1001",
        user_id=None,
        user_name="System",
        timestamp=NOW - timedelta(hours=2),
    )

    data = activity_formatter.present(log, now=NOW)

    assert data["title"] == "Item"
    assert data["icon"] == "ri-arrow-left-right-line"
    assert data["color_classes"] == "bg-green-100 text-green-600"
    assert data["relative_time"] == "2 hours ago"
    assert data["item_link"] == "/items/ITEM-1001"


def test_unknown_action_uses_defaults():
    assert activity_formatter.icon_class("Stocktake") == "ri-information-line"
    assert activity_formatter.color_classes("Stocktake") == "bg-gray-100 text-gray-600"
    assert activity_formatter.item_link(None) == "#"
