import re
from datetime import datetime, timedelta

from src.activity.service import (
    format_activity,
    get_activity_types,
    get_relative_time,
    new_activity_id,
)

NOW = datetime(2026, 5, 10, 12, 0, 0)


class TestActivityIds:

    def test_id_format(self):
        assert re.fullmatch(r"activity-\d{13}-[a-z0-9]{9}", new_activity_id())

    def test_ids_are_unique(self):
        assert len({new_activity_id() for _ in range(200)}) == 200


class TestActivityTypes:

    def test_types_in_declaration_order(self):
        assert get_activity_types() == [
            "SEARCH",
            "VIEW_PROFILE",
            "EXPORT_DATA",
            "CREATE_WATCHLIST",
            "ADD_TO_WATCHLIST",
            "SAVE_SEARCH",
            "DOWNLOAD_REPORT",
            "API_CALL",
        ]


class TestRelativeTime:

    def test_buckets(self):
        assert get_relative_time(NOW - timedelta(seconds=30), NOW) == "Just now"
        assert get_relative_time(NOW - timedelta(minutes=1), NOW) == "1 minute ago"
        assert get_relative_time(NOW - timedelta(minutes=5), NOW) == "5 minutes ago"
        assert get_relative_time(NOW - timedelta(hours=3), NOW) == "3 hours ago"
        assert get_relative_time(NOW - timedelta(days=1), NOW) == "1 day ago"
        assert get_relative_time(NOW - timedelta(days=65), NOW) == "2 months ago"


class TestFormatActivity:

    def test_known_type_gets_label(self):
        entry = {"activity_type": "VIEW_PROFILE", "timestamp": (NOW - timedelta(hours=2)).isoformat()}
        formatted = format_activity(entry, now=NOW)
        assert formatted["label"] == "Viewed Company Profile"
        assert formatted["relative_time"] == "2 hours ago"
        assert formatted["formatted_time"] == "10 May 2026, 10:00"
        assert formatted["activity_type"] == "VIEW_PROFILE"

    def test_unknown_type_falls_back_to_raw_value(self):
        formatted = format_activity({"activity_type": "LEGACY_EVENT", "timestamp": NOW}, now=NOW)
        assert formatted["label"] == "LEGACY_EVENT"
        assert formatted["relative_time"] == "Just now"
