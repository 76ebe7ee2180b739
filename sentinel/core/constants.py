# Statuses shown on the live alert feed; resolved and archived risks drop off.
FEED_STATUSES = ("active", "investigating", "monitoring")

ALL = "all"

TIME_RANGE_HOURS = {
    "1h": 1,
    "24h": 24,
    "7d": 24 * 7,
    "30d": 24 * 30,
}

AUDIT_DATE_RANGES = {
    "24hours": "24h",
    "7days": "7d",
    "30days": "30d",
}

SORT_FIELDS = ("created_at", "updated_at", "timestamp", "risk_score")

DEFAULT_MAP_CENTER = (4.5, 102.0)
DEFAULT_MAP_ZOOM = 8
