import math
from datetime import date, datetime, time, timezone

from sentinel.core.constants import ALL, TIME_RANGE_HOURS

_SECONDS_PER_HOUR = 3600


def normalize_datetime(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        if value_text.endswith("Z"):
            value_text = value_text[:-1] + "+00:00"
        try:
            return normalize_datetime(datetime.fromisoformat(value_text))
        except ValueError:
            return None
    return None


def utc_now():
    return datetime.now(timezone.utc)


def elapsed_hours(timestamp, now=None):
    moment = normalize_datetime(timestamp)
    if moment is None:
        return None
    reference = normalize_datetime(now) or utc_now()
    return (reference - moment).total_seconds() / _SECONDS_PER_HOUR


def within_range(timestamp, now=None, time_range=ALL):
    """True when ``timestamp`` is no older than the rolling ``time_range`` window.

    ``"all"``, unknown ranges and unreadable timestamps never exclude a record.
    """
    threshold = TIME_RANGE_HOURS.get(time_range)
    if threshold is None:
        return True
    hours = elapsed_hours(timestamp, now)
    if hours is None:
        return True
    return hours <= threshold


def format_calendar_date(moment):
    return "{}/{}/{}".format(moment.month, moment.day, moment.year)


def format_recency(timestamp, now=None):
    moment = normalize_datetime(timestamp)
    if moment is None:
        return ""
    reference = normalize_datetime(now) or utc_now()
    elapsed_seconds = max((reference - moment).total_seconds(), 0)

    minutes = math.floor(elapsed_seconds / 60)
    if minutes < 60:
        return "{}m ago".format(minutes)
    hours = math.floor(elapsed_seconds / _SECONDS_PER_HOUR)
    if hours < 24:
        return "{}h ago".format(hours)
    return format_calendar_date(moment)
