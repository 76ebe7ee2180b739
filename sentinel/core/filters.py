"""Composable list predicates shared by the feed, risk list, asset and audit views.

Filters never reorder: the output keeps the input order and the input
elements themselves. Sorting is a separate, stable step.
"""

from dataclasses import dataclass, fields

from sentinel.core.constants import ALL, AUDIT_DATE_RANGES, SORT_FIELDS
from sentinel.core.dates import normalize_datetime, within_range
from sentinel.core.records import read_field, read_path
from sentinel.core.risk_rules import matches_risk_level

RISK_SEARCH_FIELDS = ("title", "location", "category")
ADMIN_RISK_SEARCH_FIELDS = ("title", "description", "organization_name", "asset_name")
ASSET_SEARCH_FIELDS = ("name", "type", "location", "organization_name")
AUDIT_SEARCH_FIELDS = ("action", "details", "user.name")

TIME_FIELDS = ("timestamp", "updated_at", "created_at")
_DATE_SORT_FIELDS = ("created_at", "updated_at", "timestamp")


@dataclass(frozen=True)
class RiskCriteria:
    search_term: str = ""
    status: str = ALL
    priority: str = ALL
    severity: str = ALL
    risk_level: str = ALL
    type: str = ALL
    time_range: str = ALL
    organization_id: str = ALL

    @classmethod
    def from_mapping(cls, values):
        if isinstance(values, cls):
            return values
        if not values:
            return cls()
        known = {field.name for field in fields(cls)}
        kwargs = {}
        for key, value in dict(values).items():
            if key == "search":
                key = "search_term"
            if key in known and value is not None:
                kwargs[key] = value
        return cls(**kwargs)


def _is_unrestricted(value) -> bool:
    return value is None or value == "" or value == ALL


def matches_search(record, search_term, search_fields) -> bool:
    if not search_term:
        return True
    needle = str(search_term).lower()
    for path in search_fields:
        value = read_path(record, path)
        if value is not None and needle in str(value).lower():
            return True
    return False


def matches_exact(record, field, expected) -> bool:
    if _is_unrestricted(expected):
        return True
    actual = read_field(record, field)
    if actual is None:
        return False
    return str(actual) == str(expected)


def record_time(record):
    for name in TIME_FIELDS:
        value = read_field(record, name)
        if value is not None:
            return value
    return None


def filter_records(
    records,
    *,
    search_term="",
    search_fields=(),
    exact=None,
    risk_level=ALL,
    time_range=ALL,
    now=None,
):
    exact_items = [(name, value) for name, value in (exact or {}).items() if not _is_unrestricted(value)]
    results = []
    for record in records:
        if not matches_search(record, search_term, search_fields):
            continue
        if not all(matches_exact(record, name, value) for name, value in exact_items):
            continue
        if not _is_unrestricted(risk_level) and not matches_risk_level(
            read_field(record, "risk_score"), risk_level
        ):
            continue
        if not _is_unrestricted(time_range) and not within_range(record_time(record), now, time_range):
            continue
        results.append(record)
    return results


def filter_risks(records, criteria=None, *, now=None, search_fields=RISK_SEARCH_FIELDS):
    criteria = RiskCriteria.from_mapping(criteria)
    return filter_records(
        records,
        search_term=criteria.search_term,
        search_fields=search_fields,
        exact={
            "status": criteria.status,
            "priority": criteria.priority,
            "severity": criteria.severity,
            "type": criteria.type,
            "organization_id": criteria.organization_id,
        },
        risk_level=criteria.risk_level,
        time_range=criteria.time_range,
        now=now,
    )


def filter_admin_risks(records, criteria=None):
    return filter_risks(records, criteria, search_fields=ADMIN_RISK_SEARCH_FIELDS)


def filter_assets(records, search_term="", status=ALL, asset_type=ALL, organization_id=ALL):
    return filter_records(
        records,
        search_term=search_term,
        search_fields=ASSET_SEARCH_FIELDS,
        exact={"status": status, "type": asset_type, "organization_id": organization_id},
    )


def filter_audit_logs(
    records,
    search_term="",
    category=ALL,
    status=ALL,
    severity=ALL,
    date_range=ALL,
    now=None,
):
    return filter_records(
        records,
        search_term=search_term,
        search_fields=AUDIT_SEARCH_FIELDS,
        exact={"category": category, "status": status, "severity": severity},
        time_range=AUDIT_DATE_RANGES.get(date_range, ALL),
        now=now,
    )


def _sort_value(record, field):
    value = read_field(record, field)
    if field in _DATE_SORT_FIELDS:
        return normalize_datetime(value)
    return value


def sort_risks(records, field="updated_at", order="desc"):
    """Order ``records`` by ``field``.

    The sort is stable: records with equal keys keep their input order in both
    directions, so a multi-key ordering can be built by sorting on the least
    significant key first (see ``sort_risks_by``). Records missing the key go
    last. Unknown fields leave the order untouched.
    """
    records = list(records)
    if field not in SORT_FIELDS:
        return records

    keyed = []
    missing = []
    for record in records:
        value = _sort_value(record, field)
        if value is None:
            missing.append(record)
        else:
            keyed.append((value, record))

    keyed.sort(key=lambda item: item[0], reverse=order != "asc")
    return [record for _, record in keyed] + missing


def sort_risks_by(records, keys):
    """Multi-key ordering; ``keys`` is a sequence of (field, order), most significant first."""
    ordered = list(records)
    for field, order in reversed(list(keys)):
        ordered = sort_risks(ordered, field, order)
    return ordered


def next_sort_state(current_field, current_order, clicked_field):
    if clicked_field == current_field:
        return clicked_field, "asc" if current_order == "desc" else "desc"
    return clicked_field, "desc"


__all__ = [
    "ADMIN_RISK_SEARCH_FIELDS",
    "ASSET_SEARCH_FIELDS",
    "AUDIT_SEARCH_FIELDS",
    "RISK_SEARCH_FIELDS",
    "RiskCriteria",
    "filter_admin_risks",
    "filter_assets",
    "filter_audit_logs",
    "filter_records",
    "filter_risks",
    "matches_exact",
    "matches_search",
    "next_sort_state",
    "record_time",
    "sort_risks",
    "sort_risks_by",
]
