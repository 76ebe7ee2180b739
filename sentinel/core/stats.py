from sentinel.core.records import read_field
from sentinel.core.risk_rules import classify_by_score


def frequency(records, field):
    """Count observed values of ``field``; absent categories are not zero-filled."""
    counts = {}
    for record in records:
        value = read_field(record, field)
        if value is None:
            continue
        counts[value] = counts.get(value, 0) + 1
    return counts


def count_by_tier(records):
    counts = {"high": 0, "medium": 0, "low": 0}
    for record in records:
        score = read_field(record, "risk_score")
        if score is None:
            continue
        counts[classify_by_score(score).tier] += 1
    return counts


def compute_alert_stats(records):
    records = list(records)
    tiers = count_by_tier(records)
    return {
        "total": len(records),
        "high": tiers["high"],
        "medium": tiers["medium"],
        "low": tiers["low"],
        "by_status": frequency(records, "status"),
        "by_type": frequency(records, "type"),
    }


def average_risk_score(records):
    scores = [read_field(record, "risk_score") for record in records]
    scores = [score for score in scores if score is not None]
    if not scores:
        return None
    return round(sum(scores) / len(scores), 1)


def compute_asset_stats(records):
    records = list(records)
    return {
        "total": len(records),
        "by_status": frequency(records, "status"),
        "by_tier": count_by_tier(records),
        "average_risk_score": average_risk_score(records),
    }


def organization_risk_score(risk_count, asset_count):
    if risk_count <= 0:
        return 0
    return round(min(100, (risk_count / max(asset_count, 1)) * 50))


__all__ = [
    "average_risk_score",
    "compute_alert_stats",
    "compute_asset_stats",
    "count_by_tier",
    "frequency",
    "organization_risk_score",
]
