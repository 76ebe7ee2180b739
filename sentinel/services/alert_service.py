from sqlalchemy.orm import Session

from sentinel.core.constants import FEED_STATUSES
from sentinel.core.filters import sort_risks
from sentinel.core.state import AppState, FilterOptions, alert_stats, filtered_alerts
from sentinel.services.risk_service import decorate_risk, load_risks


def load_feed_risks(db: Session):
    return load_risks(db, statuses=FEED_STATUSES)


def build_alert_feed(db: Session, filters: FilterOptions, *, now=None):
    """Live alert feed: open risks narrowed by ``filters``, newest first.

    Stats are computed over the whole feed so the tier buttons keep showing
    totals while a filter is active.
    """
    risks = load_feed_risks(db)
    state = AppState(filters=filters)
    visible = sort_risks(filtered_alerts(state, risks, now=now), "timestamp", "desc")
    return {
        "count": len(visible),
        "filters": {
            "risk_level": filters.risk_level,
            "status": filters.status,
            "type": filters.type,
            "time_range": filters.time_range,
        },
        "stats": alert_stats(risks),
        "results": [decorate_risk(risk, now) for risk in visible],
    }


def feed_stats(db: Session):
    return alert_stats(load_feed_risks(db))


__all__ = ["build_alert_feed", "feed_stats", "load_feed_risks"]
