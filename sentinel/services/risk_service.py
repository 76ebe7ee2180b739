import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sentinel.core.dates import format_recency, utc_now
from sentinel.core.filters import filter_admin_risks, filter_risks, record_time, sort_risks
from sentinel.core.records import read_field
from sentinel.core.risk_rules import (
    build_matrix_grid,
    classify_by_matrix,
    classify_by_score,
    likelihood_label,
    resolve_matrix_inputs,
)
from sentinel.core.stats import frequency
from sentinel.models.risk import Risk
from sentinel.schemas.risk import RiskRead

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("status", "priority", "notes", "mitigation", "assigned_to")
_REQUIRED_FIELDS = ("status", "priority")


def load_risks(db: Session, statuses=None, *, asset_id=None, organization_id=None):
    stmt = select(Risk).order_by(Risk.id)
    if statuses:
        stmt = stmt.where(Risk.status.in_(tuple(statuses)))
    if asset_id is not None:
        stmt = stmt.where(Risk.asset_id == asset_id)
    if organization_id is not None:
        stmt = stmt.where(Risk.organization_id == organization_id)
    return list(db.execute(stmt).scalars().unique())


def get_risk(db: Session, risk_id):
    return db.get(Risk, risk_id)


def decorate_risk(risk, now=None):
    item = RiskRead.model_validate(risk).model_dump()
    classification = classify_by_score(item["risk_score"])
    item["tier"] = classification.tier
    item["intent"] = classification.intent
    item["label"] = classification.label
    item["recency"] = format_recency(record_time(item), now)
    return item


def list_risks(
    db: Session,
    criteria=None,
    sort_by="updated_at",
    sort_order="desc",
    *,
    limit=None,
    now=None,
):
    risks = load_risks(db)
    filtered = sort_risks(filter_risks(risks, criteria, now=now), sort_by, sort_order)

    limited = limit is not None and len(filtered) > limit
    visible = filtered[:limit] if limit is not None else filtered
    return {
        "count": len(visible),
        "total_count": len(risks),
        "limited": limited,
        "sort_by": sort_by,
        "sort_order": sort_order,
        "results": [decorate_risk(risk, now) for risk in visible],
    }


def admin_risk_list(db: Session, criteria=None):
    risks = load_risks(db)
    filtered = sort_risks(filter_admin_risks(risks, criteria), "created_at", "desc")
    return {
        "count": len(filtered),
        "summary": {
            "total": len(risks),
            "by_severity": frequency(risks, "severity"),
            "by_status": frequency(risks, "status"),
        },
        "results": [RiskRead.model_validate(risk).model_dump() for risk in filtered],
    }


def update_risk(db: Session, risk_id, changes, *, now=None):
    """Apply user edits to a risk and stamp ``updated_at``.

    Any status may move to any other status. Returns ``None`` when the risk
    does not exist.
    """
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError("Fields not editable: {}".format(", ".join(sorted(unknown))))

    risk = get_risk(db, risk_id)
    if risk is None:
        return None

    previous_status = risk.status
    for field, value in changes.items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(risk, field, value)
    risk.updated_at = now or utc_now()

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update risk %s", risk_id, extra={"risk_id": risk_id})
        raise

    if risk.status != previous_status:
        logger.info(
            "Risk %s status %s -> %s",
            risk_id,
            previous_status,
            risk.status,
            extra={"risk_id": risk_id},
        )
    return risk


def archive_risk(db: Session, risk_id, *, now=None):
    return update_risk(db, risk_id, {"status": "archived"}, now=now)


def risk_assessment(record):
    pof, cof = resolve_matrix_inputs(record)
    explicit = bool(read_field(record, "probability_of_failure")) and bool(
        read_field(record, "consequence_of_failure")
    )
    return matrix_assessment(pof, cof, derived=not explicit)


def matrix_assessment(pof, cof, *, derived=False):
    payload = {
        "probability": pof,
        "consequence": cof,
        "probability_label": likelihood_label(pof),
        "consequence_label": likelihood_label(cof),
        "derived": derived,
        "grid": build_matrix_grid(pof, cof),
    }
    if pof is not None and cof is not None:
        payload.update(classify_by_matrix(pof, cof)._asdict())
    return payload


__all__ = [
    "EDITABLE_FIELDS",
    "admin_risk_list",
    "archive_risk",
    "decorate_risk",
    "get_risk",
    "list_risks",
    "load_risks",
    "matrix_assessment",
    "risk_assessment",
    "update_risk",
]
