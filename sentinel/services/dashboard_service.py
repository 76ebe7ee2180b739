from sqlalchemy import func, select
from sqlalchemy.orm import Session

from sentinel.core.filters import filter_records
from sentinel.core.stats import compute_asset_stats, count_by_tier, frequency, organization_risk_score
from sentinel.models.asset import Asset
from sentinel.models.organization import Organization
from sentinel.models.risk import Risk
from sentinel.services.asset_service import decorate_asset, load_assets
from sentinel.services.risk_service import load_risks

_ORGANIZATION_METRICS_LIMIT = 10
ORGANIZATION_SEARCH_FIELDS = ("name",)


def _count_by_organization(db: Session, model):
    stmt = (
        select(model.organization_id, func.count(model.id))
        .where(model.organization_id.is_not(None))
        .group_by(model.organization_id)
    )
    return {org_id: count for org_id, count in db.execute(stmt).all()}


def _organization_item(org, asset_counts, risk_counts):
    asset_count = asset_counts.get(org.id, 0)
    risk_count = risk_counts.get(org.id, 0)
    return {
        "id": org.id,
        "name": org.name,
        "asset_count": asset_count,
        "risk_count": risk_count,
        "risk_score": organization_risk_score(risk_count, asset_count),
    }


def _risk_breakdown(risks):
    return {
        "by_severity": frequency(risks, "severity"),
        "by_status": frequency(risks, "status"),
        "by_tier": count_by_tier(risks),
    }


def load_organizations(db: Session, limit=None):
    stmt = select(Organization).order_by(Organization.name)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(db.execute(stmt).scalars().all())


def organization_metrics(db: Session, limit=_ORGANIZATION_METRICS_LIMIT):
    asset_counts = _count_by_organization(db, Asset)
    risk_counts = _count_by_organization(db, Risk)
    return [_organization_item(org, asset_counts, risk_counts) for org in load_organizations(db, limit)]


def list_organizations(db: Session, search_term=""):
    organizations = load_organizations(db)
    visible = filter_records(
        organizations,
        search_term=search_term,
        search_fields=ORGANIZATION_SEARCH_FIELDS,
    )
    asset_counts = _count_by_organization(db, Asset)
    risk_counts = _count_by_organization(db, Risk)
    return {
        "count": len(visible),
        "total": len(organizations),
        "results": [_organization_item(org, asset_counts, risk_counts) for org in visible],
    }


def organization_detail(db: Session, organization_id):
    org = db.get(Organization, organization_id)
    if org is None:
        return None
    assets = load_assets(db, organization_id=organization_id)
    risks = load_risks(db, organization_id=organization_id)

    item = _organization_item(org, {org.id: len(assets)}, {org.id: len(risks)})
    item["created_at"] = org.created_at
    item["asset_stats"] = compute_asset_stats(assets)
    item["risk_analytics"] = _risk_breakdown(risks)
    item["assets"] = [decorate_asset(asset) for asset in assets]
    return item


def admin_analytics(db: Session):
    risks = db.execute(select(Risk)).scalars().unique().all()
    assets = db.execute(select(Asset)).scalars().unique().all()
    organization_count = db.execute(select(func.count(Organization.id))).scalar_one()

    risk_analytics = _risk_breakdown(risks)
    risk_analytics["by_category"] = frequency(risks, "category")
    return {
        "system_overview": {
            "organizations": organization_count,
            "assets": len(assets),
            "risks": len(risks),
        },
        "risk_analytics": risk_analytics,
        "asset_analytics": {
            "by_status": frequency(assets, "status"),
            "by_type": frequency(assets, "type"),
            "by_condition": frequency(assets, "condition"),
        },
        "organization_metrics": organization_metrics(db),
    }


__all__ = [
    "admin_analytics",
    "list_organizations",
    "load_organizations",
    "organization_detail",
    "organization_metrics",
]
