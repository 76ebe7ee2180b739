from sqlalchemy import select
from sqlalchemy.orm import Session

from sentinel.core.constants import ALL
from sentinel.core.filters import filter_assets, sort_risks
from sentinel.core.risk_rules import classify_by_score
from sentinel.core.stats import compute_alert_stats, compute_asset_stats
from sentinel.models.asset import Asset
from sentinel.schemas.asset import AssetRead
from sentinel.services.risk_service import decorate_risk, load_risks


def load_assets(db: Session, organization_id=None):
    stmt = select(Asset).order_by(Asset.name)
    if organization_id is not None:
        stmt = stmt.where(Asset.organization_id == organization_id)
    return list(db.execute(stmt).scalars().unique())


def get_asset(db: Session, asset_id):
    return db.get(Asset, asset_id)


def decorate_asset(asset):
    item = AssetRead.model_validate(asset).model_dump()
    score = item.get("risk_score")
    if score is None:
        item["tier"] = None
        item["label"] = None
    else:
        classification = classify_by_score(score)
        item["tier"] = classification.tier
        item["label"] = classification.label
    return item


def asset_summary(db: Session, assets=None):
    if assets is None:
        assets = load_assets(db)
    return compute_asset_stats(assets)


def list_assets(db: Session, search_term="", status=ALL, asset_type=ALL, organization_id=ALL):
    assets = load_assets(db)
    visible = filter_assets(
        assets,
        search_term=search_term,
        status=status,
        asset_type=asset_type,
        organization_id=organization_id,
    )
    return {
        "count": len(visible),
        "summary": asset_summary(db, assets),
        "results": [decorate_asset(asset) for asset in visible],
    }


def asset_detail(db: Session, asset_id, *, now=None):
    """Asset badge plus every risk raised against it, most recently updated first."""
    asset = get_asset(db, asset_id)
    if asset is None:
        return None
    risks = sort_risks(load_risks(db, asset_id=asset_id), "updated_at", "desc")
    item = decorate_asset(asset)
    item["risk_stats"] = compute_alert_stats(risks)
    item["risks"] = [decorate_risk(risk, now) for risk in risks]
    return item


__all__ = [
    "asset_detail",
    "asset_summary",
    "decorate_asset",
    "get_asset",
    "list_assets",
    "load_assets",
]
