from sentinel.services.alert_service import build_alert_feed, feed_stats
from sentinel.services.asset_service import asset_detail, asset_summary, get_asset, list_assets
from sentinel.services.audit_service import AuditService, get_audit_service
from sentinel.services.dashboard_service import (
    admin_analytics,
    list_organizations,
    organization_detail,
)
from sentinel.services.risk_service import (
    admin_risk_list,
    archive_risk,
    get_risk,
    list_risks,
    risk_assessment,
    update_risk,
)

__all__ = [
    "AuditService",
    "admin_analytics",
    "admin_risk_list",
    "archive_risk",
    "asset_detail",
    "asset_summary",
    "build_alert_feed",
    "feed_stats",
    "get_asset",
    "get_audit_service",
    "get_risk",
    "list_assets",
    "list_organizations",
    "list_risks",
    "organization_detail",
    "risk_assessment",
    "update_risk",
]
