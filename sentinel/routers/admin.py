from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from sentinel.core.constants import ALL
from sentinel.core.filters import RiskCriteria
from sentinel.dependencies import get_audit_service, get_db
from sentinel.schemas.audit import AuditLogList
from sentinel.schemas.organization import OrganizationDetail, OrganizationList
from sentinel.schemas.risk import AdminRiskList
from sentinel.services.audit_service import AuditService
from sentinel.services.dashboard_service import (
    admin_analytics,
    list_organizations,
    organization_detail,
)
from sentinel.services.risk_service import admin_risk_list

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/analytics")
def analytics(db: Session = Depends(get_db)):
    return admin_analytics(db)


@router.get("/organizations", response_model=OrganizationList)
def organizations(
    search: str = Query("", description="Matches organization name"),
    db: Session = Depends(get_db),
):
    return list_organizations(db, search_term=search)


@router.get("/organizations/{organization_id}", response_model=OrganizationDetail)
def organization_view(organization_id: int, db: Session = Depends(get_db)):
    detail = organization_detail(db, organization_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Organization not found.")
    return detail


@router.get("/risks", response_model=AdminRiskList)
def admin_risks(
    search: str = Query("", description="Matches title, description, organization or asset"),
    severity: str = Query(ALL),
    status: str = Query(ALL),
    organization_id: str = Query(ALL),
    db: Session = Depends(get_db),
):
    criteria = RiskCriteria(
        search_term=search,
        severity=severity,
        status=status,
        organization_id=organization_id,
    )
    return admin_risk_list(db, criteria)


@router.get("/audit-logs", response_model=AuditLogList)
def audit_logs(
    search: str = Query(""),
    category: str = Query(ALL),
    status: str = Query(ALL),
    severity: str = Query(ALL),
    date_range: str = Query("7days", description="24hours | 7days | 30days | all"),
    audit: AuditService = Depends(get_audit_service),
):
    logs = audit.entries()
    visible = audit.get_logs(
        search_term=search,
        category=category,
        status=status,
        severity=severity,
        date_range=date_range,
    )["data"]
    success_rate = None
    if logs:
        success_rate = round(sum(1 for log in logs if log["status"] == "success") / len(logs) * 100)
    return {
        "count": len(visible),
        "total": len(logs),
        "success_rate": success_rate,
        "warnings": sum(1 for log in logs if log["status"] == "warning"),
        "errors": sum(1 for log in logs if log["status"] == "error"),
        "results": visible,
    }
