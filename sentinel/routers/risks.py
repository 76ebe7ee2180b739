from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sentinel.config import get_settings
from sentinel.core.constants import ALL
from sentinel.core.filters import RiskCriteria
from sentinel.dependencies import get_audit_service, get_db
from sentinel.schemas.matrix import MatrixAssessment
from sentinel.schemas.risk import RiskList, RiskListItem, RiskUpdate
from sentinel.services.audit_service import AuditService
from sentinel.services.risk_service import (
    archive_risk,
    decorate_risk,
    get_risk,
    list_risks,
    matrix_assessment,
    risk_assessment,
    update_risk,
)

router = APIRouter(prefix="/risks", tags=["Risks"])


def _require_risk(db, risk_id):
    risk = get_risk(db, risk_id)
    if risk is None:
        raise HTTPException(status_code=404, detail="Risk not found.")
    return risk


@router.get("", response_model=RiskList)
def risk_list(
    search: str = Query("", description="Matches title, location or category"),
    status: str = Query(ALL),
    priority: str = Query(ALL),
    severity: str = Query(ALL),
    risk_level: str = Query(ALL, description="all | high | medium | low"),
    sort_by: str = Query("updated_at", description="created_at | updated_at | risk_score"),
    sort_order: str = Query("desc", description="asc | desc"),
    db: Session = Depends(get_db),
):
    criteria = RiskCriteria(
        search_term=search,
        status=status,
        priority=priority,
        severity=severity,
        risk_level=risk_level,
    )
    return list_risks(
        db,
        criteria,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=get_settings().RISK_LIST_LIMIT,
    )


@router.get("/matrix", response_model=MatrixAssessment)
def risk_matrix(
    pof: int = Query(..., ge=1, le=5, description="Probability of failure"),
    cof: int = Query(..., ge=1, le=5, description="Consequence of failure"),
):
    return matrix_assessment(pof, cof)


@router.get("/{risk_id}", response_model=RiskListItem)
def risk_detail(risk_id: int, db: Session = Depends(get_db)):
    return decorate_risk(_require_risk(db, risk_id))


@router.get("/{risk_id}/assessment", response_model=MatrixAssessment)
def risk_detail_assessment(risk_id: int, db: Session = Depends(get_db)):
    return risk_assessment(_require_risk(db, risk_id))


@router.patch("/{risk_id}", response_model=RiskListItem)
def edit_risk(
    risk_id: int,
    payload: RiskUpdate,
    db: Session = Depends(get_db),
    audit: AuditService = Depends(get_audit_service),
):
    changes = payload.model_dump(exclude_unset=True)
    try:
        risk = update_risk(db, risk_id, changes)
    except SQLAlchemyError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    if risk is None:
        raise HTTPException(status_code=404, detail="Risk not found.")
    audit.log_data_access("Risk", "Updated", risk_id)
    return decorate_risk(risk)


@router.post("/{risk_id}/archive", response_model=RiskListItem)
def archive(
    risk_id: int,
    db: Session = Depends(get_db),
    audit: AuditService = Depends(get_audit_service),
):
    try:
        risk = archive_risk(db, risk_id)
    except SQLAlchemyError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    if risk is None:
        raise HTTPException(status_code=404, detail="Risk not found.")
    audit.log_data_access("Risk", "Archived", risk_id)
    return decorate_risk(risk)
