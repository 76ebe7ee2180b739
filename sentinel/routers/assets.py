from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from sentinel.core.constants import ALL
from sentinel.dependencies import get_db
from sentinel.schemas.asset import AssetDetail, AssetList
from sentinel.services.asset_service import asset_detail, list_assets

router = APIRouter(prefix="/assets", tags=["Assets"])


@router.get("", response_model=AssetList)
def asset_list(
    search: str = Query("", description="Matches name, type, location or organization"),
    status: str = Query(ALL),
    type: str = Query(ALL),
    organization_id: str = Query(ALL),
    db: Session = Depends(get_db),
):
    return list_assets(
        db,
        search_term=search,
        status=status,
        asset_type=type,
        organization_id=organization_id,
    )


@router.get("/{asset_id}", response_model=AssetDetail)
def asset_view(asset_id: int, db: Session = Depends(get_db)):
    detail = asset_detail(db, asset_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Asset not found.")
    return detail
