from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sentinel.config import get_settings
from sentinel.core.constants import ALL
from sentinel.core.state import FilterOptions
from sentinel.dependencies import get_db
from sentinel.schemas.alert import AlertFeed, AlertStats
from sentinel.services.alert_service import build_alert_feed, feed_stats

router = APIRouter(prefix="/alerts", tags=["Alerts"])


@router.get("/feed", response_model=AlertFeed)
def alert_feed(
    risk_level: str = Query(ALL, description="all | high | medium | low"),
    status: str = Query(ALL, description="all | active | investigating | monitoring"),
    type: str = Query(ALL, description="all | excavation | vehicle | ground | construction | other"),
    time_range: Optional[str] = Query(None, description="all | 1h | 24h | 7d | 30d"),
    db: Session = Depends(get_db),
):
    filters = FilterOptions(
        risk_level=risk_level,
        status=status,
        type=type,
        time_range=time_range or get_settings().FEED_DEFAULT_TIME_RANGE,
    )
    return build_alert_feed(db, filters)


@router.get("/stats", response_model=AlertStats)
def alert_feed_stats(db: Session = Depends(get_db)):
    return feed_stats(db)
