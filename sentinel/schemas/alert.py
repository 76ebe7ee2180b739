from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class AlertStats(BaseModel):
    total: int
    high: int
    medium: int
    low: int
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_type: Dict[str, int] = Field(default_factory=dict)


class AlertFeedItem(BaseModel):
    id: int
    title: str
    description: str = ""
    type: str
    category: str = ""
    location: str = ""
    lat: Optional[float] = None
    lng: Optional[float] = None
    risk_score: float
    status: str
    priority: str
    timestamp: datetime
    tier: str
    intent: str
    label: str
    recency: str


class AlertFeedFilters(BaseModel):
    risk_level: str
    status: str
    type: str
    time_range: str


class AlertFeed(BaseModel):
    count: int
    filters: AlertFeedFilters
    stats: AlertStats
    results: List[AlertFeedItem] = Field(default_factory=list)
