from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from sentinel.schemas.alert import AlertStats
from sentinel.schemas.risk import RiskListItem


class AssetRead(BaseModel):
    id: int
    name: str
    type: str
    location: str = ""
    status: str
    condition: Optional[str] = None
    risk_score: Optional[float] = None
    organization_id: Optional[int] = None
    organization_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AssetListItem(AssetRead):
    tier: Optional[str] = None
    label: Optional[str] = None


class AssetSummary(BaseModel):
    total: int
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_tier: Dict[str, int] = Field(default_factory=dict)
    average_risk_score: Optional[float] = None


class AssetList(BaseModel):
    count: int
    summary: AssetSummary
    results: List[AssetListItem] = Field(default_factory=list)


class AssetDetail(AssetListItem):
    risk_stats: AlertStats
    risks: List[RiskListItem] = Field(default_factory=list)
