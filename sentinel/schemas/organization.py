from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field

from sentinel.schemas.asset import AssetListItem, AssetSummary


class OrganizationSummary(BaseModel):
    id: int
    name: str
    asset_count: int
    risk_count: int
    risk_score: int


class OrganizationList(BaseModel):
    count: int
    total: int
    results: List[OrganizationSummary] = Field(default_factory=list)


class OrganizationRiskAnalytics(BaseModel):
    by_severity: Dict[str, int] = Field(default_factory=dict)
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_tier: Dict[str, int] = Field(default_factory=dict)


class OrganizationDetail(OrganizationSummary):
    created_at: datetime
    asset_stats: AssetSummary
    risk_analytics: OrganizationRiskAnalytics
    assets: List[AssetListItem] = Field(default_factory=list)
