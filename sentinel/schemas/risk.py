from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

RiskStatus = Literal["active", "investigating", "monitoring", "resolved", "archived"]
RiskPriority = Literal["critical", "high", "medium", "low"]
SeverityLevel = Literal["low", "medium", "high", "critical"]


class RiskRead(BaseModel):
    id: int
    title: str
    description: str = ""
    type: str
    category: str = ""
    location: str = ""
    lat: Optional[float] = None
    lng: Optional[float] = None
    risk_score: float
    probability_of_failure: Optional[int] = None
    consequence_of_failure: Optional[int] = None
    status: str
    priority: str
    severity: str
    assigned_to: Optional[str] = None
    reported_by: Optional[str] = None
    notes: Optional[str] = None
    mitigation: Optional[str] = None
    organization_id: Optional[int] = None
    organization_name: Optional[str] = None
    asset_id: Optional[int] = None
    asset_name: Optional[str] = None
    timestamp: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RiskListItem(RiskRead):
    tier: str
    intent: str
    label: str
    recency: str


class RiskList(BaseModel):
    count: int
    total_count: int
    limited: bool = False
    sort_by: str
    sort_order: str
    results: List[RiskListItem] = Field(default_factory=list)


class RiskUpdate(BaseModel):
    status: Optional[RiskStatus] = None
    priority: Optional[RiskPriority] = None
    notes: Optional[str] = None
    mitigation: Optional[str] = None
    assigned_to: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class AdminRiskSummary(BaseModel):
    total: int
    by_severity: Dict[str, int] = Field(default_factory=dict)
    by_status: Dict[str, int] = Field(default_factory=dict)


class AdminRiskList(BaseModel):
    count: int
    summary: AdminRiskSummary
    results: List[RiskRead] = Field(default_factory=list)
