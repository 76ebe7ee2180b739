from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AuditUser(BaseModel):
    id: str
    name: str
    email: str
    organization: str


class AuditEntry(BaseModel):
    timestamp: str
    action: str
    category: str
    details: str
    status: str
    severity: str
    ip_address: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    user: Optional[AuditUser] = None


class AuditLogList(BaseModel):
    count: int
    total: int
    success_rate: Optional[int] = None
    warnings: int = 0
    errors: int = 0
    results: List[AuditEntry] = Field(default_factory=list)
