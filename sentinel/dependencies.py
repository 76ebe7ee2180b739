from sentinel.database.session import get_db
from sentinel.services.audit_service import get_audit_service

__all__ = ["get_audit_service", "get_db"]
