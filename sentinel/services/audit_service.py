"""In-process audit trail for admin views.

Entries live in a bounded, newest-first buffer and are lost on restart; each
entry is also emitted through the ``sentinel.audit`` logger so a log shipper
can keep a durable copy.
"""

import logging
import threading
from collections import deque
from datetime import datetime, timezone
from functools import lru_cache

from sentinel.config import get_settings
from sentinel.core.constants import ALL
from sentinel.core.dates import normalize_datetime
from sentinel.core.filters import filter_audit_logs

logger = logging.getLogger("sentinel.audit")

_PLACEHOLDER_IP = "127.0.0.1"


class AuditService:
    def __init__(self, max_entries=1000):
        self._entries = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def log(
        self,
        action,
        category,
        details,
        status="success",
        severity="low",
        metadata=None,
        user=None,
        *,
        ip_address=_PLACEHOLDER_IP,
    ):
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "action": action,
            "category": category,
            "details": details,
            "status": status,
            "severity": severity,
            "ip_address": ip_address,
            "metadata": dict(metadata or {}),
            "user": dict(user) if user else None,
        }
        with self._lock:
            self._entries.appendleft(entry)
        logger.info("Audit: %s (%s)", action, status, extra={"audit": entry})
        return entry

    def entries(self):
        with self._lock:
            return list(self._entries)

    def get_logs(
        self,
        category=ALL,
        status=ALL,
        severity=ALL,
        start=None,
        end=None,
        user_id=None,
        *,
        search_term="",
        date_range=ALL,
        now=None,
    ):
        """Filtered view of the buffer, newest first.

        ``None``, empty and ``"all"`` leave a field unrestricted. ``date_range``
        is a rolling window; ``start`` and ``end`` are absolute bounds.
        """
        logs = filter_audit_logs(
            self.entries(),
            search_term=search_term,
            category=category,
            status=status,
            severity=severity,
            date_range=date_range,
            now=now,
        )
        if user_id:
            logs = [log for log in logs if (log.get("user") or {}).get("id") == user_id]
        if start is not None or end is not None:
            start_at = normalize_datetime(start)
            end_at = normalize_datetime(end)
            bounded = []
            for log in logs:
                logged_at = normalize_datetime(log["timestamp"])
                if start_at is not None and logged_at < start_at:
                    continue
                if end_at is not None and logged_at > end_at:
                    continue
                bounded.append(log)
            logs = bounded
        return {"data": logs, "total": len(logs)}

    # Convenience events

    def log_user_login(self, success, email=None, error=None):
        return self.log(
            action="User Login" if success else "Failed Login Attempt",
            category="user_management",
            details=(
                "Successful login for {}".format(email)
                if success
                else "Failed login attempt: {}".format(error or "Invalid credentials")
            ),
            status="success" if success else "error",
            severity="low" if success else "high",
        )

    def log_user_logout(self):
        return self.log(
            action="User Logout",
            category="user_management",
            details="User logged out",
        )

    def log_data_access(self, entity, action, entity_id=None):
        details = "{} {}".format(action, entity.lower())
        if entity_id is not None:
            details = "{} {}".format(details, entity_id)
        return self.log(
            action="{} {}".format(entity, action),
            category="data_access",
            details=details,
            severity="medium",
            metadata={
                "affected_entity": str(entity_id) if entity_id is not None else entity,
                "entity_type": entity.lower(),
            },
        )

    def log_permission_change(self, target_user, permissions):
        return self.log(
            action="User Permissions Modified",
            category="user_management",
            details="Modified permissions for user {}".format(target_user),
            severity="high",
            metadata={
                "affected_entity": target_user,
                "entity_type": "user",
                "new_value": ", ".join(permissions),
            },
        )

    def log_system_event(self, event, details, status="success", severity="low"):
        return self.log(action=event, category="system", details=details, status=status, severity=severity)

    def log_security_event(self, event, details, severity="high"):
        return self.log(
            action=event,
            category="security",
            details=details,
            status="error" if severity == "critical" else "warning",
            severity=severity,
        )

    def log_api_event(self, endpoint, method, status_code, duration=None):
        if 200 <= status_code < 300:
            status = "success"
        elif 400 <= status_code < 500:
            status = "warning"
        else:
            status = "error"
        return self.log(
            action="API {} {}".format(method, endpoint),
            category="api",
            details="{} request to {} - {}".format(method, endpoint, status_code),
            status=status,
            severity="high" if status_code >= 500 else "low",
            metadata={"response_code": status_code, "duration": duration},
        )

    def log_cron_job(self, job_name, details, duration=None, status="success"):
        return self.log(
            action="Cron Job: {}".format(job_name),
            category="cron_job",
            details=details,
            status=status,
            severity="low" if status == "success" else "medium",
            metadata={"duration": duration, "affected_entity": job_name, "entity_type": "cron_job"},
        )


@lru_cache
def get_audit_service() -> AuditService:
    """Process-wide audit buffer sized from settings."""
    return AuditService(max_entries=get_settings().AUDIT_LOG_MAX_ENTRIES)


__all__ = ["AuditService", "get_audit_service"]
