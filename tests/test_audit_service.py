import unittest
from datetime import datetime, timedelta, timezone

from sentinel.services.audit_service import AuditService


class AuditServiceTest(unittest.TestCase):
    def setUp(self):
        self.audit = AuditService(max_entries=3)

    def test_entries_are_newest_first_and_capped(self):
        for index in range(5):
            self.audit.log_system_event("Event {}".format(index), "details")
        entries = self.audit.entries()
        self.assertEqual(len(self.audit), 3)
        self.assertEqual([entry["action"] for entry in entries], ["Event 4", "Event 3", "Event 2"])

    def test_api_event_status_mapping(self):
        cases = [
            (200, "success", "low"),
            (204, "success", "low"),
            (404, "warning", "low"),
            (422, "warning", "low"),
            (500, "error", "high"),
        ]
        for status_code, status, severity in cases:
            with self.subTest(status_code=status_code):
                entry = self.audit.log_api_event("/risks/1", "PATCH", status_code, duration=12)
                self.assertEqual(entry["status"], status)
                self.assertEqual(entry["severity"], severity)
                self.assertEqual(entry["metadata"]["response_code"], status_code)

    def test_login_events(self):
        ok = self.audit.log_user_login(True, email="ops@example.com")
        failed = self.audit.log_user_login(False)
        self.assertEqual(ok["action"], "User Login")
        self.assertEqual(failed["status"], "error")
        self.assertEqual(failed["severity"], "high")
        self.assertIn("Invalid credentials", failed["details"])

    def test_data_access_metadata(self):
        entry = self.audit.log_data_access("Risk", "Updated", 4)
        self.assertEqual(entry["category"], "data_access")
        self.assertEqual(entry["metadata"], {"affected_entity": "4", "entity_type": "risk"})

    def test_security_event_status(self):
        self.assertEqual(self.audit.log_security_event("Probe", "details")["status"], "warning")
        self.assertEqual(self.audit.log_security_event("Breach", "details", severity="critical")["status"], "error")

    def test_get_logs_filters(self):
        audit = AuditService()
        audit.log("Risk Updated", "data_access", "Updated risk 1", user={"id": "u1", "name": "Sarah"})
        audit.log_security_event("Probe", "Port scan")
        audit.log_cron_job("Nightly Sync", "Synced", status="error")

        self.assertEqual(audit.get_logs(category="security")["total"], 1)
        self.assertEqual(audit.get_logs(status="error")["total"], 1)
        self.assertEqual(audit.get_logs(user_id="u1")["data"][0]["action"], "Risk Updated")

        future = datetime.now(timezone.utc) + timedelta(hours=1)
        self.assertEqual(audit.get_logs(start=future)["total"], 0)
        self.assertEqual(audit.get_logs(end=future)["total"], 3)

    def test_get_logs_search_and_window(self):
        audit = AuditService()
        audit.log_data_access("Risk", "Archived", 7)
        audit.log_api_event("/risks/7/archive", "POST", 200)

        self.assertEqual(audit.get_logs(category="all", status=None)["total"], 2)
        self.assertEqual(audit.get_logs(search_term="ARCHIVE")["total"], 2)
        self.assertEqual(audit.get_logs(search_term="post", category="api")["total"], 1)

        later = datetime.now(timezone.utc) + timedelta(days=2)
        self.assertEqual(audit.get_logs(date_range="24hours", now=later)["total"], 0)
        self.assertEqual(audit.get_logs(date_range="7days", now=later)["total"], 2)


if __name__ == "__main__":
    unittest.main()
