import unittest
from datetime import datetime, timedelta, timezone

from sentinel.core.filters import (
    RiskCriteria,
    filter_assets,
    filter_audit_logs,
    filter_risks,
    next_sort_state,
    sort_risks,
    sort_risks_by,
)

NOW = datetime(2024, 12, 11, 12, 0, tzinfo=timezone.utc)


def _risk(risk_id, score, status="active", hours_ago=1, **extra):
    record = {
        "id": risk_id,
        "title": "Risk {}".format(risk_id),
        "location": "Pipeline KM {}".format(risk_id * 10),
        "category": "Third-Party Damage",
        "risk_score": score,
        "status": status,
        "priority": "high",
        "type": "excavation",
        "timestamp": NOW - timedelta(hours=hours_ago),
    }
    record.update(extra)
    return record


class FilterRisksTest(unittest.TestCase):
    def setUp(self):
        self.risks = [
            _risk(1, 9, hours_ago=2, title="Excavation near Section A-12"),
            _risk(2, 6, hours_ago=19, type="vehicle"),
            _risk(3, 3, status="resolved", hours_ago=50),
            _risk(4, 8, status="investigating", hours_ago=3),
        ]

    def test_all_defaults_return_same_records_in_order(self):
        result = filter_risks(self.risks, RiskCriteria(), now=NOW)
        self.assertEqual(result, self.risks)
        for original, kept in zip(self.risks, result):
            self.assertIs(original, kept)

    def test_filters_compose_with_and(self):
        criteria = RiskCriteria(risk_level="high", status="active")
        result = filter_risks(self.risks, criteria, now=NOW)
        self.assertEqual([risk["id"] for risk in result], [1])

        separately = [
            risk
            for risk in filter_risks(self.risks, RiskCriteria(risk_level="high"), now=NOW)
            if risk in filter_risks(self.risks, RiskCriteria(status="active"), now=NOW)
        ]
        self.assertEqual(result, separately)

    def test_status_and_priority_intersect(self):
        records = [
            _risk(1, 9, status="active", priority="critical"),
            _risk(2, 9, status="active", priority="low"),
            _risk(3, 9, status="resolved", priority="critical"),
            _risk(4, 6, status="active", priority="critical"),
        ]
        result = filter_risks(records, {"status": "active", "priority": "critical"}, now=NOW)
        self.assertEqual([risk["id"] for risk in result], [1, 4])

        result = filter_risks(records, {"status": "active", "priority": "critical", "risk_level": "high"}, now=NOW)
        self.assertEqual([risk["id"] for risk in result], [1])

    def test_search_is_case_insensitive_substring(self):
        result = filter_risks(self.risks, {"search": "SECTION a-12"}, now=NOW)
        self.assertEqual([risk["id"] for risk in result], [1])

    def test_search_skips_missing_fields(self):
        records = [{"id": 1, "risk_score": 5}, _risk(2, 5, category="Encroachment")]
        result = filter_risks(records, {"search_term": "encroach"}, now=NOW)
        self.assertEqual([risk["id"] for risk in result], [2])

    def test_unknown_values_do_not_restrict(self):
        result = filter_risks(self.risks, {"risk_level": "extreme", "time_range": "90d"}, now=NOW)
        self.assertEqual(result, self.risks)

    def test_unknown_status_matches_nothing(self):
        self.assertEqual(filter_risks(self.risks, {"status": "closed"}, now=NOW), [])

    def test_time_range(self):
        result = filter_risks(self.risks, {"time_range": "24h"}, now=NOW)
        self.assertEqual([risk["id"] for risk in result], [1, 2, 4])
        result = filter_risks(self.risks, {"time_range": "1h"}, now=NOW)
        self.assertEqual(result, [])

    def test_risk_level_low(self):
        result = filter_risks(self.risks, {"risk_level": "low"}, now=NOW)
        self.assertEqual([risk["id"] for risk in result], [3])

    def test_criteria_from_mapping_ignores_unknown_keys(self):
        criteria = RiskCriteria.from_mapping({"status": "active", "colour": "red", "priority": None})
        self.assertEqual(criteria.status, "active")
        self.assertEqual(criteria.priority, "all")


class FilterAssetsAndLogsTest(unittest.TestCase):
    def test_asset_filters(self):
        assets = [
            {"name": "Pipeline Section A-1", "type": "pipeline", "status": "operational", "organization_id": 1},
            {"name": "Compressor C-1", "type": "compressor", "status": "maintenance", "organization_id": 2},
            {"name": "Pipeline Section D-4", "type": "pipeline", "status": "maintenance", "organization_id": 2},
        ]
        self.assertEqual(len(filter_assets(assets, search_term="pipeline")), 2)
        self.assertEqual(len(filter_assets(assets, status="maintenance", asset_type="pipeline")), 1)
        self.assertEqual(len(filter_assets(assets, organization_id="2")), 2)

    def test_audit_log_filters(self):
        logs = [
            {
                "timestamp": (NOW - timedelta(hours=2)).isoformat(),
                "action": "Risk Updated",
                "details": "Updated risk 4",
                "category": "data_access",
                "status": "success",
                "severity": "medium",
                "user": {"id": "u1", "name": "Sarah Johnson"},
            },
            {
                "timestamp": (NOW - timedelta(days=3)).isoformat(),
                "action": "Failed Login Attempt",
                "details": "Invalid credentials",
                "category": "user_management",
                "status": "error",
                "severity": "high",
                "user": None,
            },
        ]
        self.assertEqual(len(filter_audit_logs(logs, date_range="24hours", now=NOW)), 1)
        self.assertEqual(len(filter_audit_logs(logs, date_range="7days", now=NOW)), 2)
        self.assertEqual(len(filter_audit_logs(logs, search_term="sarah", now=NOW)), 1)
        self.assertEqual(len(filter_audit_logs(logs, status="error", now=NOW)), 1)


class SortRisksTest(unittest.TestCase):
    def test_sort_by_score(self):
        records = [_risk(1, 3), _risk(2, 9), _risk(3, 6)]
        self.assertEqual([r["id"] for r in sort_risks(records, "risk_score", "desc")], [2, 3, 1])
        self.assertEqual([r["id"] for r in sort_risks(records, "risk_score", "asc")], [1, 3, 2])

    def test_equal_keys_keep_input_order(self):
        records = [_risk(1, 5), _risk(2, 5), _risk(3, 5)]
        self.assertEqual([r["id"] for r in sort_risks(records, "risk_score", "desc")], [1, 2, 3])
        self.assertEqual([r["id"] for r in sort_risks(records, "risk_score", "asc")], [1, 2, 3])

    def test_missing_values_sort_last(self):
        records = [{"id": 1}, _risk(2, 4), _risk(3, 7)]
        self.assertEqual([r["id"] for r in sort_risks(records, "risk_score", "desc")], [3, 2, 1])
        self.assertEqual([r["id"] for r in sort_risks(records, "risk_score", "asc")], [2, 3, 1])

    def test_date_fields_accept_iso_strings(self):
        records = [
            {"id": 1, "updated_at": "2024-12-10T08:00:00Z"},
            {"id": 2, "updated_at": datetime(2024, 12, 11, 8, 0)},
        ]
        self.assertEqual([r["id"] for r in sort_risks(records, "updated_at", "desc")], [2, 1])

    def test_unknown_field_keeps_order(self):
        records = [_risk(1, 3), _risk(2, 9)]
        self.assertEqual(sort_risks(records, "title", "desc"), records)

    def test_multi_key_sort(self):
        records = [
            _risk(1, 6, updated_at=NOW - timedelta(hours=5)),
            _risk(2, 9, updated_at=NOW - timedelta(hours=3)),
            _risk(3, 6, updated_at=NOW - timedelta(hours=1)),
            _risk(4, 9, updated_at=NOW - timedelta(hours=4)),
        ]
        ordered = sort_risks_by(records, [("risk_score", "desc"), ("updated_at", "desc")])
        self.assertEqual([r["id"] for r in ordered], [2, 4, 3, 1])

    def test_next_sort_state(self):
        self.assertEqual(next_sort_state("updated_at", "desc", "updated_at"), ("updated_at", "asc"))
        self.assertEqual(next_sort_state("updated_at", "asc", "updated_at"), ("updated_at", "desc"))
        self.assertEqual(next_sort_state("updated_at", "asc", "risk_score"), ("risk_score", "desc"))


if __name__ == "__main__":
    unittest.main()
