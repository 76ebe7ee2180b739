import unittest
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import sessionmaker

from sentinel.core.filters import RiskCriteria
from sentinel.core.state import FilterOptions
from sentinel.database import build_engine, create_schema
from sentinel.models.asset import Asset
from sentinel.models.organization import Organization
from sentinel.models.risk import Risk
from sentinel.services.alert_service import build_alert_feed
from sentinel.services.asset_service import asset_detail, asset_summary, list_assets
from sentinel.services.dashboard_service import admin_analytics, list_organizations, organization_detail
from sentinel.services.risk_service import (
    admin_risk_list,
    archive_risk,
    list_risks,
    risk_assessment,
    update_risk,
)

NOW = datetime(2024, 12, 11, 12, 0, tzinfo=timezone.utc)


class RiskServiceTest(unittest.TestCase):
    def setUp(self):
        engine = build_engine("sqlite://")
        create_schema(bind=engine)
        Session = sessionmaker(bind=engine, expire_on_commit=False)
        self.db = Session()
        self.addCleanup(engine.dispose)
        self.addCleanup(self.db.close)

        org = Organization(id=1, name="Peninsula Gas Transmission")
        self.db.add(org)
        self.db.add_all(
            [
                Asset(id=1, organization_id=1, name="Pipeline Section A-1", status="operational", risk_score=3.2),
                Asset(id=2, organization_id=1, name="Pipeline Section D-4", status="maintenance", risk_score=8.5),
            ]
        )
        fixtures = [
            (1, 9, "active", "excavation", "critical", 2, 1),
            (2, 6, "active", "vehicle", "high", 19, 1),
            (3, 3, "resolved", "ground", "low", 50, 1),
            (4, 7, "investigating", "construction", "high", 3, 2),
        ]
        for risk_id, score, status, risk_type, severity, hours_ago, asset_id in fixtures:
            detected_at = NOW - timedelta(hours=hours_ago)
            self.db.add(
                Risk(
                    id=risk_id,
                    organization_id=1,
                    asset_id=asset_id,
                    title="Risk {}".format(risk_id),
                    risk_score=score,
                    status=status,
                    type=risk_type,
                    severity=severity,
                    timestamp=detected_at,
                    created_at=detected_at,
                    updated_at=detected_at,
                )
            )
        self.db.commit()

    def test_update_bumps_updated_at(self):
        edited_at = NOW + timedelta(minutes=5)
        risk = update_risk(self.db, 2, {"status": "monitoring", "notes": "Patrol dispatched"}, now=edited_at)
        self.assertEqual(risk.status, "monitoring")
        self.assertEqual(risk.notes, "Patrol dispatched")
        self.assertEqual(risk.updated_at, edited_at)

    def test_update_skips_empty_required_fields(self):
        risk = update_risk(self.db, 2, {"status": None, "assigned_to": "Sarah Johnson"}, now=NOW)
        self.assertEqual(risk.status, "active")
        self.assertEqual(risk.assigned_to, "Sarah Johnson")

    def test_update_rejects_read_only_fields(self):
        with self.assertRaises(ValueError):
            update_risk(self.db, 2, {"risk_score": 1})

    def test_update_missing_risk(self):
        self.assertIsNone(update_risk(self.db, 999, {"status": "resolved"}))

    def test_archive_keeps_row(self):
        archive_risk(self.db, 3, now=NOW)
        listing = list_risks(self.db, now=NOW)
        self.assertEqual(listing["total_count"], 4)
        archived = [item for item in listing["results"] if item["id"] == 3]
        self.assertEqual(archived[0]["status"], "archived")

    def test_list_risks_sort_and_decoration(self):
        listing = list_risks(self.db, RiskCriteria(), sort_by="risk_score", sort_order="desc", now=NOW)
        self.assertEqual([item["id"] for item in listing["results"]], [1, 4, 2, 3])
        first = listing["results"][0]
        self.assertEqual(first["tier"], "high")
        self.assertEqual(first["recency"], "2h ago")

    def test_list_risks_limit(self):
        listing = list_risks(self.db, limit=2, now=NOW)
        self.assertEqual(listing["count"], 2)
        self.assertTrue(listing["limited"])
        self.assertEqual([item["id"] for item in listing["results"]], [1, 4])

    def test_alert_feed(self):
        feed = build_alert_feed(self.db, FilterOptions(), now=NOW)
        self.assertEqual([item["id"] for item in feed["results"]], [1, 4, 2])
        self.assertEqual(feed["stats"]["total"], 3)

        feed = build_alert_feed(self.db, FilterOptions(risk_level="high"), now=NOW)
        self.assertEqual([item["id"] for item in feed["results"]], [1])
        self.assertEqual(feed["stats"]["high"], 1)
        self.assertEqual(feed["stats"]["medium"], 2)

    def test_admin_risk_search_uses_asset_name(self):
        result = admin_risk_list(self.db, {"search": "section d-4"})
        self.assertEqual([item["id"] for item in result["results"]], [4])
        self.assertEqual(result["summary"]["by_severity"], {"critical": 1, "high": 2, "low": 1})

    def test_assessment_derives_missing_inputs(self):
        risk = self.db.get(Risk, 2)
        assessment = risk_assessment(risk)
        self.assertTrue(assessment["derived"])
        self.assertEqual((assessment["probability"], assessment["consequence"]), (4, 4))
        self.assertEqual(assessment["cell_tier"], "high")

    def test_asset_listing(self):
        result = list_assets(self.db, status="maintenance")
        self.assertEqual(result["count"], 1)
        self.assertEqual(result["results"][0]["tier"], "high")
        self.assertEqual(result["summary"]["total"], 2)

    def test_admin_analytics(self):
        analytics = admin_analytics(self.db)
        self.assertEqual(analytics["system_overview"], {"organizations": 1, "assets": 2, "risks": 4})
        metrics = analytics["organization_metrics"][0]
        self.assertEqual((metrics["asset_count"], metrics["risk_count"]), (2, 4))
        self.assertEqual(metrics["risk_score"], 100)

    def test_asset_summary_matches_listing(self):
        summary = asset_summary(self.db)
        self.assertEqual(summary["total"], 2)
        self.assertEqual(summary["by_status"], {"operational": 1, "maintenance": 1})
        self.assertEqual(summary["by_tier"], {"high": 1, "medium": 0, "low": 1})
        self.assertAlmostEqual(summary["average_risk_score"], 5.85, delta=0.06)
        self.assertEqual(list_assets(self.db, search_term="a-1")["summary"], summary)

    def test_asset_detail(self):
        detail = asset_detail(self.db, 1, now=NOW)
        self.assertEqual(detail["tier"], "low")
        self.assertEqual([risk["id"] for risk in detail["risks"]], [1, 2, 3])
        self.assertEqual(detail["risk_stats"]["high"], 1)
        self.assertIsNone(asset_detail(self.db, 99))

    def test_organizations(self):
        listing = list_organizations(self.db, search_term="gas")
        self.assertEqual(listing["count"], 1)
        self.assertEqual(listing["results"][0]["risk_count"], 4)
        self.assertEqual(list_organizations(self.db, search_term="east")["count"], 0)

        detail = organization_detail(self.db, 1)
        self.assertEqual(detail["risk_analytics"]["by_status"], {"active": 2, "resolved": 1, "investigating": 1})
        self.assertEqual(len(detail["assets"]), 2)
        self.assertIsNone(organization_detail(self.db, 99))


if __name__ == "__main__":
    unittest.main()
