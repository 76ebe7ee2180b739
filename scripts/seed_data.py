import argparse
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select

from sentinel.core.logging import setup_logging
from sentinel.database import create_schema, session_scope
from sentinel.models.asset import Asset
from sentinel.models.organization import Organization
from sentinel.models.risk import Risk

logger = logging.getLogger("sentinel.seed")

ORGANIZATIONS = ("Peninsula Gas Transmission", "East Coast Pipelines")

# (name, type, location, status, condition, risk_score, organization index)
ASSETS = (
    ("Pipeline Section A-1", "pipeline", "KM 0 - KM 45.8", "operational", "good", 3.2, 0),
    ("Pipeline Section B-2", "pipeline", "KM 45.8 - KM 113.1", "operational", "fair", 6.8, 0),
    ("Pipeline Section C-3", "pipeline", "KM 113.1 - KM 136.5", "operational", "good", 2.1, 1),
    ("Pipeline Section D-4", "pipeline", "KM 136.5 - KM 226.1", "maintenance", "poor", 8.5, 1),
    ("Pipeline Section E-5", "pipeline", "KM 226.1 - KM 260.3", "operational", "fair", 4.7, 1),
)

# Offsets are relative to seeding time so the default 24h feed window has data.
RISKS = (
    {
        "title": "High Risk Excavation Activity Detected Near Pipeline Section A-12",
        "description": "Unauthorized excavation equipment detected within 100m of critical pipeline infrastructure",
        "risk_score": 9,
        "probability_of_failure": 4,
        "consequence_of_failure": 5,
        "status": "active",
        "priority": "critical",
        "severity": "critical",
        "type": "excavation",
        "location": "Pipeline KM 42.5, Near Industrial Zone",
        "lat": 4.2,
        "lng": 101.5,
        "assigned_to": "John Smith",
        "reported_by": "Automated Monitoring System",
        "category": "Third-Party Damage",
        "hours_ago": 2,
        "asset": 0,
    },
    {
        "title": "Unauthorized Vehicle Access Alert - Construction Vehicle Detected",
        "description": "Heavy construction vehicle entering restricted pipeline right-of-way area",
        "risk_score": 6,
        "status": "active",
        "priority": "high",
        "severity": "high",
        "type": "vehicle",
        "location": "Pipeline KM 28.3, Agricultural Area",
        "lat": 4.5,
        "lng": 102.0,
        "assigned_to": "Sarah Johnson",
        "reported_by": "Security Patrol",
        "category": "Security Breach",
        "hours_ago": 19,
        "asset": 0,
    },
    {
        "title": "Minor Ground Disturbance - Possible Animal Activity",
        "description": "Small ground disturbance detected, likely caused by animal activity",
        "risk_score": 3,
        "status": "resolved",
        "priority": "low",
        "severity": "low",
        "type": "ground",
        "location": "Pipeline KM 67.8, Forest Reserve",
        "lat": 4.8,
        "lng": 102.5,
        "assigned_to": "Mike Wilson",
        "reported_by": "Aerial Inspection",
        "category": "Natural Causes",
        "hours_ago": 50,
        "asset": 1,
    },
    {
        "title": "Construction Activity Near Pipeline Right-of-Way",
        "description": "Building construction activity detected near pipeline easement",
        "risk_score": 7,
        "status": "investigating",
        "priority": "high",
        "severity": "high",
        "type": "construction",
        "location": "Pipeline KM 89.2, Residential Area",
        "lat": 5.0,
        "lng": 103.0,
        "assigned_to": "Emily Davis",
        "reported_by": "Ground Patrol",
        "category": "Encroachment",
        "hours_ago": 3,
        "asset": 1,
    },
    {
        "title": "Heavy Machinery Movement Alert - Excavator Detected",
        "description": "Heavy excavator operation in close proximity to pipeline corridor",
        "risk_score": 8,
        "probability_of_failure": 3,
        "consequence_of_failure": 3,
        "status": "active",
        "priority": "critical",
        "severity": "critical",
        "type": "excavation",
        "location": "Pipeline KM 156.7, Commercial District",
        "lat": 5.3,
        "lng": 103.5,
        "assigned_to": "Robert Brown",
        "reported_by": "Satellite Monitoring",
        "category": "Third-Party Damage",
        "hours_ago": 1,
        "asset": 3,
    },
    {
        "title": "Soil Disturbance Alert - Possible Erosion",
        "description": "Significant soil erosion detected near pipeline supports",
        "risk_score": 4,
        "status": "monitoring",
        "priority": "medium",
        "severity": "medium",
        "type": "ground",
        "location": "Pipeline KM 203.1, Rural Area",
        "lat": 5.6,
        "lng": 104.0,
        "assigned_to": "Lisa Anderson",
        "reported_by": "Routine Inspection",
        "category": "Environmental",
        "hours_ago": 22,
        "asset": 3,
    },
    {
        "title": "Critical: Unauthorized Drilling Activity Detected",
        "description": "Unauthorized drilling operation detected within pipeline protection zone",
        "risk_score": 9,
        "status": "archived",
        "priority": "critical",
        "severity": "critical",
        "type": "excavation",
        "location": "Pipeline KM 278.9, Industrial Complex",
        "lat": 5.9,
        "lng": 104.5,
        "assigned_to": "James Miller",
        "reported_by": "Emergency Response Team",
        "category": "Third-Party Damage",
        "hours_ago": 24 * 9,
        "asset": 4,
    },
)


def parse_args():
    parser = argparse.ArgumentParser(description="Seed demo pipeline risk data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level.",
    )
    return parser.parse_args()


def seed(db, now=None):
    now = now or datetime.now(timezone.utc)

    organizations = [Organization(name=name) for name in ORGANIZATIONS]
    db.add_all(organizations)
    db.flush()

    assets = []
    for name, asset_type, location, status, condition, score, org_index in ASSETS:
        assets.append(
            Asset(
                name=name,
                type=asset_type,
                location=location,
                status=status,
                condition=condition,
                risk_score=score,
                organization_id=organizations[org_index].id,
            )
        )
    db.add_all(assets)
    db.flush()

    risks = []
    for fixture in RISKS:
        values = dict(fixture)
        detected_at = now - timedelta(hours=values.pop("hours_ago"))
        asset = assets[values.pop("asset")]
        risks.append(
            Risk(
                **values,
                asset_id=asset.id,
                organization_id=asset.organization_id,
                timestamp=detected_at,
                created_at=detected_at,
                updated_at=detected_at,
            )
        )
    db.add_all(risks)
    db.commit()
    return {"organizations": len(organizations), "assets": len(assets), "risks": len(risks)}


def main():
    args = parse_args()
    setup_logging("DEBUG" if args.verbose else None)

    create_schema()

    with session_scope() as db:
        if args.reset:
            db.execute(delete(Risk))
            db.execute(delete(Asset))
            db.execute(delete(Organization))
            db.flush()
            logger.debug("Existing seed data cleared.")

        has_org = db.execute(select(Organization.id).limit(1)).first()
        if has_org:
            logger.info("Seed skipped: organizations already exist.")
            return

        counts = seed(db)
        logger.info("Seed data created: %s", counts)


if __name__ == "__main__":
    main()
