from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from sentinel.database.base import Base


class Risk(Base):
    __tablename__ = "risks"

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"))
    asset_id = Column(Integer, ForeignKey("assets.id"))

    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    type = Column(String, nullable=False, default="other")
    category = Column(String, nullable=False, default="")
    location = Column(String, nullable=False, default="")
    lat = Column(Float)
    lng = Column(Float)

    risk_score = Column(Float, nullable=False)
    probability_of_failure = Column(Integer)
    consequence_of_failure = Column(Integer)

    status = Column(String, nullable=False, default="active")
    priority = Column(String, nullable=False, default="medium")
    severity = Column(String, nullable=False, default="medium")

    assigned_to = Column(String)
    reported_by = Column(String)
    notes = Column(Text)
    mitigation = Column(Text)

    timestamp = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    organization = relationship("Organization", lazy="joined")
    asset = relationship("Asset", lazy="joined")

    __table_args__ = (
        Index("idx_risks_status", "status"),
        Index("idx_risks_org", "organization_id"),
    )

    @property
    def organization_name(self):
        return self.organization.name if self.organization is not None else None

    @property
    def asset_name(self):
        return self.asset.name if self.asset is not None else None


__all__ = ["Risk"]
