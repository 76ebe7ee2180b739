from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from sentinel.database.base import Base


class Asset(Base):
    __tablename__ = "assets"

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"))

    name = Column(String, nullable=False)
    type = Column(String, nullable=False, default="pipeline")
    location = Column(String, nullable=False, default="")
    status = Column(String, nullable=False, default="operational")
    condition = Column(String)
    risk_score = Column(Float)

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

    __table_args__ = (
        Index("idx_assets_org", "organization_id"),
        Index("idx_assets_status", "status"),
    )

    @property
    def organization_name(self):
        return self.organization.name if self.organization is not None else None


__all__ = ["Asset"]
