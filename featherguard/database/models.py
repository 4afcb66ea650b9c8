"""
SQLAlchemy models for FeatherGuard
Column layout matches the Supabase `reports` table.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Float, String, Text, DateTime, Index
from sqlalchemy.orm import declarative_base

from featherguard.core.models import Report

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReportRecord(Base):
    """
    Window-strike report row.

    Latitude and longitude are both NULL when no position was captured.
    """
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)

    # Reporter
    reporter_name = Column(String(100), default="")

    # Incident
    bird_species = Column(String(200), default="")
    status = Column(String(20))
    window_type = Column(String(30))
    description = Column(Text, default="")

    # Photo
    photo_url = Column(String(500), default="")

    # Location
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    __table_args__ = (
        Index("idx_report_created_at", created_at),
    )

    def __repr__(self):
        return f"<ReportRecord({self.id}, species={self.bird_species!r}, status={self.status})>"

    @classmethod
    def from_report(cls, report: Report) -> "ReportRecord":
        """Create a row from a draft report."""
        return cls(**report.to_record())

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "reporter_name": self.reporter_name,
            "bird_species": self.bird_species,
            "status": self.status,
            "window_type": self.window_type,
            "photo_url": self.photo_url,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "description": self.description,
            "created_at": self.created_at,
        }

    def to_report(self) -> Report:
        return Report.from_record(self.to_dict())
