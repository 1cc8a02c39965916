"""Database models for SubSentinel using SQLAlchemy."""

from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship


def _utc_now() -> datetime:
    return datetime.now(UTC)


Base = declarative_base()


class Scan(Base):
    """One reconnaissance run against a target domain."""

    __tablename__ = "scans"

    id = Column(Integer, primary_key=True)
    target_domain = Column(String, nullable=False, index=True)
    status = Column(String, nullable=False, default="pending")  # pending, running, completed, failed, stopped
    scan_options = Column(JSON, default=dict)

    total_subdomains = Column(Integer, default=0)
    active_subdomains = Column(Integer, default=0)
    anomalies = Column(Integer, default=0)
    cloud_assets = Column(Integer, default=0)
    takeover_vulnerable = Column(Integer, default=0)

    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utc_now)
    updated_at = Column(DateTime(timezone=True), default=_utc_now, onupdate=_utc_now)

    subdomains = relationship("Subdomain", back_populates="scan", cascade="all, delete-orphan")


class Subdomain(Base):
    """A subdomain discovered by a scan."""

    __tablename__ = "subdomains"
    __table_args__ = (UniqueConstraint("scan_id", "name", name="uq_subdomains_scan_name"),)

    id = Column(Integer, primary_key=True)
    scan_id = Column(Integer, ForeignKey("scans.id"), nullable=False, index=True)

    name = Column(String, nullable=False)
    source = Column(String, default="wordlist")
    status = Column(String, default="inactive", index=True)  # active, inactive
    ip_addresses = Column(JSON, default=list)
    cname_record = Column(String, nullable=True)
    dns_records = Column(JSON, default=dict)

    http_status = Column(Integer, nullable=True)
    https_status = Column(Integer, nullable=True)
    server = Column(String, nullable=True)
    technologies = Column(JSON, default=list)

    cloud_provider = Column(String, nullable=True)
    risk_score = Column(Integer, default=0, index=True)
    is_anomaly = Column(Boolean, default=False)
    anomaly_reason = Column(Text, nullable=True)
    takeover_vulnerable = Column(Boolean, default=False)
    takeover_type = Column(String, nullable=True)
    takeover_verified = Column(Boolean, default=False)

    wayback_urls = Column(JSON, default=list)
    ports = Column(JSON, default=list)

    first_seen = Column(DateTime(timezone=True), default=_utc_now)
    last_seen = Column(DateTime(timezone=True), default=_utc_now)
    created_at = Column(DateTime(timezone=True), default=_utc_now)

    scan = relationship("Scan", back_populates="subdomains")
