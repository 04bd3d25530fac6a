"""SQLAlchemy ORM models for download leads."""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)

# Reuse the catalog declarative base so foreign keys resolve in one metadata
from app.adapters.outbound.catalog.models import Base


class DownloadLeadModel(Base):
    """SQLAlchemy model for download_leads table."""

    __tablename__ = "download_leads"
    __table_args__ = (
        # One lead per (email, resource) pair; concurrent issuances collapse onto one row
        UniqueConstraint("email", "tool_id", name="uq_download_leads_email_tool"),
        UniqueConstraint("email", "article_id", name="uq_download_leads_email_article"),
        CheckConstraint(
            "(tool_id IS NULL) <> (article_id IS NULL)",
            name="ck_download_leads_single_resource",
        ),
        Index("ix_download_leads_verified_created_at", "verified", "created_at"),
    )

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=True)
    company = Column(String, nullable=True)
    tool_id = Column(String, ForeignKey("tools.id", ondelete="CASCADE"), nullable=True)
    article_id = Column(String, ForeignKey("articles.id", ondelete="CASCADE"), nullable=True)
    otp_code = Column(String(6), nullable=True)
    otp_expires_at = Column(DateTime(timezone=True), nullable=True)
    verified = Column(Boolean, nullable=False, default=False)
    downloaded_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
