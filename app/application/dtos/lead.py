"""Download lead DTOs."""

from datetime import datetime
from typing import Optional

from app.application.dtos.base import DTO
from app.domain.value_objects.resource_ref import ResourceKind


class DownloadRequest(DTO):
    """Intake submission for a gated download."""

    name: str
    email: str
    resource_kind: str
    resource_id: str
    phone: Optional[str] = None
    company: Optional[str] = None
    skip_otp: bool = True

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {
            "example": {
                "name": "Asha Patel",
                "email": "asha@example.com",
                "resource_kind": "tool",
                "resource_id": "gst-reconciliation",
                "phone": "+919876543210",
                "company": "Patel Traders",
                "skip_otp": True,
            }
        }


class DownloadRequestResult(DTO):
    """Outcome of an intake submission."""

    recognized: bool
    lead_id: str
    otp_sent: bool
    resource_name: str
    download_url: Optional[str] = None


class EmailCheckResult(DTO):
    """Returning-user lookup result."""

    recognized: bool
    name: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None


class VerifyOtpRequest(DTO):
    """OTP verification submission."""

    lead_id: str
    otp: str


class VerifyOtpResult(DTO):
    """Released download after verification."""

    lead_id: str
    download_url: str
    resource_name: str
    already_verified: bool = False


class LeadSummary(DTO):
    """Admin view of a lead. Never carries the OTP code."""

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    resource_kind: ResourceKind
    resource_id: str
    verified: bool
    status: str
    downloaded_at: Optional[datetime] = None
    created_at: datetime


class LeadStats(DTO):
    """Lead counters."""

    total: int
    verified: int
    pending: int


class LeadListResult(DTO):
    """Admin lead listing."""

    leads: list[LeadSummary]
    stats: LeadStats


class LeadProfile(DTO):
    """Validated, normalized contact profile."""

    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None


class ResendOtpResult(DTO):
    """Outcome of a resend request."""

    lead_id: str
    otp_sent: bool
