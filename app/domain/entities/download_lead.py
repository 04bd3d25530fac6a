"""Download lead entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from app.domain.value_objects.otp_code import OtpCode
from app.domain.value_objects.resource_ref import ResourceRef


class LeadStatus(str, Enum):
    """Verification status of a lead."""

    PENDING_OTP = "pending_otp"
    VERIFIED = "verified"
    EXPIRED = "expired"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DownloadLead:
    """A contact profile requesting one gated resource."""

    name: str
    email: str
    resource: ResourceRef
    phone: Optional[str] = None
    company: Optional[str] = None
    otp_code: Optional[str] = None
    otp_expires_at: Optional[datetime] = None
    verified: bool = False
    downloaded_at: Optional[datetime] = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def touch(self, now: Optional[datetime] = None) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = now or _utcnow()

    def status(self, now: datetime) -> LeadStatus:
        """
        Derive the verification status at a point in time.

        Args:
            now: Reference time

        Returns:
            Current lead status
        """
        if self.verified:
            return LeadStatus.VERIFIED
        if self.is_otp_expired(now):
            return LeadStatus.EXPIRED
        return LeadStatus.PENDING_OTP

    def is_otp_expired(self, now: datetime) -> bool:
        """
        Check whether the outstanding code can no longer be used.

        A lead without a code counts as expired.

        Args:
            now: Reference time

        Returns:
            True if there is no usable code
        """
        if self.otp_code is None or self.otp_expires_at is None:
            return True
        return now > self.otp_expires_at

    def update_profile(self, name: str, phone: Optional[str], company: Optional[str]) -> None:
        """Overwrite the submitted contact fields."""
        self.name = name
        self.phone = phone
        self.company = company

    def start_otp_cycle(self, code: OtpCode, expires_at: datetime, now: datetime) -> None:
        """
        Attach a fresh code, superseding any previous one.

        Args:
            code: Newly generated code
            expires_at: Deadline for the code
            now: Current time
        """
        self.otp_code = code.value
        self.otp_expires_at = expires_at
        self.verified = False
        self.touch(now)

    def matches_otp(self, submitted: str, now: datetime) -> bool:
        """
        Check a submitted code against the outstanding one.

        Args:
            submitted: Code typed by the user
            now: Current time

        Returns:
            True only if a code is outstanding, unexpired and equal
        """
        if self.is_otp_expired(now):
            return False
        return OtpCode(self.otp_code).matches(submitted)

    def mark_verified(self, now: datetime) -> bool:
        """
        Mark the lead verified and release the download.

        Args:
            now: Current time

        Returns:
            True if this is the first release for the lead
        """
        self.verified = True
        self.otp_code = None
        self.otp_expires_at = None
        first_release = self.downloaded_at is None
        if first_release:
            self.downloaded_at = now
        self.touch(now)
        return first_release
