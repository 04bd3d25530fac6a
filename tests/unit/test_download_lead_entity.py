"""Unit tests for DownloadLead entity."""

from datetime import timedelta

from app.domain.entities.download_lead import DownloadLead, LeadStatus
from app.domain.value_objects.otp_code import OtpCode
from app.domain.value_objects.resource_ref import ResourceKind, ResourceRef
from tests.fakes import START_TIME


def _lead() -> DownloadLead:
    return DownloadLead(
        name="Asha Patel",
        email="asha@example.com",
        resource=ResourceRef(ResourceKind.TOOL, "gst-reconciliation"),
        created_at=START_TIME,
        updated_at=START_TIME,
    )


def test_new_lead_has_no_code_and_counts_as_expired():
    """Test a lead without a code is not verifiable."""
    lead = _lead()

    assert lead.verified is False
    assert lead.otp_code is None
    assert lead.is_otp_expired(START_TIME) is True
    assert lead.status(START_TIME) == LeadStatus.EXPIRED
    assert lead.matches_otp("123456", START_TIME) is False


def test_start_otp_cycle_sets_pending_status():
    """Test starting a cycle attaches the code and deadline."""
    lead = _lead()
    expires_at = START_TIME + timedelta(minutes=10)

    lead.start_otp_cycle(OtpCode("482913"), expires_at, START_TIME)

    assert lead.otp_code == "482913"
    assert lead.otp_expires_at == expires_at
    assert lead.status(START_TIME) == LeadStatus.PENDING_OTP


def test_code_valid_until_deadline_inclusive():
    """Test the code is accepted at the deadline and rejected after it."""
    lead = _lead()
    expires_at = START_TIME + timedelta(minutes=10)
    lead.start_otp_cycle(OtpCode("482913"), expires_at, START_TIME)

    assert lead.matches_otp("482913", expires_at) is True
    assert lead.matches_otp("482913", expires_at + timedelta(seconds=1)) is False
    assert lead.status(expires_at + timedelta(seconds=1)) == LeadStatus.EXPIRED


def test_new_cycle_supersedes_previous_code():
    """Test only the latest code matches."""
    lead = _lead()
    lead.start_otp_cycle(OtpCode("111111"), START_TIME + timedelta(minutes=10), START_TIME)
    lead.start_otp_cycle(OtpCode("222222"), START_TIME + timedelta(minutes=11), START_TIME)

    assert lead.matches_otp("111111", START_TIME) is False
    assert lead.matches_otp("222222", START_TIME) is True


def test_new_cycle_resets_verified_flag():
    """Test a forced re-verification un-verifies the lead."""
    lead = _lead()
    lead.mark_verified(START_TIME)

    lead.start_otp_cycle(OtpCode("333333"), START_TIME + timedelta(minutes=10), START_TIME)

    assert lead.verified is False


def test_mark_verified_clears_code_and_records_first_release():
    """Test verification clears the code and stamps downloaded_at once."""
    lead = _lead()
    lead.start_otp_cycle(OtpCode("482913"), START_TIME + timedelta(minutes=10), START_TIME)

    first = lead.mark_verified(START_TIME)
    second = lead.mark_verified(START_TIME + timedelta(days=1))

    assert first is True
    assert second is False
    assert lead.verified is True
    assert lead.otp_code is None
    assert lead.otp_expires_at is None
    assert lead.downloaded_at == START_TIME
    assert lead.status(START_TIME + timedelta(days=365)) == LeadStatus.VERIFIED


def test_update_profile_overwrites_contact_fields():
    """Test resubmission updates name, phone and company."""
    lead = _lead()

    lead.update_profile("Asha P.", "+919876543210", "Patel Traders")

    assert lead.name == "Asha P."
    assert lead.phone == "+919876543210"
    assert lead.company == "Patel Traders"
    assert lead.email == "asha@example.com"
