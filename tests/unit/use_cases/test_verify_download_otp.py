"""Unit tests for VerifyDownloadOtp use case."""

import pytest

from app.application.dtos.lead import VerifyOtpRequest
from app.domain.errors import ExpiredError, InvalidCodeError, NotFoundError, ValidationError
from app.domain.value_objects.resource_ref import ResourceRef
from tests.fakes import GateHarness, download_request


async def _pending_lead_id(gate: GateHarness, **overrides) -> str:
    result = await gate.request_download.execute(download_request(**overrides))
    return result.lead_id


@pytest.mark.asyncio
async def test_correct_code_releases_download():
    """Test a matching code verifies the lead and returns the URL."""
    gate = GateHarness("482913")
    lead_id = await _pending_lead_id(gate)

    result = await gate.verify_download_otp.execute(
        VerifyOtpRequest(lead_id=lead_id, otp=" 482913 "), request_id="req-9"
    )

    assert result.lead_id == lead_id
    assert result.download_url == "/download/gst-reconciliation.zip"
    assert result.resource_name == "GST Reconciliation Utility"
    assert result.already_verified is False

    lead = await gate.lead_repository.get(lead_id)
    assert lead.verified is True
    assert lead.otp_code is None
    assert lead.downloaded_at == gate.clock.now
    assert gate.resource_catalog.recorded == [ResourceRef("tool", "gst-reconciliation")]

    outcome = gate.logger.for_component("verification")[-1]
    assert outcome["request_id"] == "req-9"
    assert outcome["verification_outcome"] == "verified"


@pytest.mark.asyncio
async def test_legacy_downloads_path_is_normalized():
    """Test /downloads/ file references resolve under /download/."""
    gate = GateHarness("482913")
    lead_id = await _pending_lead_id(gate, resource_id="tds-calculator")

    result = await gate.verify_download_otp.execute(VerifyOtpRequest(lead_id=lead_id, otp="482913"))

    assert result.download_url == "/download/tds-calculator.xlsx"


@pytest.mark.asyncio
async def test_wrong_code_leaves_lead_untouched():
    """Test a mismatch changes nothing and the right code still works afterwards."""
    gate = GateHarness("482913")
    lead_id = await _pending_lead_id(gate)
    before = await gate.lead_repository.get(lead_id)

    with pytest.raises(InvalidCodeError):
        await gate.verify_download_otp.execute(VerifyOtpRequest(lead_id=lead_id, otp="000000"))

    after = await gate.lead_repository.get(lead_id)
    assert after == before
    assert gate.resource_catalog.recorded == []

    result = await gate.verify_download_otp.execute(VerifyOtpRequest(lead_id=lead_id, otp="482913"))
    assert result.download_url == "/download/gst-reconciliation.zip"


@pytest.mark.asyncio
async def test_code_accepted_at_deadline():
    """Test the code is still valid exactly at expiry time."""
    gate = GateHarness("482913", otp_ttl_seconds=600)
    lead_id = await _pending_lead_id(gate)

    gate.clock.advance(600)
    result = await gate.verify_download_otp.execute(VerifyOtpRequest(lead_id=lead_id, otp="482913"))

    assert result.already_verified is False


@pytest.mark.asyncio
async def test_code_rejected_after_deadline_even_if_correct():
    """Test an expired code fails with ExpiredError regardless of value."""
    gate = GateHarness("482913", otp_ttl_seconds=600)
    lead_id = await _pending_lead_id(gate)

    gate.clock.advance(601)
    with pytest.raises(ExpiredError):
        await gate.verify_download_otp.execute(VerifyOtpRequest(lead_id=lead_id, otp="482913"))

    lead = await gate.lead_repository.get(lead_id)
    assert lead.verified is False
    assert gate.logger.for_component("verification")[-1]["verification_outcome"] == "expired"


@pytest.mark.asyncio
async def test_repeat_verification_returns_same_url_without_recount():
    """Test verifying twice returns the same URL and counts one download."""
    gate = GateHarness("482913")
    lead_id = await _pending_lead_id(gate)
    first = await gate.verify_download_otp.execute(VerifyOtpRequest(lead_id=lead_id, otp="482913"))
    downloaded_at = (await gate.lead_repository.get(lead_id)).downloaded_at

    gate.clock.advance(3600)
    second = await gate.verify_download_otp.execute(VerifyOtpRequest(lead_id=lead_id, otp="482913"))

    assert second.already_verified is True
    assert second.download_url == first.download_url
    assert (await gate.lead_repository.get(lead_id)).downloaded_at == downloaded_at
    assert len(gate.resource_catalog.recorded) == 1


@pytest.mark.asyncio
async def test_unknown_lead_is_not_found():
    """Test verification of a missing lead raises NotFoundError."""
    gate = GateHarness()

    with pytest.raises(NotFoundError):
        await gate.verify_download_otp.execute(VerifyOtpRequest(lead_id="missing", otp="123456"))


@pytest.mark.asyncio
@pytest.mark.parametrize("lead_id,otp", [("", "123456"), ("lead", ""), ("  ", "  ")])
async def test_blank_input_is_rejected(lead_id, otp):
    """Test blank lead id or code raises ValidationError."""
    gate = GateHarness()

    with pytest.raises(ValidationError):
        await gate.verify_download_otp.execute(VerifyOtpRequest(lead_id=lead_id, otp=otp))


@pytest.mark.asyncio
async def test_leads_are_isolated():
    """Test verifying one lead does not affect another pending lead."""
    gate = GateHarness("111111", "222222")
    asha = await _pending_lead_id(gate, email="asha@example.com")
    ravi = await _pending_lead_id(gate, email="ravi@example.com")

    await gate.verify_download_otp.execute(VerifyOtpRequest(lead_id=asha, otp="111111"))

    other = await gate.lead_repository.get(ravi)
    assert other.verified is False
    assert other.otp_code == "222222"
    with pytest.raises(InvalidCodeError):
        await gate.verify_download_otp.execute(VerifyOtpRequest(lead_id=ravi, otp="111111"))
