"""HTTP adapter schemas for the download gate endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CheckEmailBody(BaseModel):
    """Returning-user lookup payload."""

    email: str = ""

    model_config = ConfigDict(json_schema_extra={"example": {"email": "asha@example.com"}})


class ResourceRefBody(BaseModel):
    """Reference to the tool or article being requested."""

    kind: str = ""  # tool or article
    id: str = ""


class DownloadRequestBody(BaseModel):
    """Intake form payload."""

    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    company: Optional[str] = None
    resource: Optional[ResourceRefBody] = None
    skip_otp: bool = True

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Asha Patel",
                "email": "asha@example.com",
                "phone": "+919876543210",
                "company": "Patel Traders",
                "resource": {"kind": "tool", "id": "gst-reconciliation"},
                "skip_otp": True,
            }
        }
    )


class DownloadRequestResponse(BaseModel):
    """Intake response. download_url is only set when the OTP was skipped."""

    recognized: bool
    lead_id: str
    otp_sent: bool
    resource_name: str
    download_url: Optional[str] = None
    email_delayed: bool = False
    message: str


class VerifyOtpBody(BaseModel):
    """OTP submission payload."""

    lead_id: str = ""
    otp: str = ""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"lead_id": "5f0c9f0e-3b9a-4c55-9a57-1f7f0c6f2b11", "otp": "482913"}
        }
    )


class ResendOtpBody(BaseModel):
    """Resend payload."""

    lead_id: str = ""


class ResendOtpResponse(BaseModel):
    """Resend response."""

    lead_id: str
    otp_sent: bool
    email_delayed: bool = False
    message: str


class DeleteLeadResponse(BaseModel):
    """Admin delete response."""

    deleted: str
