"""Domain errors for the download gate workflow."""

from typing import Optional


class DownloadGateError(Exception):
    """Base class for download gate errors."""

    code = "download_gate_error"

    def __init__(self, message: str) -> None:
        """
        Initialize error.

        Args:
            message: User-facing message
        """
        super().__init__(message)
        self.message = message


class ValidationError(DownloadGateError):
    """Submitted input is malformed. Raised before anything is persisted."""

    code = "validation_error"


class DeliveryError(DownloadGateError):
    """The OTP email could not be delivered. The lead and its code are already persisted."""

    code = "delivery_failed"

    def __init__(self, message: str, lead_id: Optional[str] = None) -> None:
        """
        Initialize delivery error.

        Args:
            message: User-facing message
            lead_id: Lead whose OTP was generated but not delivered
        """
        super().__init__(message)
        self.lead_id = lead_id


class InvalidCodeError(DownloadGateError):
    """Submitted OTP does not match the outstanding code."""

    code = "invalid_code"


class ExpiredError(DownloadGateError):
    """OTP window elapsed; a new code must be issued."""

    code = "expired"


class NotFoundError(DownloadGateError):
    """Unknown lead or resource."""

    code = "not_found"


class NotVerifiedError(DownloadGateError):
    """Download URL requested for a lead that has not been verified."""

    code = "not_verified"
