"""User-facing messages for the download gate."""


class UserMessages:
    """Centralized user-facing messages."""

    # Validation
    NAME_REQUIRED = "Name is required."
    INVALID_EMAIL = "Invalid email format."
    INVALID_RESOURCE = "A valid tool or article must be selected."
    OTP_REQUIRED = "Lead ID and OTP are required."

    # Lookup failures
    RESOURCE_NOT_FOUND = "Resource not found or no longer available."
    LEAD_NOT_FOUND = "Download request not found."
    FILE_NOT_AVAILABLE = "This resource has no downloadable file yet."
    LEAD_NOT_VERIFIED = "Email has not been verified for this download."

    # Issuance
    OTP_SENT = "OTP sent to your email."
    OTP_RESENT = "A new OTP has been sent to your email."
    EMAIL_DELAYED = (
        "We could not send the verification email right now. It may be delayed; "
        "you can request a new code."
    )

    # Verification
    OTP_INVALID = "Invalid OTP. Please try again."
    OTP_EXPIRED = "OTP has expired. Please request a new one."
    VERIFIED = "Email verified successfully."
    ALREADY_VERIFIED = "Already verified."
    WELCOME_BACK = "Welcome back! Download starting..."

    # Rate limiting
    TOO_MANY_REQUESTS = "Too many requests. Please try again later."
