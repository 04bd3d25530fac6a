"""Email sender adapters."""

from app.adapters.outbound.email.console_email_sender import ConsoleEmailSender
from app.adapters.outbound.email.smtp_email_sender import SmtpConfig, SmtpEmailSender

__all__ = [
    "ConsoleEmailSender",
    "SmtpConfig",
    "SmtpEmailSender",
]
