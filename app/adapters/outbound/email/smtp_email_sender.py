"""SMTP email sender adapter."""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Callable, Optional

import aiosmtplib

from app.application.dtos.base import DTO
from app.application.ports.email_sender import EmailSender, EmailSendError
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import logger


class SmtpConfig(DTO):
    """SMTP transport configuration."""

    host: str
    port: int
    user: str
    password: str
    from_email: str
    from_name: str
    timeout_seconds: int = 10

    @property
    def is_configured(self) -> bool:
        """Check if credentials are present."""
        return bool(self.user and self.password)


def smtp_config_from_settings() -> SmtpConfig:
    """
    Build SMTP configuration from application settings.

    Returns:
        SmtpConfig instance
    """
    return SmtpConfig(
        host=settings.smtp_host,
        port=settings.smtp_port,
        user=settings.smtp_user,
        password=settings.smtp_password,
        from_email=settings.email_from or settings.smtp_user,
        from_name=settings.email_from_name,
        timeout_seconds=settings.smtp_timeout_seconds,
    )


class SmtpEmailSender(EmailSender):
    """Async SMTP email sender using aiosmtplib."""

    def __init__(self, config_provider: Optional[Callable[[], SmtpConfig]] = None) -> None:
        """
        Initialize SMTP sender.

        Args:
            config_provider: Returns the SMTP configuration; called on every send
                so configuration changes apply without a restart
        """
        self._config_provider = config_provider or smtp_config_from_settings

    def _build_message(self, config: SmtpConfig, to: str, subject: str, html: str) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = f"{config.from_name} <{config.from_email}>"
        message["To"] = to
        message["Subject"] = subject
        message.attach(MIMEText(html, "html"))
        return message

    async def send(self, to: str, subject: str, html: str) -> None:
        """
        Send an HTML email over SMTP.

        Port 465 uses implicit TLS; any other port upgrades with STARTTLS.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body

        Raises:
            EmailSendError: If SMTP is not configured or the server rejects the message
        """
        config = self._config_provider()
        if not config.is_configured:
            raise EmailSendError("SMTP settings not configured")

        message = self._build_message(config, to, subject, html)
        implicit_tls = config.port == 465
        try:
            await aiosmtplib.send(
                message,
                hostname=config.host,
                port=config.port,
                username=config.user,
                password=config.password,
                use_tls=implicit_tls,
                start_tls=not implicit_tls,
                timeout=config.timeout_seconds,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"[Email/SMTP] Failed to send email to {to}: {e}")
            raise EmailSendError(str(e)) from e

        logger.info(f"[Email/SMTP] Sent email to {to}: {subject}")
