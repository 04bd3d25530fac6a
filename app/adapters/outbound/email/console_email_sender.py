"""Console email sender for local development."""

from app.application.ports.email_sender import EmailSender
from app.infrastructure.logging.logger import logger


class ConsoleEmailSender(EmailSender):
    """Logs outgoing emails instead of delivering them."""

    async def send(self, to: str, subject: str, html: str) -> None:
        """
        Log the email.

        The body is logged so OTP codes can be read during local development;
        never use this sender in production.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body
        """
        logger.warning(f"[Email/Console] To: {to} | Subject: {subject}\n{html}")
