"""Email sender port."""

from abc import ABC, abstractmethod


class EmailSendError(Exception):
    """Email transport failed to accept the message."""


class EmailSender(ABC):
    """Port interface for outbound email."""

    @abstractmethod
    async def send(self, to: str, subject: str, html: str) -> None:
        """
        Send an HTML email.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body

        Raises:
            EmailSendError: If the transport is unconfigured or rejects the message
        """
        pass
