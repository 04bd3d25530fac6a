"""Check returning user use case."""

from app.application.dtos.lead import EmailCheckResult
from app.application.ports.download_lead_repository import DownloadLeadRepository
from app.application.use_cases.lead_input_validation import parse_email
from app.domain.value_objects.email_address import EmailAddress


class CheckReturningUser:
    """Read-only lookup of a prior verified download for an email."""

    def __init__(self, lead_repository: DownloadLeadRepository) -> None:
        """
        Initialize use case.

        Args:
            lead_repository: Download lead repository
        """
        self._lead_repository = lead_repository

    async def execute(self, email: str) -> EmailCheckResult:
        """
        Check a raw submitted email.

        Args:
            email: Email as typed by the user

        Returns:
            Recognition result with the profile of the most recent verified lead

        Raises:
            ValidationError: If the email is malformed
        """
        return await self.lookup(parse_email(email))

    async def lookup(self, email: EmailAddress) -> EmailCheckResult:
        """
        Check an already validated email.

        Args:
            email: Normalized email address

        Returns:
            Recognition result
        """
        lead = await self._lead_repository.find_latest_verified_by_email(email.value)
        if lead is None:
            return EmailCheckResult(recognized=False)
        return EmailCheckResult(
            recognized=True,
            name=lead.name,
            phone=lead.phone,
            company=lead.company,
        )
