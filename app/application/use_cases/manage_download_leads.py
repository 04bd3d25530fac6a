"""Admin lead console use case."""

from datetime import datetime, timezone
from typing import Callable, Optional

from app.application.dtos.lead import LeadListResult, LeadStats, LeadSummary
from app.application.ports.download_lead_repository import DownloadLeadRepository
from app.application.use_cases.user_messages import UserMessages
from app.domain.entities.download_lead import DownloadLead
from app.domain.errors import NotFoundError, ValidationError
from app.domain.value_objects.resource_ref import ResourceKind


class ManageDownloadLeads:
    """Lists and deletes download leads for administrators."""

    def __init__(
        self,
        lead_repository: DownloadLeadRepository,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialize use case.

        Args:
            lead_repository: Download lead repository
            clock: Returns the current UTC time
        """
        self._lead_repository = lead_repository
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _to_summary(self, lead: DownloadLead, now: datetime) -> LeadSummary:
        return LeadSummary(
            id=lead.id,
            name=lead.name,
            email=lead.email,
            phone=lead.phone,
            company=lead.company,
            resource_kind=lead.resource.kind,
            resource_id=lead.resource.resource_id,
            verified=lead.verified,
            status=lead.status(now).value,
            downloaded_at=lead.downloaded_at,
            created_at=lead.created_at,
        )

    async def list_leads(
        self,
        resource_kind: Optional[str] = None,
        resource_id: Optional[str] = None,
        verified: Optional[bool] = None,
    ) -> LeadListResult:
        """
        List leads newest first, with overall counters.

        Args:
            resource_kind: Only leads for 'tool' or 'article'
            resource_id: Only leads for this resource id
            verified: Only leads with this verified flag

        Returns:
            Lead summaries and stats

        Raises:
            ValidationError: If resource_kind is unknown
        """
        kind = None
        if resource_kind:
            try:
                kind = ResourceKind(resource_kind)
            except ValueError as err:
                raise ValidationError(UserMessages.INVALID_RESOURCE) from err

        leads = await self._lead_repository.list(
            resource_kind=kind,
            resource_id=resource_id or None,
            verified=verified,
        )
        now = self._clock()
        stats = LeadStats(
            total=await self._lead_repository.count(),
            verified=await self._lead_repository.count(verified=True),
            pending=await self._lead_repository.count(verified=False),
        )
        return LeadListResult(leads=[self._to_summary(lead, now) for lead in leads], stats=stats)

    async def delete_lead(self, lead_id: str) -> None:
        """
        Delete a lead.

        Args:
            lead_id: Lead identifier

        Raises:
            NotFoundError: If the lead does not exist
        """
        if not await self._lead_repository.delete(lead_id):
            raise NotFoundError(UserMessages.LEAD_NOT_FOUND)
