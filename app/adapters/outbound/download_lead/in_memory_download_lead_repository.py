"""In-memory download lead repository adapter."""

from dataclasses import replace
from typing import Optional

from app.application.ports.download_lead_repository import DownloadLeadRepository
from app.domain.entities.download_lead import DownloadLead
from app.domain.value_objects.resource_ref import ResourceKind, ResourceRef


class InMemoryDownloadLeadRepository(DownloadLeadRepository):
    """In-memory implementation of download lead repository. Stores copies of entities."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, DownloadLead] = {}

    def _find_pair(self, email: str, resource: ResourceRef) -> Optional[DownloadLead]:
        for lead in self._storage.values():
            if lead.email == email and lead.resource == resource:
                return lead
        return None

    async def get(self, lead_id: str) -> Optional[DownloadLead]:
        """
        Get a lead by id.

        Args:
            lead_id: Lead identifier

        Returns:
            Copy of the stored lead, or None if not found
        """
        lead = self._storage.get(lead_id)
        return replace(lead) if lead else None

    async def find_by_email_and_resource(
        self, email: str, resource: ResourceRef
    ) -> Optional[DownloadLead]:
        """
        Get the lead for an (email, resource) pair.

        Args:
            email: Normalized email address
            resource: Requested resource

        Returns:
            Copy of the stored lead, or None
        """
        lead = self._find_pair(email, resource)
        return replace(lead) if lead else None

    async def find_latest_verified_by_email(self, email: str) -> Optional[DownloadLead]:
        """
        Get the most recently created verified lead for an email.

        Args:
            email: Normalized email address

        Returns:
            Copy of the stored lead, or None
        """
        verified = [
            lead for lead in self._storage.values() if lead.email == email and lead.verified
        ]
        if not verified:
            return None
        return replace(max(verified, key=lambda lead: lead.created_at))

    async def save(self, lead: DownloadLead) -> DownloadLead:
        """
        Insert or update a lead, merging onto an existing lead for the same pair.

        Args:
            lead: Lead entity to save

        Returns:
            Copy of the stored lead
        """
        if lead.id not in self._storage:
            existing = self._find_pair(lead.email, lead.resource)
            if existing is not None:
                lead = replace(lead, id=existing.id, created_at=existing.created_at)
        self._storage[lead.id] = replace(lead)
        return replace(lead)

    async def count(self, verified: Optional[bool] = None) -> int:
        """
        Count leads.

        Args:
            verified: Only count leads with this verified flag

        Returns:
            Number of leads
        """
        if verified is None:
            return len(self._storage)
        return sum(1 for lead in self._storage.values() if lead.verified == verified)

    async def delete(self, lead_id: str) -> bool:
        """
        Delete a lead.

        Args:
            lead_id: Lead identifier

        Returns:
            True if a lead was deleted
        """
        return self._storage.pop(lead_id, None) is not None

    async def list(
        self,
        resource_kind: Optional[ResourceKind] = None,
        resource_id: Optional[str] = None,
        verified: Optional[bool] = None,
    ) -> list[DownloadLead]:
        """
        List leads, newest first.

        Args:
            resource_kind: Only leads for this kind of resource
            resource_id: Only leads for this resource id
            verified: Only leads with this verified flag

        Returns:
            Copies of the matching leads
        """
        leads = [
            lead
            for lead in self._storage.values()
            if (resource_kind is None or lead.resource.kind == resource_kind)
            and (resource_id is None or lead.resource.resource_id == resource_id)
            and (verified is None or lead.verified == verified)
        ]
        leads.sort(key=lambda lead: lead.created_at, reverse=True)
        return [replace(lead) for lead in leads]
