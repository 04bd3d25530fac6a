"""Download lead repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.entities.download_lead import DownloadLead
from app.domain.value_objects.resource_ref import ResourceKind, ResourceRef


class DownloadLeadRepository(ABC):
    """Port interface for download lead repository."""

    @abstractmethod
    async def get(self, lead_id: str) -> Optional[DownloadLead]:
        """
        Get a lead by id.

        Args:
            lead_id: Lead identifier

        Returns:
            Lead entity, or None if not found
        """
        pass

    @abstractmethod
    async def find_by_email_and_resource(
        self, email: str, resource: ResourceRef
    ) -> Optional[DownloadLead]:
        """
        Get the lead for an (email, resource) pair.

        Args:
            email: Normalized email address
            resource: Requested resource

        Returns:
            Lead entity, or None if the pair has no lead yet
        """
        pass

    @abstractmethod
    async def find_latest_verified_by_email(self, email: str) -> Optional[DownloadLead]:
        """
        Get the most recently created verified lead for an email, across all resources.

        Args:
            email: Normalized email address

        Returns:
            Lead entity, or None if the email has never been verified
        """
        pass

    @abstractmethod
    async def save(self, lead: DownloadLead) -> DownloadLead:
        """
        Insert or update a lead.

        If another lead already holds the same (email, resource) pair, the
        changes are applied to that lead instead and it is returned.

        Args:
            lead: Lead entity to save

        Returns:
            The persisted lead
        """
        pass

    @abstractmethod
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
            Matching leads
        """
        pass

    @abstractmethod
    async def count(self, verified: Optional[bool] = None) -> int:
        """
        Count leads.

        Args:
            verified: Only count leads with this verified flag

        Returns:
            Number of leads
        """
        pass

    @abstractmethod
    async def delete(self, lead_id: str) -> bool:
        """
        Delete a lead.

        Args:
            lead_id: Lead identifier

        Returns:
            True if a lead was deleted
        """
        pass
