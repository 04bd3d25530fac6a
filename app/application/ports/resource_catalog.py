"""Resource catalog port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.application.dtos.resource import DownloadableResource
from app.domain.value_objects.resource_ref import ResourceRef


class ResourceCatalog(ABC):
    """Port interface for the tool/article catalog."""

    @abstractmethod
    async def get(self, ref: ResourceRef) -> Optional[DownloadableResource]:
        """
        Look up a resource.

        Args:
            ref: Resource reference

        Returns:
            Resource DTO, or None if not found
        """
        pass

    @abstractmethod
    async def record_download(self, ref: ResourceRef) -> None:
        """
        Increment the download counter of a resource.

        Args:
            ref: Resource reference
        """
        pass
