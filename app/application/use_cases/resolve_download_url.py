"""Resolve the download URL released to a verified lead."""

from typing import Optional

from app.application.dtos.resource import DownloadableResource, ResolvedDownload
from app.application.ports.resource_catalog import ResourceCatalog
from app.application.use_cases.user_messages import UserMessages
from app.domain.entities.download_lead import DownloadLead
from app.domain.errors import NotFoundError, NotVerifiedError
from app.domain.value_objects.resource_ref import ResourceRef


class DownloadUrlResolver:
    """Maps catalog file references to public download URLs."""

    LEGACY_PREFIX = "/downloads/"

    def __init__(self, resource_catalog: ResourceCatalog, download_url_prefix: str = "/download/") -> None:
        """
        Initialize resolver.

        Args:
            resource_catalog: Tool/article catalog
            download_url_prefix: Path under which the file route serves downloads
        """
        self._resource_catalog = resource_catalog
        self._prefix = "/" + download_url_prefix.strip("/") + "/"

    async def require_resource(self, ref: ResourceRef, active_only: bool = True) -> DownloadableResource:
        """
        Look up a resource that must exist.

        Args:
            ref: Resource reference
            active_only: Treat inactive resources as missing

        Returns:
            Resource DTO

        Raises:
            NotFoundError: If the resource is missing (or inactive when active_only)
        """
        resource = await self._resource_catalog.get(ref)
        if resource is None or (active_only and not resource.is_active):
            raise NotFoundError(UserMessages.RESOURCE_NOT_FOUND)
        return resource

    def normalize(self, file_path: Optional[str]) -> Optional[str]:
        """
        Normalize a stored file reference to a download URL.

        Args:
            file_path: Stored reference (filename, legacy path, prefixed path or URL)

        Returns:
            Download URL, or None if there is no file
        """
        if not file_path or not file_path.strip():
            return None
        file_path = file_path.strip()
        if file_path.startswith(self._prefix):
            return file_path
        if file_path.startswith(self.LEGACY_PREFIX):
            return self._prefix + file_path[len(self.LEGACY_PREFIX):]
        if not file_path.startswith("/") and not file_path.startswith("http"):
            return self._prefix + file_path
        # External URLs and other absolute paths are served as-is
        return file_path

    async def resolve(
        self,
        lead: DownloadLead,
        resource: Optional[DownloadableResource] = None,
    ) -> ResolvedDownload:
        """
        Resolve the download for a verified lead. Repeated calls return the same URL.

        Args:
            lead: Verified lead
            resource: Already loaded resource, to skip the catalog lookup

        Returns:
            Download URL and resource name

        Raises:
            NotVerifiedError: If the lead is not verified
            NotFoundError: If the resource or its file is missing
        """
        if not lead.verified:
            raise NotVerifiedError(UserMessages.LEAD_NOT_VERIFIED)
        if resource is None:
            resource = await self.require_resource(lead.resource, active_only=False)

        download_url = self.normalize(resource.file_path)
        if download_url is None:
            raise NotFoundError(UserMessages.FILE_NOT_AVAILABLE)
        return ResolvedDownload(download_url=download_url, resource_name=resource.name)
