"""Downloadable resource DTOs."""

from typing import Optional

from app.application.dtos.base import DTO
from app.domain.value_objects.resource_ref import ResourceKind, ResourceRef


class DownloadableResource(DTO):
    """Catalog entry for a gated tool or article."""

    resource_kind: ResourceKind
    resource_id: str
    name: str
    file_path: Optional[str] = None
    is_active: bool = True
    download_count: int = 0

    @property
    def ref(self) -> ResourceRef:
        """Reference to this resource."""
        return ResourceRef(self.resource_kind, self.resource_id)


class ResolvedDownload(DTO):
    """Download released to a verified lead."""

    download_url: str
    resource_name: str
