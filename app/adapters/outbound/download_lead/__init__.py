"""Download lead repository adapters."""

from app.adapters.outbound.download_lead.in_memory_download_lead_repository import (
    InMemoryDownloadLeadRepository,
)
from app.adapters.outbound.download_lead.postgres_download_lead_repository import (
    PostgresDownloadLeadRepository,
)

__all__ = [
    "InMemoryDownloadLeadRepository",
    "PostgresDownloadLeadRepository",
]
