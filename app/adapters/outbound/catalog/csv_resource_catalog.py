"""CSV-backed resource catalog adapter."""

import csv
import os
from pathlib import Path
from typing import Optional

from app.application.dtos.resource import DownloadableResource
from app.application.ports.resource_catalog import ResourceCatalog
from app.domain.value_objects.resource_ref import ResourceKind, ResourceRef
from app.infrastructure.logging.logger import logger

_TRUE_VALUES = {"1", "true", "yes", "y"}


class CSVResourceCatalog(ResourceCatalog):
    """
    CSV implementation of the resource catalog.

    Expected columns: kind, id, name, file_path, is_active. Download counts are
    kept in memory only.
    """

    def __init__(self, csv_path: Optional[str] = None) -> None:
        """
        Initialize CSV resource catalog.

        Args:
            csv_path: Path to CSV file. Defaults to data/resources.csv in the project root.
        """
        if not csv_path:
            project_root = Path(__file__).resolve().parents[4]
            csv_path = str(project_root / "data" / "resources.csv")
        self._csv_path = csv_path
        self._resources: dict[ResourceRef, DownloadableResource] = {}
        self._download_counts: dict[ResourceRef, int] = {}
        self._load_catalog()

    def _load_catalog(self) -> None:
        """Load and parse the CSV catalog."""
        if not os.path.exists(self._csv_path):
            raise FileNotFoundError(f"Resource catalog CSV file not found: {self._csv_path}")

        self._resources = {}
        with open(self._csv_path, "r", encoding="utf-8") as file:
            reader = csv.DictReader(file)
            for line_number, row in enumerate(reader, start=2):
                resource = self._map_row_to_resource(row)
                if resource is None:
                    logger.warning(f"Skipping invalid resource catalog row {line_number}")
                    continue
                self._resources[resource.ref] = resource

    def _map_row_to_resource(self, row: dict[str, str]) -> Optional[DownloadableResource]:
        """
        Map CSV row to DownloadableResource DTO.

        Args:
            row: CSV row as dictionary

        Returns:
            DownloadableResource DTO or None if row is invalid
        """
        try:
            kind = ResourceKind(str(row["kind"]).strip().lower())
            resource_id = str(row["id"]).strip()
            name = str(row["name"]).strip()
            if not resource_id or not name:
                return None

            file_path = (row.get("file_path") or "").strip() or None
            is_active = (row.get("is_active") or "true").strip().lower() in _TRUE_VALUES

            return DownloadableResource(
                resource_kind=kind,
                resource_id=resource_id,
                name=name,
                file_path=file_path,
                is_active=is_active,
            )
        except (ValueError, KeyError):
            return None

    async def get(self, ref: ResourceRef) -> Optional[DownloadableResource]:
        """
        Look up a resource.

        Args:
            ref: Resource reference

        Returns:
            Resource DTO with its in-memory download count, or None if not found
        """
        resource = self._resources.get(ref)
        if resource is None:
            return None
        return resource.model_copy(update={"download_count": self._download_counts.get(ref, 0)})

    async def record_download(self, ref: ResourceRef) -> None:
        """
        Increment the in-memory download counter.

        Args:
            ref: Resource reference
        """
        self._download_counts[ref] = self._download_counts.get(ref, 0) + 1
