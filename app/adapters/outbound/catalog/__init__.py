"""Resource catalog adapters."""

from app.adapters.outbound.catalog.csv_resource_catalog import CSVResourceCatalog
from app.adapters.outbound.catalog.postgres_resource_catalog import PostgresResourceCatalog

__all__ = [
    "CSVResourceCatalog",
    "PostgresResourceCatalog",
]
