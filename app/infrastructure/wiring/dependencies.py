"""Dependency injection factory functions."""

from app.adapters.outbound.catalog import CSVResourceCatalog, PostgresResourceCatalog
from app.adapters.outbound.download_lead import (
    InMemoryDownloadLeadRepository,
    PostgresDownloadLeadRepository,
)
from app.adapters.outbound.email import ConsoleEmailSender, SmtpEmailSender
from app.adapters.outbound.rate_limit import (
    InMemoryRateLimiter,
    NoOpRateLimiter,
    RedisRateLimiter,
)
from app.application.ports.download_lead_repository import DownloadLeadRepository
from app.application.ports.email_sender import EmailSender
from app.application.ports.rate_limiter import RateLimiter
from app.application.ports.resource_catalog import ResourceCatalog
from app.infrastructure.config.settings import settings


def create_download_lead_repository() -> DownloadLeadRepository:
    """
    Factory function to create download lead repository.

    Returns:
        DownloadLeadRepository instance
    """
    if settings.download_lead_repository == "postgres":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when DOWNLOAD_LEAD_REPOSITORY=postgres")
        # download_leads references the tools and articles tables
        if settings.resource_catalog != "postgres":
            raise ValueError(
                "RESOURCE_CATALOG=postgres is required when DOWNLOAD_LEAD_REPOSITORY=postgres"
            )
        return PostgresDownloadLeadRepository()
    else:
        return InMemoryDownloadLeadRepository()


def create_resource_catalog() -> ResourceCatalog:
    """
    Factory function to create resource catalog.

    Returns:
        ResourceCatalog instance
    """
    if settings.resource_catalog == "postgres":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when RESOURCE_CATALOG=postgres")
        return PostgresResourceCatalog()
    else:
        return CSVResourceCatalog(settings.resource_catalog_csv_path or None)


def create_email_sender() -> EmailSender:
    """
    Factory function to create email sender.

    Returns:
        EmailSender instance (SMTP or console)
    """
    if settings.email_backend == "smtp":
        return SmtpEmailSender()
    return ConsoleEmailSender()


def create_rate_limiter() -> RateLimiter:
    """
    Factory function to create rate limiter.

    Returns:
        RateLimiter instance (Redis, in-memory or NoOp)
    """
    if settings.rate_limiter == "disabled":
        return NoOpRateLimiter()

    if settings.rate_limiter == "redis":
        if not settings.redis_url:
            raise ValueError("REDIS_URL is required when RATE_LIMITER=redis")
        return RedisRateLimiter(settings.redis_url)

    return InMemoryRateLimiter()
