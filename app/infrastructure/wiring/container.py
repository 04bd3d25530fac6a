"""Dependency injection container."""

from datetime import datetime
from typing import Callable, Optional

from app.application.ports.download_lead_repository import DownloadLeadRepository
from app.application.ports.email_sender import EmailSender
from app.application.ports.rate_limiter import RateLimiter
from app.application.ports.resource_catalog import ResourceCatalog
from app.application.use_cases.check_returning_user import CheckReturningUser
from app.application.use_cases.issue_download_otp import IssueDownloadOtp
from app.application.use_cases.manage_download_leads import ManageDownloadLeads
from app.application.use_cases.request_download import RequestDownload
from app.application.use_cases.resolve_download_url import DownloadUrlResolver
from app.application.use_cases.verify_download_otp import VerifyDownloadOtp
from app.domain.value_objects.otp_code import OtpCode
from app.infrastructure.config.settings import Settings, settings as default_settings
from app.infrastructure.logging.logger import log_event
from app.infrastructure.wiring.dependencies import (
    create_download_lead_repository,
    create_email_sender,
    create_rate_limiter,
    create_resource_catalog,
)


class Container:
    """Dependency injection container. Any adapter can be overridden (e.g. in tests)."""

    def __init__(
        self,
        lead_repository: Optional[DownloadLeadRepository] = None,
        resource_catalog: Optional[ResourceCatalog] = None,
        email_sender: Optional[EmailSender] = None,
        rate_limiter: Optional[RateLimiter] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
        otp_generator: Optional[Callable[[], OtpCode]] = None,
    ) -> None:
        """Initialize container with dependencies."""
        self._settings = settings or default_settings

        # Outbound adapters
        self._lead_repository = lead_repository or create_download_lead_repository()
        self._resource_catalog = resource_catalog or create_resource_catalog()
        self._email_sender = email_sender or create_email_sender()
        self._rate_limiter = rate_limiter or create_rate_limiter()

        # Use cases
        self._url_resolver = DownloadUrlResolver(
            self._resource_catalog,
            download_url_prefix=self._settings.download_url_prefix,
        )
        self._check_returning_user = CheckReturningUser(self._lead_repository)
        self._issue_download_otp = IssueDownloadOtp(
            self._lead_repository,
            self._url_resolver,
            self._email_sender,
            otp_ttl_seconds=self._settings.otp_ttl_seconds,
            firm_name=self._settings.firm_name,
            clock=clock,
            otp_generator=otp_generator,
            logger=log_event,
        )
        self._request_download = RequestDownload(
            self._lead_repository,
            self._resource_catalog,
            self._url_resolver,
            self._check_returning_user,
            self._issue_download_otp,
            clock=clock,
            logger=log_event,
        )
        self._verify_download_otp = VerifyDownloadOtp(
            self._lead_repository,
            self._resource_catalog,
            self._url_resolver,
            clock=clock,
            logger=log_event,
        )
        self._manage_download_leads = ManageDownloadLeads(self._lead_repository, clock=clock)

    @property
    def settings(self) -> Settings:
        """Get settings."""
        return self._settings

    @property
    def rate_limiter(self) -> RateLimiter:
        """Get rate limiter."""
        return self._rate_limiter

    @property
    def check_returning_user(self) -> CheckReturningUser:
        """Get returning-user check use case."""
        return self._check_returning_user

    @property
    def request_download(self) -> RequestDownload:
        """Get intake use case."""
        return self._request_download

    @property
    def issue_download_otp(self) -> IssueDownloadOtp:
        """Get OTP issuance use case."""
        return self._issue_download_otp

    @property
    def verify_download_otp(self) -> VerifyDownloadOtp:
        """Get OTP verification use case."""
        return self._verify_download_otp

    @property
    def manage_download_leads(self) -> ManageDownloadLeads:
        """Get admin lead console use case."""
        return self._manage_download_leads
