"""Verify download OTP use case."""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from app.application.dtos.lead import VerifyOtpRequest, VerifyOtpResult
from app.application.ports.download_lead_repository import DownloadLeadRepository
from app.application.ports.resource_catalog import ResourceCatalog
from app.application.use_cases.resolve_download_url import DownloadUrlResolver
from app.application.use_cases.user_messages import UserMessages
from app.domain.errors import ExpiredError, InvalidCodeError, NotFoundError, ValidationError


class VerifyDownloadOtp:
    """
    Verification gate: PENDING_OTP -> VERIFIED, or PENDING_OTP -> EXPIRED.

    A wrong code leaves the lead untouched; the same code stays valid until it
    expires. There is no per-lead attempt counter.
    """

    def __init__(
        self,
        lead_repository: DownloadLeadRepository,
        resource_catalog: ResourceCatalog,
        url_resolver: DownloadUrlResolver,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize use case.

        Args:
            lead_repository: Download lead repository
            resource_catalog: Tool/article catalog (download counters)
            url_resolver: Resource URL resolution
            clock: Returns the current UTC time
            logger: Optional logger function (request_id, component, **kwargs)
        """
        self._lead_repository = lead_repository
        self._resource_catalog = resource_catalog
        self._url_resolver = url_resolver
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._logger = logger

    def _log(self, request_id: str, component: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(request_id, component, **kwargs)

    async def execute(
        self, request: VerifyOtpRequest, request_id: Optional[str] = None
    ) -> VerifyOtpResult:
        """
        Verify a submitted code and release the download.

        Args:
            request: Lead id and submitted code
            request_id: Optional request identifier for logging

        Returns:
            Download URL and resource name

        Raises:
            ValidationError: If the lead id or code is blank
            NotFoundError: If the lead or its resource does not exist
            ExpiredError: If no code is outstanding or it has expired
            InvalidCodeError: If the code does not match
        """
        request_id = request_id or "unknown"
        lead_id = (request.lead_id or "").strip()
        submitted = (request.otp or "").strip()
        if not lead_id or not submitted:
            raise ValidationError(UserMessages.OTP_REQUIRED)

        lead = await self._lead_repository.get(lead_id)
        if lead is None:
            self._log(request_id, "verification", lead_id=lead_id, verification_outcome="not_found")
            raise NotFoundError(UserMessages.LEAD_NOT_FOUND)

        if lead.verified:
            download = await self._url_resolver.resolve(lead)
            self._log(
                request_id, "verification", lead_id=lead.id, verification_outcome="already_verified"
            )
            return VerifyOtpResult(
                lead_id=lead.id,
                download_url=download.download_url,
                resource_name=download.resource_name,
                already_verified=True,
            )

        now = self._clock()
        if lead.is_otp_expired(now):
            self._log(request_id, "verification", lead_id=lead.id, verification_outcome="expired")
            raise ExpiredError(UserMessages.OTP_EXPIRED)

        if not lead.matches_otp(submitted, now):
            self._log(request_id, "verification", lead_id=lead.id, verification_outcome="invalid_code")
            raise InvalidCodeError(UserMessages.OTP_INVALID)

        first_release = lead.mark_verified(now)
        lead = await self._lead_repository.save(lead)
        if first_release:
            await self._resource_catalog.record_download(lead.resource)
        self._log(request_id, "verification", lead_id=lead.id, verification_outcome="verified")

        download = await self._url_resolver.resolve(lead)
        return VerifyOtpResult(
            lead_id=lead.id,
            download_url=download.download_url,
            resource_name=download.resource_name,
        )
