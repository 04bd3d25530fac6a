"""Request download use case (intake)."""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from app.application.dtos.lead import DownloadRequest, DownloadRequestResult, LeadProfile
from app.application.dtos.resource import DownloadableResource
from app.application.ports.download_lead_repository import DownloadLeadRepository
from app.application.ports.resource_catalog import ResourceCatalog
from app.application.use_cases.check_returning_user import CheckReturningUser
from app.application.use_cases.issue_download_otp import IssueDownloadOtp
from app.application.use_cases.lead_input_validation import validate_download_request
from app.application.use_cases.resolve_download_url import DownloadUrlResolver
from app.domain.entities.download_lead import DownloadLead
from app.domain.value_objects.email_address import EmailAddress


class RequestDownload:
    """
    Intake for a gated download.

    Emails with a prior verified lead for any resource skip the OTP and get the
    download immediately; everyone else is sent a code.
    """

    def __init__(
        self,
        lead_repository: DownloadLeadRepository,
        resource_catalog: ResourceCatalog,
        url_resolver: DownloadUrlResolver,
        check_returning_user: CheckReturningUser,
        issue_download_otp: IssueDownloadOtp,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize use case.

        Args:
            lead_repository: Download lead repository
            resource_catalog: Tool/article catalog (download counters)
            url_resolver: Resource lookup and URL resolution
            check_returning_user: Returning-user lookup
            issue_download_otp: OTP issuer
            clock: Returns the current UTC time
            logger: Optional logger function (request_id, component, **kwargs)
        """
        self._lead_repository = lead_repository
        self._resource_catalog = resource_catalog
        self._url_resolver = url_resolver
        self._check_returning_user = check_returning_user
        self._issue_download_otp = issue_download_otp
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._logger = logger

    def _log(self, request_id: str, component: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(request_id, component, **kwargs)

    async def execute(
        self, request: DownloadRequest, request_id: Optional[str] = None
    ) -> DownloadRequestResult:
        """
        Handle an intake submission.

        Args:
            request: Intake submission
            request_id: Optional request identifier for logging

        Returns:
            Lead id, plus the download URL when the OTP was skipped

        Raises:
            ValidationError: If the submission is malformed
            NotFoundError: If the resource is missing or inactive
            DeliveryError: If the OTP email could not be sent
        """
        request_id = request_id or "unknown"
        profile, ref = validate_download_request(request)
        resource = await self._url_resolver.require_resource(ref)

        check = await self._check_returning_user.lookup(EmailAddress(profile.email))
        shortcut = check.recognized and request.skip_otp
        self._log(
            request_id,
            "intake",
            resource=str(ref),
            recognized=check.recognized,
            shortcut=shortcut,
        )

        if shortcut:
            return await self._release_to_returning_user(profile, resource)

        lead_id = await self._issue_download_otp.issue(profile, resource, request_id=request_id)
        return DownloadRequestResult(
            recognized=check.recognized,
            lead_id=lead_id,
            otp_sent=True,
            resource_name=resource.name,
        )

    async def _release_to_returning_user(
        self, profile: LeadProfile, resource: DownloadableResource
    ) -> DownloadRequestResult:
        now = self._clock()
        lead = await self._lead_repository.find_by_email_and_resource(profile.email, resource.ref)
        if lead is None:
            lead = DownloadLead(
                name=profile.name,
                email=profile.email,
                resource=resource.ref,
                phone=profile.phone,
                company=profile.company,
                created_at=now,
                updated_at=now,
            )
        else:
            lead.update_profile(profile.name, profile.phone, profile.company)

        first_release = lead.mark_verified(now)
        lead = await self._lead_repository.save(lead)
        if first_release:
            await self._resource_catalog.record_download(resource.ref)

        download = await self._url_resolver.resolve(lead, resource)
        return DownloadRequestResult(
            recognized=True,
            lead_id=lead.id,
            otp_sent=False,
            resource_name=download.resource_name,
            download_url=download.download_url,
        )
