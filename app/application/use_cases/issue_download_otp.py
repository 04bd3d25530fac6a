"""Issue download OTP use case."""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from app.application.dtos.lead import LeadProfile, ResendOtpResult
from app.application.dtos.resource import DownloadableResource
from app.application.ports.download_lead_repository import DownloadLeadRepository
from app.application.ports.email_sender import EmailSender, EmailSendError
from app.application.use_cases.otp_email_templates import render_download_otp_email
from app.application.use_cases.resolve_download_url import DownloadUrlResolver
from app.application.use_cases.user_messages import UserMessages
from app.domain.entities.download_lead import DownloadLead
from app.domain.errors import DeliveryError, NotFoundError
from app.domain.value_objects.otp_code import OtpCode


class IssueDownloadOtp:
    """Generates, persists and emails one-time codes for gated downloads."""

    def __init__(
        self,
        lead_repository: DownloadLeadRepository,
        url_resolver: DownloadUrlResolver,
        email_sender: EmailSender,
        otp_ttl_seconds: int = 600,
        firm_name: str = "",
        clock: Optional[Callable[[], datetime]] = None,
        otp_generator: Optional[Callable[[], OtpCode]] = None,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize use case.

        Args:
            lead_repository: Download lead repository
            url_resolver: Resolver used to look up resources
            email_sender: Outbound email transport
            otp_ttl_seconds: Code lifetime
            firm_name: Signature used in the OTP email
            clock: Returns the current UTC time
            otp_generator: Produces new codes
            logger: Optional logger function (request_id, component, **kwargs)
        """
        self._lead_repository = lead_repository
        self._url_resolver = url_resolver
        self._email_sender = email_sender
        self._otp_ttl = timedelta(seconds=otp_ttl_seconds)
        self._firm_name = firm_name
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._otp_generator = otp_generator or OtpCode.generate
        self._logger = logger

    def _log(self, request_id: str, component: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(request_id, component, **kwargs)

    async def issue(
        self,
        profile: LeadProfile,
        resource: DownloadableResource,
        request_id: Optional[str] = None,
    ) -> str:
        """
        Start an OTP cycle for an (email, resource) pair.

        Reuses the pair's lead if one exists, so at most one code per pair is valid.

        Args:
            profile: Validated contact profile
            resource: Active resource being requested
            request_id: Optional request identifier for logging

        Returns:
            Lead id to submit with the code

        Raises:
            DeliveryError: If the email could not be sent (the code stays valid)
        """
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

        return await self._start_cycle(lead, resource, request_id or "unknown", resend=False)

    async def resend(self, lead_id: str, request_id: Optional[str] = None) -> ResendOtpResult:
        """
        Replace the outstanding code of a lead and email it again.

        Verified leads need no code; they are returned untouched.

        Args:
            lead_id: Lead identifier
            request_id: Optional request identifier for logging

        Returns:
            Lead id and whether a code was sent

        Raises:
            NotFoundError: If the lead or its resource does not exist
            DeliveryError: If the email could not be sent (the new code stays valid)
        """
        lead = await self._lead_repository.get(lead_id)
        if lead is None:
            raise NotFoundError(UserMessages.LEAD_NOT_FOUND)
        if lead.verified:
            return ResendOtpResult(lead_id=lead.id, otp_sent=False)

        resource = await self._url_resolver.require_resource(lead.resource)
        issued_id = await self._start_cycle(lead, resource, request_id or "unknown", resend=True)
        return ResendOtpResult(lead_id=issued_id, otp_sent=True)

    async def _start_cycle(
        self,
        lead: DownloadLead,
        resource: DownloadableResource,
        request_id: str,
        resend: bool,
    ) -> str:
        now = self._clock()
        code = self._otp_generator()
        lead.start_otp_cycle(code, now + self._otp_ttl, now)
        lead = await self._lead_repository.save(lead)
        self._log(
            request_id,
            "otp",
            lead_id=lead.id,
            resource=str(lead.resource),
            otp_resend=resend,
        )

        subject, html = render_download_otp_email(
            name=lead.name,
            resource_name=resource.name,
            otp=code.value,
            ttl_minutes=int(self._otp_ttl.total_seconds() // 60),
            firm_name=self._firm_name,
        )
        try:
            await self._email_sender.send(lead.email, subject, html)
        except EmailSendError as err:
            self._log(request_id, "email", lead_id=lead.id, email_delivered=False, email_error=str(err))
            raise DeliveryError(UserMessages.EMAIL_DELAYED, lead_id=lead.id) from err

        self._log(request_id, "email", lead_id=lead.id, email_delivered=True)
        return lead.id
