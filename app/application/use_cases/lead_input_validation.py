"""Validation of download gate submissions."""

from typing import Optional

from app.application.dtos.lead import DownloadRequest, LeadProfile
from app.application.use_cases.user_messages import UserMessages
from app.domain.errors import ValidationError
from app.domain.value_objects.email_address import EmailAddress
from app.domain.value_objects.resource_ref import ResourceRef


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_email(raw: Optional[str]) -> EmailAddress:
    """
    Parse a submitted email address.

    Args:
        raw: Email as typed by the user

    Returns:
        Normalized email address

    Raises:
        ValidationError: If the address is malformed
    """
    try:
        return EmailAddress(raw or "")
    except ValueError as err:
        raise ValidationError(UserMessages.INVALID_EMAIL) from err


def parse_resource(kind: Optional[str], resource_id: Optional[str]) -> ResourceRef:
    """
    Parse a submitted resource reference.

    Args:
        kind: 'tool' or 'article'
        resource_id: Resource identifier

    Returns:
        Resource reference

    Raises:
        ValidationError: If the kind is unknown or the id is blank
    """
    try:
        return ResourceRef(kind, resource_id)
    except ValueError as err:
        raise ValidationError(UserMessages.INVALID_RESOURCE) from err


def validate_download_request(request: DownloadRequest) -> tuple[LeadProfile, ResourceRef]:
    """
    Validate an intake submission.

    Args:
        request: Intake submission

    Returns:
        Tuple of (normalized profile, resource reference)

    Raises:
        ValidationError: On any malformed field
    """
    name = (request.name or "").strip()
    if not name:
        raise ValidationError(UserMessages.NAME_REQUIRED)
    email = parse_email(request.email)
    resource = parse_resource(request.resource_kind, request.resource_id)

    profile = LeadProfile(
        name=name,
        email=email.value,
        phone=_blank_to_none(request.phone),
        company=_blank_to_none(request.company),
    )
    return profile, resource
