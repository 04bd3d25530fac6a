"""HTTP routes."""

import logging
import secrets
from pathlib import Path
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Header, HTTPException, Request, status
from fastapi.responses import FileResponse, JSONResponse

from app.adapters.inbound.http.schemas import (
    CheckEmailBody,
    DeleteLeadResponse,
    DownloadRequestBody,
    DownloadRequestResponse,
    ResendOtpBody,
    ResendOtpResponse,
    VerifyOtpBody,
)
from app.application.dtos.lead import (
    DownloadRequest,
    EmailCheckResult,
    LeadListResult,
    VerifyOtpRequest,
    VerifyOtpResult,
)
from app.application.ports.rate_limiter import RateLimiterUnavailableError
from app.application.use_cases.user_messages import UserMessages
from app.domain.errors import (
    DeliveryError,
    DownloadGateError,
    NotFoundError,
    NotVerifiedError,
)
from app.infrastructure.logging.logger import log_event, log_rate_limited
from app.infrastructure.wiring.container import Container

router = APIRouter()

# Wired with adapters selected from settings
container = Container()

DOWNLOAD_CONTENT_TYPES = {
    ".zip": "application/zip",
    ".rar": "application/x-rar-compressed",
    ".7z": "application/x-7z-compressed",
    ".py": "text/x-python",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xls": "application/vnd.ms-excel",
    ".exe": "application/x-msdownload",
    ".msi": "application/x-msi",
    ".pdf": "application/pdf",
}

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _error_status(err: DownloadGateError) -> int:
    if isinstance(err, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(err, NotVerifiedError):
        return status.HTTP_403_FORBIDDEN
    # ValidationError, InvalidCodeError and ExpiredError
    return status.HTTP_400_BAD_REQUEST


def _http_error(err: DownloadGateError) -> HTTPException:
    """
    Translate a domain error to an HTTP error.

    Args:
        err: Domain error raised by a use case

    Returns:
        HTTPException with an {error, message} detail
    """
    return HTTPException(
        status_code=_error_status(err),
        detail={"error": err.code, "message": err.message},
    )


def _delivery_delayed(err: DeliveryError) -> JSONResponse:
    """Accepted response for a lead whose OTP was stored but not emailed."""
    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED,
        content={
            "lead_id": err.lead_id,
            "otp_sent": False,
            "email_delayed": True,
            "message": err.message,
        },
    )


def _client_ip(request: Request) -> str:
    """
    Resolve the client IP behind proxies.

    Args:
        request: Incoming request

    Returns:
        First X-Forwarded-For entry, else X-Real-IP, else the socket peer
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client is not None:
        return request.client.host
    return "unknown"


async def _enforce_rate_limit(
    request: Request, scope: str, max_requests: int, request_id: str
) -> None:
    """
    Count the request against the client's budget for a scope.

    The request is let through when the limiter backend is unreachable.

    Raises:
        HTTPException: 429 if the budget is exhausted
    """
    client_ip = _client_ip(request)
    try:
        result = await container.rate_limiter.hit(
            f"{scope}:{client_ip}",
            max_requests,
            container.settings.rate_limit_window_seconds,
        )
    except RateLimiterUnavailableError as e:
        log_event(
            request_id,
            "rate_limit",
            logging.ERROR,
            rate_limit_scope=scope,
            client_ip=client_ip,
            error=str(e),
        )
        return
    if not result.allowed:
        log_rate_limited(request_id, scope, client_ip, result.reset_in_seconds)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={"error": "rate_limited", "message": UserMessages.TOO_MANY_REQUESTS},
            headers={"Retry-After": str(result.reset_in_seconds)},
        )


def _require_admin(admin_key: Optional[str]) -> None:
    """
    Check the admin key header.

    Raises:
        HTTPException: 404 if admin endpoints are disabled, 401 on a wrong key
    """
    expected = container.settings.admin_api_key
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Admin endpoints are disabled",
        )
    if not admin_key or not secrets.compare_digest(admin_key.encode("utf-8"), expected.encode("utf-8")):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin key",
        )


def _downloads_dir() -> Path:
    uploads_path = container.settings.uploads_path
    if uploads_path:
        return Path(uploads_path) / "downloads"
    return Path.cwd() / "public" / "downloads"


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


@router.post(
    "/downloads/check-email",
    status_code=status.HTTP_200_OK,
    response_model=EmailCheckResult,
)
async def check_email(body: CheckEmailBody) -> EmailCheckResult:
    """
    Tell the intake form whether an email belongs to a returning user.

    Args:
        body: Email to look up

    Returns:
        Recognition result with the stored profile for pre-filling the form
    """
    try:
        return await container.check_returning_user.execute(body.email)
    except DownloadGateError as err:
        raise _http_error(err) from err


@router.post(
    "/downloads/request",
    status_code=status.HTTP_200_OK,
    response_model=DownloadRequestResponse,
)
async def request_download(request: Request, body: DownloadRequestBody):
    """
    Submit the intake form for a gated tool or article.

    Returning users get the download URL immediately; everyone else is emailed a code.

    Args:
        request: FastAPI request object (for the client IP)
        body: Intake form payload

    Returns:
        Intake result, or 202 with email_delayed when the OTP email failed
    """
    request_id = str(uuid4())
    await _enforce_rate_limit(
        request,
        "download-request",
        container.settings.download_request_rate_limit,
        request_id,
    )

    resource = body.resource
    log_event(
        request_id,
        "http",
        endpoint="downloads/request",
        resource_kind=resource.kind if resource else None,
        resource_id=resource.id if resource else None,
    )

    download_request = DownloadRequest(
        name=body.name,
        email=body.email,
        phone=body.phone,
        company=body.company,
        resource_kind=resource.kind if resource else "",
        resource_id=resource.id if resource else "",
        skip_otp=body.skip_otp,
    )
    try:
        result = await container.request_download.execute(download_request, request_id=request_id)
    except DeliveryError as err:
        return _delivery_delayed(err)
    except DownloadGateError as err:
        log_event(request_id, "http", endpoint="downloads/request", error=err.code)
        raise _http_error(err) from err

    return DownloadRequestResponse(
        recognized=result.recognized,
        lead_id=result.lead_id,
        otp_sent=result.otp_sent,
        resource_name=result.resource_name,
        download_url=result.download_url,
        message=UserMessages.OTP_SENT if result.otp_sent else UserMessages.WELCOME_BACK,
    )


@router.post(
    "/downloads/verify-otp",
    status_code=status.HTTP_200_OK,
    response_model=VerifyOtpResult,
)
async def verify_otp(request: Request, body: VerifyOtpBody) -> VerifyOtpResult:
    """
    Verify an emailed code and release the download URL.

    Args:
        request: FastAPI request object (for the client IP)
        body: Lead id and code

    Returns:
        Download URL and resource name
    """
    request_id = str(uuid4())
    await _enforce_rate_limit(
        request,
        "otp-verify",
        container.settings.otp_verify_rate_limit,
        request_id,
    )
    log_event(request_id, "http", endpoint="downloads/verify-otp", lead_id=body.lead_id)

    try:
        return await container.verify_download_otp.execute(
            VerifyOtpRequest(lead_id=body.lead_id, otp=body.otp),
            request_id=request_id,
        )
    except DownloadGateError as err:
        raise _http_error(err) from err


@router.post(
    "/downloads/resend-otp",
    status_code=status.HTTP_200_OK,
    response_model=ResendOtpResponse,
)
async def resend_otp(request: Request, body: ResendOtpBody):
    """
    Issue a fresh code for a pending lead, invalidating the previous one.

    Args:
        request: FastAPI request object (for the client IP)
        body: Lead id

    Returns:
        Resend result, or 202 with email_delayed when the OTP email failed
    """
    request_id = str(uuid4())
    await _enforce_rate_limit(
        request,
        "download-request",
        container.settings.download_request_rate_limit,
        request_id,
    )
    log_event(request_id, "http", endpoint="downloads/resend-otp", lead_id=body.lead_id)

    try:
        result = await container.issue_download_otp.resend(body.lead_id, request_id=request_id)
    except DeliveryError as err:
        return _delivery_delayed(err)
    except DownloadGateError as err:
        raise _http_error(err) from err

    return ResendOtpResponse(
        lead_id=result.lead_id,
        otp_sent=result.otp_sent,
        message=UserMessages.OTP_RESENT if result.otp_sent else UserMessages.ALREADY_VERIFIED,
    )


@router.get("/download/{file_path:path}")
async def download_file(file_path: str) -> FileResponse:
    """
    Serve a downloadable file as an attachment.

    Args:
        file_path: Path relative to the downloads directory

    Returns:
        File response with a content type from the extension

    Raises:
        HTTPException: 404 if the file is missing or outside the downloads directory
    """
    base_dir = _downloads_dir().resolve()
    target = (base_dir / file_path).resolve()
    if not target.is_relative_to(base_dir) or not target.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    media_type = DOWNLOAD_CONTENT_TYPES.get(target.suffix.lower(), "application/octet-stream")
    return FileResponse(
        target,
        media_type=media_type,
        filename=target.name,
        headers=NO_CACHE_HEADERS,
    )


@router.get("/admin/leads", status_code=status.HTTP_200_OK, response_model=LeadListResult)
async def list_leads(
    resource_kind: Optional[str] = None,
    resource_id: Optional[str] = None,
    verified: Optional[bool] = None,
    x_admin_key: Optional[str] = Header(None),
) -> LeadListResult:
    """
    List download leads, newest first (only enabled if ADMIN_API_KEY is set).

    Args:
        resource_kind: Only leads for 'tool' or 'article'
        resource_id: Only leads for this resource id
        verified: Only leads with this verified flag
        x_admin_key: Admin key header

    Returns:
        Lead summaries and stats
    """
    _require_admin(x_admin_key)
    try:
        return await container.manage_download_leads.list_leads(
            resource_kind=resource_kind,
            resource_id=resource_id,
            verified=verified,
        )
    except DownloadGateError as err:
        raise _http_error(err) from err


@router.delete(
    "/admin/leads/{lead_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteLeadResponse,
)
async def delete_lead(lead_id: str, x_admin_key: Optional[str] = Header(None)) -> DeleteLeadResponse:
    """
    Delete a download lead (only enabled if ADMIN_API_KEY is set).

    Args:
        lead_id: Lead identifier
        x_admin_key: Admin key header

    Returns:
        Identifier of the deleted lead
    """
    _require_admin(x_admin_key)
    try:
        await container.manage_download_leads.delete_lead(lead_id)
    except DownloadGateError as err:
        raise _http_error(err) from err
    return DeleteLeadResponse(deleted=lead_id)
