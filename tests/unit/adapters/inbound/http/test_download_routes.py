"""Unit tests for download gate HTTP routes."""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from app.adapters.inbound.http import routes
from app.adapters.inbound.http.routes import router
from app.adapters.outbound.download_lead import InMemoryDownloadLeadRepository
from app.adapters.outbound.rate_limit import InMemoryRateLimiter
from app.application.ports.rate_limiter import RateLimiterUnavailableError
from app.infrastructure.config.settings import Settings
from app.infrastructure.wiring.container import Container
from tests.fakes import FrozenClock, RecordingEmailSender, SequenceOtpGenerator, StaticResourceCatalog


class Gate:
    """Container plus the test doubles it was built with."""

    def __init__(self, monkeypatch, *codes: str, **settings_overrides) -> None:
        """Build a container and install it in the routes module."""
        values = {"otp_verify_rate_limit": 100, "download_request_rate_limit": 100}
        values.update(settings_overrides)
        self.settings = Settings(**values)
        self.clock = FrozenClock()
        self.email_sender = RecordingEmailSender()
        self.lead_repository = InMemoryDownloadLeadRepository()
        self.container = Container(
            lead_repository=self.lead_repository,
            resource_catalog=StaticResourceCatalog(),
            email_sender=self.email_sender,
            rate_limiter=InMemoryRateLimiter(),
            settings=self.settings,
            clock=self.clock,
            otp_generator=SequenceOtpGenerator(*codes),
        )
        monkeypatch.setattr(routes, "container", self.container)


@pytest.fixture
def app():
    """Create FastAPI app with router."""
    app = FastAPI()
    app.include_router(router)
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


def _intake(client, email="asha@example.com", kind="tool", resource_id="gst-reconciliation", **extra):
    body = {
        "name": "Asha Patel",
        "email": email,
        "phone": "+919876543210",
        "resource": {"kind": kind, "id": resource_id},
    }
    body.update(extra)
    return client.post("/downloads/request", json=body)


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_request_then_verify(client, monkeypatch):
    """Test the OTP flow for a new user."""
    gate = Gate(monkeypatch, "482913")

    response = _intake(client)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["recognized"] is False
    assert data["otp_sent"] is True
    assert data["download_url"] is None
    assert data["email_delayed"] is False
    assert data["resource_name"] == "GST Reconciliation Utility"
    assert gate.email_sender.last["to"] == "asha@example.com"

    response = client.post(
        "/downloads/verify-otp", json={"lead_id": data["lead_id"], "otp": "482913"}
    )
    assert response.status_code == status.HTTP_200_OK
    verified = response.json()
    assert verified["download_url"] == "/download/gst-reconciliation.zip"
    assert verified["resource_name"] == "GST Reconciliation Utility"
    assert verified["already_verified"] is False


def test_returning_user_shortcut(client, monkeypatch):
    """Test check-email and the OTP-free download for a verified email."""
    Gate(monkeypatch, "482913")
    lead_id = _intake(client).json()["lead_id"]
    client.post("/downloads/verify-otp", json={"lead_id": lead_id, "otp": "482913"})

    check = client.post("/downloads/check-email", json={"email": "ASHA@example.com"})
    assert check.status_code == status.HTTP_200_OK
    assert check.json() == {
        "recognized": True,
        "name": "Asha Patel",
        "phone": "+919876543210",
        "company": None,
    }

    response = _intake(client, kind="article", resource_id="budget-2025-highlights")
    data = response.json()
    assert data["recognized"] is True
    assert data["otp_sent"] is False
    assert data["download_url"] == "/download/budget-2025-highlights.pdf"


def test_check_email_rejects_malformed_email(client, monkeypatch):
    """Test check-email validation error body."""
    Gate(monkeypatch)

    response = client.post("/downloads/check-email", json={"email": "asha@"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["error"] == "validation_error"


@pytest.mark.parametrize(
    "body",
    [
        {"name": "", "email": "asha@example.com", "resource": {"kind": "tool", "id": "gst-reconciliation"}},
        {"name": "Asha", "email": "asha", "resource": {"kind": "tool", "id": "gst-reconciliation"}},
        {"name": "Asha", "email": "asha@example.com"},
        {"name": "Asha", "email": "asha@example.com", "resource": {"kind": "video", "id": "x"}},
    ],
)
def test_request_validation_errors(client, monkeypatch, body):
    """Test malformed intake submissions return 400 and persist nothing."""
    gate = Gate(monkeypatch)

    response = client.post("/downloads/request", json=body)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["error"] == "validation_error"
    assert gate.lead_repository._storage == {}


def test_request_unknown_resource_is_404(client, monkeypatch):
    """Test missing resources return 404."""
    Gate(monkeypatch)

    response = _intake(client, resource_id="does-not-exist")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"]["error"] == "not_found"


def test_request_email_failure_returns_202(client, monkeypatch):
    """Test an undeliverable OTP email returns the lead id with email_delayed."""
    gate = Gate(monkeypatch, "482913")
    gate.email_sender.fail = True

    response = _intake(client)

    assert response.status_code == status.HTTP_202_ACCEPTED
    data = response.json()
    assert data["email_delayed"] is True
    assert data["otp_sent"] is False
    assert data["lead_id"]

    verify = client.post("/downloads/verify-otp", json={"lead_id": data["lead_id"], "otp": "482913"})
    assert verify.status_code == status.HTTP_200_OK


def test_verify_invalid_and_expired_codes(client, monkeypatch):
    """Test wrong and expired codes both return 400 with distinct codes."""
    gate = Gate(monkeypatch, "482913")
    lead_id = _intake(client).json()["lead_id"]

    wrong = client.post("/downloads/verify-otp", json={"lead_id": lead_id, "otp": "000000"})
    assert wrong.status_code == status.HTTP_400_BAD_REQUEST
    assert wrong.json()["detail"]["error"] == "invalid_code"

    gate.clock.advance(601)
    expired = client.post("/downloads/verify-otp", json={"lead_id": lead_id, "otp": "482913"})
    assert expired.status_code == status.HTTP_400_BAD_REQUEST
    assert expired.json()["detail"]["error"] == "expired"


def test_verify_unknown_lead_is_404(client, monkeypatch):
    """Test verifying a missing lead returns 404."""
    Gate(monkeypatch)

    response = client.post("/downloads/verify-otp", json={"lead_id": "missing", "otp": "123456"})

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_resend_otp(client, monkeypatch):
    """Test resend replaces the code."""
    gate = Gate(monkeypatch, "111111", "222222")
    lead_id = _intake(client).json()["lead_id"]

    response = client.post("/downloads/resend-otp", json={"lead_id": lead_id})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["otp_sent"] is True
    assert "222222" in gate.email_sender.last["html"]
    old = client.post("/downloads/verify-otp", json={"lead_id": lead_id, "otp": "111111"})
    assert old.json()["detail"]["error"] == "invalid_code"


def test_resend_unknown_lead_is_404(client, monkeypatch):
    """Test resend for a missing lead returns 404."""
    Gate(monkeypatch)

    response = client.post("/downloads/resend-otp", json={"lead_id": "missing"})

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_verify_rate_limited_per_ip(client, monkeypatch):
    """Test the verify budget is enforced per forwarded client IP."""
    Gate(monkeypatch, otp_verify_rate_limit=2)
    headers = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}
    body = {"lead_id": "missing", "otp": "123456"}

    first = client.post("/downloads/verify-otp", json=body, headers=headers)
    second = client.post("/downloads/verify-otp", json=body, headers=headers)
    third = client.post("/downloads/verify-otp", json=body, headers=headers)
    other_ip = client.post(
        "/downloads/verify-otp", json=body, headers={"X-Forwarded-For": "198.51.100.1"}
    )

    assert first.status_code == status.HTTP_404_NOT_FOUND
    assert second.status_code == status.HTTP_404_NOT_FOUND
    assert third.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert third.json()["detail"]["error"] == "rate_limited"
    assert "retry-after" in third.headers
    assert other_ip.status_code == status.HTTP_404_NOT_FOUND


def test_request_rate_limited_by_real_ip_header(client, monkeypatch):
    """Test X-Real-IP is used when no forwarded header is present."""
    Gate(monkeypatch, download_request_rate_limit=1)
    headers = {"X-Real-IP": "203.0.113.9"}

    first = client.post("/downloads/request", json={}, headers=headers)
    second = client.post("/downloads/request", json={}, headers=headers)

    assert first.status_code == status.HTTP_400_BAD_REQUEST
    assert second.status_code == status.HTTP_429_TOO_MANY_REQUESTS


def test_unreachable_rate_limiter_lets_requests_through(client, monkeypatch):
    """Test gated endpoints keep working when the limiter backend is down."""
    gate = Gate(monkeypatch, "482913", download_request_rate_limit=1)
    gate.container._rate_limiter = AsyncMock()
    gate.container._rate_limiter.hit.side_effect = RateLimiterUnavailableError("Connection refused")

    first = _intake(client)
    second = _intake(client, resource_id="tds-calculator")
    verify = client.post(
        "/downloads/verify-otp", json={"lead_id": first.json()["lead_id"], "otp": "482913"}
    )

    assert first.status_code == status.HTTP_200_OK
    assert second.status_code == status.HTTP_200_OK
    assert verify.status_code == status.HTTP_200_OK
