"""Unit tests for admin lead routes and the file download route."""

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from app.adapters.inbound.http import routes
from app.adapters.inbound.http.routes import router
from app.adapters.outbound.download_lead import InMemoryDownloadLeadRepository
from app.adapters.outbound.rate_limit import NoOpRateLimiter
from app.infrastructure.config.settings import Settings
from app.infrastructure.wiring.container import Container
from tests.fakes import FrozenClock, RecordingEmailSender, SequenceOtpGenerator, StaticResourceCatalog

ADMIN_KEY = "s3cret-admin-key"


@pytest.fixture
def client():
    """Create test client."""
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


def _install(monkeypatch, **settings_values) -> Container:
    container = Container(
        lead_repository=InMemoryDownloadLeadRepository(),
        resource_catalog=StaticResourceCatalog(),
        email_sender=RecordingEmailSender(),
        rate_limiter=NoOpRateLimiter(),
        settings=Settings(**settings_values),
        clock=FrozenClock(),
        otp_generator=SequenceOtpGenerator("111111", "222222", "333333"),
    )
    monkeypatch.setattr(routes, "container", container)
    return container


def _seed(client) -> dict[str, str]:
    asha = client.post(
        "/downloads/request",
        json={"name": "Asha", "email": "asha@example.com", "resource": {"kind": "tool", "id": "gst-reconciliation"}},
    ).json()["lead_id"]
    client.post("/downloads/verify-otp", json={"lead_id": asha, "otp": "111111"})
    ravi = client.post(
        "/downloads/request",
        json={
            "name": "Ravi",
            "email": "ravi@example.com",
            "resource": {"kind": "article", "id": "budget-2025-highlights"},
        },
    ).json()["lead_id"]
    return {"asha": asha, "ravi": ravi}


def test_admin_disabled_without_key(client, monkeypatch):
    """Test admin endpoints return 404 when ADMIN_API_KEY is unset."""
    _install(monkeypatch, admin_api_key="")

    response = client.get("/admin/leads", headers={"X-Admin-Key": "anything"})

    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.parametrize("headers", [{}, {"X-Admin-Key": "wrong"}])
def test_admin_rejects_wrong_key(client, monkeypatch, headers):
    """Test missing or wrong admin keys return 401."""
    _install(monkeypatch, admin_api_key=ADMIN_KEY)

    assert client.get("/admin/leads", headers=headers).status_code == status.HTTP_401_UNAUTHORIZED
    assert (
        client.delete("/admin/leads/any", headers=headers).status_code
        == status.HTTP_401_UNAUTHORIZED
    )


def test_admin_list_leads(client, monkeypatch):
    """Test listing with filters and stats."""
    _install(monkeypatch, admin_api_key=ADMIN_KEY)
    ids = _seed(client)
    headers = {"X-Admin-Key": ADMIN_KEY}

    everything = client.get("/admin/leads", headers=headers).json()
    verified = client.get("/admin/leads", params={"verified": "true"}, headers=headers).json()
    articles = client.get("/admin/leads", params={"resource_kind": "article"}, headers=headers).json()

    assert everything["stats"] == {"total": 2, "verified": 1, "pending": 1}
    assert {lead["id"] for lead in everything["leads"]} == {ids["asha"], ids["ravi"]}
    assert all("otp_code" not in lead for lead in everything["leads"])
    assert [lead["id"] for lead in verified["leads"]] == [ids["asha"]]
    assert [lead["id"] for lead in articles["leads"]] == [ids["ravi"]]
    assert articles["leads"][0]["resource_kind"] == "article"


def test_admin_list_rejects_unknown_kind(client, monkeypatch):
    """Test an invalid kind filter returns 400."""
    _install(monkeypatch, admin_api_key=ADMIN_KEY)

    response = client.get(
        "/admin/leads", params={"resource_kind": "video"}, headers={"X-Admin-Key": ADMIN_KEY}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_admin_delete_lead(client, monkeypatch):
    """Test deleting a lead and deleting it again."""
    _install(monkeypatch, admin_api_key=ADMIN_KEY)
    ids = _seed(client)
    headers = {"X-Admin-Key": ADMIN_KEY}

    deleted = client.delete(f"/admin/leads/{ids['ravi']}", headers=headers)
    again = client.delete(f"/admin/leads/{ids['ravi']}", headers=headers)

    assert deleted.status_code == status.HTTP_200_OK
    assert deleted.json() == {"deleted": ids["ravi"]}
    assert again.status_code == status.HTTP_404_NOT_FOUND


@pytest.fixture
def uploads(tmp_path):
    """Create an uploads directory with downloadable files."""
    downloads = tmp_path / "downloads"
    (downloads / "tools").mkdir(parents=True)
    (downloads / "gst-reconciliation.zip").write_bytes(b"PK\x03\x04zip-bytes")
    (downloads / "tools" / "itr.py").write_text("print('itr')\n", encoding="utf-8")
    (downloads / "notes.txt").write_text("notes", encoding="utf-8")
    (tmp_path / "secret.env").write_text("SMTP_PASSWORD=x", encoding="utf-8")
    return tmp_path


def test_download_file_served_as_attachment(client, monkeypatch, uploads):
    """Test files are streamed with content type and no-cache headers."""
    _install(monkeypatch, uploads_path=str(uploads))

    response = client.get("/download/gst-reconciliation.zip")

    assert response.status_code == status.HTTP_200_OK
    assert response.content == b"PK\x03\x04zip-bytes"
    assert response.headers["content-type"] == "application/zip"
    assert response.headers["content-disposition"].startswith("attachment")
    assert "gst-reconciliation.zip" in response.headers["content-disposition"]
    assert "no-cache" in response.headers["cache-control"]


def test_download_nested_file_and_fallback_content_type(client, monkeypatch, uploads):
    """Test nested paths and the octet-stream fallback."""
    _install(monkeypatch, uploads_path=str(uploads))

    python_file = client.get("/download/tools/itr.py")
    text_file = client.get("/download/notes.txt")

    assert python_file.status_code == status.HTTP_200_OK
    assert python_file.headers["content-type"].startswith("text/x-python")
    assert text_file.headers["content-type"] == "application/octet-stream"


@pytest.mark.parametrize("path", ["/download/missing.zip", "/download/%2e%2e/secret.env", "/download/tools"])
def test_download_missing_or_outside_is_404(client, monkeypatch, uploads, path):
    """Test missing files, directories and traversal attempts return 404."""
    _install(monkeypatch, uploads_path=str(uploads))

    response = client.get(path)

    assert response.status_code == status.HTTP_404_NOT_FOUND
