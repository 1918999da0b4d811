"""Tests for HTTP routes using FastAPI TestClient against an in-memory database."""

from contextlib import asynccontextmanager
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from internship_tracker.audit.models import AuditLog
from internship_tracker.database.base import get_db
from internship_tracker.rate_limit import limiter

API = "/api/v1"


@pytest.fixture
def app_client(db_session):
    """TestClient with patched lifespan (no migrations) sharing the test session."""
    from internship_tracker.main import create_app

    @asynccontextmanager
    async def _test_lifespan(app):
        yield

    def _test_db():
        yield db_session

    with (
        patch("internship_tracker.main.lifespan", _test_lifespan),
        patch("internship_tracker.main.settings") as mock_settings,
        patch.object(limiter, "enabled", False),
    ):
        mock_settings.trusted_hosts_list = ["*"]
        mock_settings.cors_origins_list = ["*"]
        mock_settings.cors_allow_credentials = True
        mock_settings.secret_key = "test-secret"
        app = create_app()
        app.dependency_overrides[get_db] = _test_db
        with TestClient(app, raise_server_exceptions=False) as client:
            yield client


def _register(client, email="student@example.com", password="password123"):
    client.cookies.clear()
    resp = client.post(f"{API}/auth/register", json={"email": email, "password": password})
    assert resp.status_code == 201
    return resp.json()["user"]


def _upload(client, user, name="cv"):
    resp = client.post(
        f"{API}/resumes",
        json={
            "file_url": f"{user['id']}/{name}.pdf",
            "resume_name": name,
            "content_type": "application/pdf",
            "file_size": 2048,
        },
    )
    assert resp.status_code == 201
    return resp.json()["resume"]


class TestHealthEndpoint:
    def test_health_returns_ok(self, app_client):
        response = app_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["db"] == "ok"
        assert "version" in data
        assert "uptime_seconds" in data


class TestErrors:
    def test_unknown_path_returns_json_404(self, app_client):
        response = app_client.get("/nonexistent-page-that-does-not-exist")
        assert response.status_code == 404
        assert "error" in response.json()

    def test_protected_route_requires_auth(self, app_client):
        response = app_client.get(f"{API}/resumes")
        assert response.status_code == 401
        assert response.json() == {"error": "Not authenticated"}

    def test_security_headers(self, app_client):
        response = app_client.get("/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestAuthRoutes:
    def test_register_and_me(self, app_client):
        user = _register(app_client)
        response = app_client.get(f"{API}/auth/me")
        assert response.status_code == 200
        assert response.json()["user"]["id"] == user["id"]

    def test_duplicate_registration(self, app_client):
        _register(app_client)
        response = app_client.post(
            f"{API}/auth/register", json={"email": "student@example.com", "password": "password123"}
        )
        assert response.status_code == 409

    def test_short_password_rejected(self, app_client):
        response = app_client.post(f"{API}/auth/register", json={"email": "a@example.com", "password": "short"})
        assert response.status_code == 422

    def test_login_wrong_credentials(self, app_client):
        _register(app_client)
        app_client.cookies.clear()
        response = app_client.post(f"{API}/auth/login", json={"email": "student@example.com", "password": "nope1234"})
        assert response.status_code == 401

    def test_login_and_logout(self, app_client):
        _register(app_client)
        app_client.post(f"{API}/auth/logout")
        assert app_client.get(f"{API}/auth/me").status_code == 401

        response = app_client.post(
            f"{API}/auth/login", json={"email": "student@example.com", "password": "password123"}
        )
        assert response.status_code == 200
        assert app_client.get(f"{API}/auth/me").status_code == 200


class TestResumeRoutes:
    def test_single_active_after_activation(self, app_client):
        user = _register(app_client)
        first = _upload(app_client, user, "first")
        _upload(app_client, user, "second")

        response = app_client.post(f"{API}/resumes/{first['id']}/activate")
        assert response.status_code == 200

        resumes = app_client.get(f"{API}/resumes").json()["resumes"]
        assert [r["is_active"] for r in resumes].count(True) == 1
        assert app_client.get(f"{API}/resumes/active").json()["resume"]["id"] == first["id"]

    def test_upload_outside_own_folder_rejected(self, app_client):
        _register(app_client)
        response = app_client.post(
            f"{API}/resumes",
            json={"file_url": "someone-else/cv.pdf", "content_type": "application/pdf", "file_size": 10},
        )
        assert response.status_code == 400

    def test_upload_wrong_type_rejected(self, app_client):
        user = _register(app_client)
        response = app_client.post(
            f"{API}/resumes",
            json={"file_url": f"{user['id']}/cv.exe", "content_type": "application/x-msdownload", "file_size": 10},
        )
        assert response.status_code == 422

    def test_deactivate_and_delete(self, app_client):
        user = _register(app_client)
        resume = _upload(app_client, user)

        assert app_client.post(f"{API}/resumes/{resume['id']}/deactivate").json()["resume"]["is_active"] is False
        assert app_client.get(f"{API}/resumes/active").json()["resume"] is None
        assert app_client.delete(f"{API}/resumes/{resume['id']}").status_code == 200
        assert app_client.delete(f"{API}/resumes/{resume['id']}").status_code == 404


class TestContactRoutes:
    def _create(self, client, company="Acme", **extra):
        resp = client.post(f"{API}/contacts", json={"company_name": company, "email": "hr@acme.com", **extra})
        assert resp.status_code == 201
        return resp.json()["contact"]

    def test_vote_flow(self, app_client):
        _register(app_client, "owner@example.com")
        contact = self._create(app_client)

        _register(app_client, "voter@example.com")
        response = app_client.put(f"{API}/contacts/{contact['id']}/vote", json={"vote_type": "up"})
        assert response.status_code == 200
        assert response.json()["contact"]["upvotes"] == 1

        response = app_client.put(f"{API}/contacts/{contact['id']}/vote", json={"vote_type": "down"})
        data = response.json()["contact"]
        assert (data["upvotes"], data["downvotes"], data["score"]) == (0, 1, -1)

        detail = app_client.get(f"{API}/contacts/{contact['id']}").json()
        assert detail["my_vote"] == "down"

        response = app_client.delete(f"{API}/contacts/{contact['id']}/vote")
        assert response.json()["contact"]["downvotes"] == 0
        assert app_client.delete(f"{API}/contacts/{contact['id']}/vote").status_code == 404

    def test_vote_removal_audited_with_contact_id(self, app_client, db_session):
        _register(app_client, "owner@example.com")
        contact = self._create(app_client)
        _register(app_client, "voter@example.com")
        app_client.put(f"{API}/contacts/{contact['id']}/vote", json={"vote_type": "up"})

        assert app_client.delete(f"{API}/contacts/{contact['id']}/vote").status_code == 200
        entry = db_session.query(AuditLog).filter(AuditLog.action == "contact_unvote").one()
        assert str(entry.resource_id) == contact["id"]

    def test_vote_conflict_returns_409(self, app_client):
        _register(app_client)
        contact = self._create(app_client)
        with patch(
            "internship_tracker.contacts.routes.cast_vote",
            side_effect=IntegrityError("INSERT", {}, Exception("unique")),
        ):
            response = app_client.put(f"{API}/contacts/{contact['id']}/vote", json={"vote_type": "up"})
        assert response.status_code == 409

    def test_private_contact_hidden_from_others(self, app_client):
        _register(app_client, "owner@example.com")
        contact = self._create(app_client, is_public=False)

        _register(app_client, "other@example.com")
        assert app_client.get(f"{API}/contacts/{contact['id']}").status_code == 404
        response = app_client.put(f"{API}/contacts/{contact['id']}/vote", json={"vote_type": "up"})
        assert response.status_code == 404

    def test_public_listing_and_industries(self, app_client):
        _register(app_client)
        self._create(app_client, "Acme", industry="Tech")
        self._create(app_client, "Globex", industry="Finance")

        public = app_client.get(f"{API}/contacts/public").json()["contacts"]
        assert {c["company_name"] for c in public} == {"Acme", "Globex"}
        assert {c["contributor_name"] for c in public} == {None}
        assert app_client.get(f"{API}/contacts/industries").json()["industries"] == ["Finance", "Tech"]

    def test_update_cannot_touch_counters(self, app_client):
        _register(app_client)
        contact = self._create(app_client)
        response = app_client.patch(f"{API}/contacts/{contact['id']}", json={"notes": "call back", "upvotes": 99})
        assert response.status_code == 200
        assert response.json()["contact"]["notes"] == "call back"
        assert response.json()["contact"]["upvotes"] == 0

    def test_contributor_name_in_public_listing(self, app_client):
        _register(app_client, "owner@example.com")
        app_client.put(f"{API}/profile", json={"full_name": "Ada Lovelace"})
        self._create(app_client)

        _register(app_client, "reader@example.com")
        public = app_client.get(f"{API}/contacts/public").json()["contacts"]
        assert [c["contributor_name"] for c in public] == ["Ada Lovelace"]

    def test_null_for_required_field_rejected(self, app_client):
        _register(app_client)
        contact = self._create(app_client)
        response = app_client.patch(f"{API}/contacts/{contact['id']}", json={"is_public": None})
        assert response.status_code == 422
        assert response.json()["error"] == "Validation failed"

        response = app_client.patch(f"{API}/contacts/{contact['id']}", json={"industry": None})
        assert response.status_code == 200
        assert response.json()["contact"]["is_public"] is True

    def test_paged_own_listing(self, app_client):
        _register(app_client)
        for name in ["A", "B", "C"]:
            self._create(app_client, name)
        data = app_client.get(f"{API}/contacts", params={"per_page": 2, "sort_by": "company_name", "order": "asc"}).json()
        assert data["total"] == 3
        assert [c["company_name"] for c in data["contacts"]] == ["A", "B"]


class TestProfileRoutes:
    def test_completeness_is_server_derived(self, app_client):
        _register(app_client)
        assert app_client.get(f"{API}/profile").json()["profile"] is None

        response = app_client.put(f"{API}/profile", json={"full_name": "Test User", "completeness": 100})
        assert response.status_code == 200
        assert response.json()["profile"]["completeness"] == 6

        data = app_client.get(f"{API}/profile").json()
        assert data["completeness"] == 6
        assert "full_name" not in data["missing_fields"]

    def test_null_for_required_field_rejected(self, app_client):
        _register(app_client)
        assert app_client.put(f"{API}/profile", json={"full_name": "A"}).status_code == 200

        response = app_client.put(f"{API}/profile", json={"is_profile_public": None})
        assert response.status_code == 422
        assert app_client.get(f"{API}/profile").json()["profile"]["is_profile_public"] is False


class TestPostAndApplicationRoutes:
    def test_application_flow(self, app_client):
        user = _register(app_client)
        resume = _upload(app_client, user)
        post = app_client.post(
            f"{API}/posts",
            json={"company_name": "Acme", "position_title": "Intern", "description": "Write to jobs@acme.com"},
        ).json()["post"]
        assert post["contact_email"] == "jobs@acme.com"

        response = app_client.post(
            f"{API}/applications",
            json={"recipient_email": "jobs@acme.com", "subject": "Hello", "email_body": "Hi", "post_id": post["id"]},
        )
        assert response.status_code == 201
        application = response.json()["application"]
        assert application["status"] == "draft"
        assert application["resume_id"] == resume["id"]

        response = app_client.post(
            f"{API}/applications/{application['id']}/result", json={"success": False, "error_message": "bounced"}
        )
        assert response.json()["application"]["status"] == "failed"

        dashboard = app_client.get(f"{API}/dashboard").json()
        assert dashboard["applications_by_status"]["failed"] == 1
        assert dashboard["posts"] == 1
        assert dashboard["active_resume"] == "cv"

    def test_post_update_rejects_null_description(self, app_client):
        _register(app_client)
        post = app_client.post(
            f"{API}/posts", json={"company_name": "Acme", "position_title": "Intern", "description": "desc"}
        ).json()["post"]

        response = app_client.patch(f"{API}/posts/{post['id']}", json={"description": None})
        assert response.status_code == 422

    def test_unknown_post_reference(self, app_client):
        _register(app_client)
        response = app_client.post(
            f"{API}/applications",
            json={
                "recipient_email": "a@b.com",
                "subject": "s",
                "email_body": "b",
                "post_id": "00000000-0000-0000-0000-000000000000",
            },
        )
        assert response.status_code == 404


class TestRateLimit:
    def test_login_rate_limited(self, app_client):
        limiter.reset()
        limiter.enabled = True
        try:
            statuses = [
                app_client.post(f"{API}/auth/login", json={"email": "x@example.com", "password": "whatever1"}).status_code
                for _ in range(11)
            ]
        finally:
            limiter.enabled = False
            limiter.reset()
        assert statuses[0] == 401
        assert statuses[-1] == 429
