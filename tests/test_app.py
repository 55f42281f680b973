"""Tests for app-wide behaviour: health, errors, activity log and uploads."""

import asyncio
import os
from unittest.mock import patch

from fastapi.testclient import TestClient

from app.application.services.activity_service import log_activity, prune_activity
from app.config import get_settings
from app.domain.models.activity_log import ActivityLog
from app.main import app

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class TestServiceEndpoints:
    def test_root(self, client):
        assert client.get("/").json()["status"] == "running"

    def test_health_reports_database(self, client):
        body = client.get("/health").json()
        assert body == {"status": "healthy", "database": "connected"}

    def test_request_id_header(self, client):
        response = client.get("/", headers={"X-Request-ID": "3f0c1c9e-5c4b-4f0e-9d43-9b1a6a9c2d11"})
        assert response.headers["X-Request-ID"] == "3f0c1c9e-5c4b-4f0e-9d43-9b1a6a9c2d11"

    def test_cors_allow_list(self, client):
        allowed = client.options("/api/posts", headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "GET",
        })
        assert allowed.headers["access-control-allow-origin"] == "http://localhost:5173"

        denied = client.options("/api/posts", headers={
            "Origin": "http://evil.example.com",
            "Access-Control-Request-Method": "GET",
        })
        assert "access-control-allow-origin" not in denied.headers


class TestErrorEnvelope:
    def test_unknown_route(self, client):
        response = client.get("/api/nowhere")
        assert response.status_code == 404
        assert response.json()["error"]["path"] == "/api/nowhere"

    def test_unexpected_error_is_500_with_generic_message(self):
        with patch("app.interfaces.api.posts.post_service.list_posts", side_effect=RuntimeError("boom")):
            with TestClient(app, raise_server_exceptions=False) as client:
                response = client.get("/api/posts")
        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "InternalServerError"
        assert "boom" not in error["message"]
        # outside production the exception text is included
        assert error["details"]["exception"] == "RuntimeError: boom"


class TestActivityLog:
    def test_api_requests_are_recorded(self, client, user, user_headers, admin_headers):
        client.get("/api/posts?limit=5", headers=user_headers)
        client.get("/health")

        entries = client.get("/api/activity", headers=admin_headers).json()["items"]
        recorded = [e for e in entries if e["url"] == "/api/posts?limit=5"]
        assert len(recorded) == 1
        assert recorded[0]["method"] == "GET"
        assert recorded[0]["status"] == 200
        assert recorded[0]["userId"] == user.id
        assert not any(e["url"] == "/health" for e in entries)

    def test_activity_is_admin_only(self, client, user_headers):
        assert client.get("/api/activity", headers=user_headers).status_code == 403

    def test_failed_write_does_not_change_response(self, client):
        with patch("app.core.middleware.log_activity", side_effect=RuntimeError("db down")):
            response = client.get("/api/posts")
        assert response.status_code == 200

    def test_write_runs_off_the_event_loop(self, client):
        in_loop = []

        def fake_record(**fields):
            try:
                asyncio.get_running_loop()
                in_loop.append(True)
            except RuntimeError:
                in_loop.append(False)

        with patch("app.core.middleware.record_activity", side_effect=fake_record):
            client.get("/api/posts")
        assert in_loop == [False]

    def test_only_newest_rows_are_kept(self, client, db):
        with patch.object(get_settings(), "ACTIVITY_LOG_RETENTION", 3):
            for page in range(1, 6):
                client.get(f"/api/posts?page={page}")

        assert db.query(ActivityLog).count() == 3
        urls = [entry.url for entry in db.query(ActivityLog).order_by(ActivityLog.id)]
        assert urls == ["/api/posts?page=3", "/api/posts?page=4", "/api/posts?page=5"]

    def test_prune_keeps_everything_under_the_cap(self, db):
        for status in (200, 404):
            log_activity(db, "GET", "/api/posts", status, "127.0.0.1")
        assert prune_activity(db, 10) == 0
        assert prune_activity(db, 1) == 1
        assert [entry.status for entry in db.query(ActivityLog)] == [404]


class TestUpload:
    def test_upload_image(self, client, user_headers):
        response = client.post(
            "/api/upload",
            headers=user_headers,
            files={"image": ("avatar.png", PNG_BYTES, "image/png")},
        )
        assert response.status_code == 200
        url = response.json()["url"]
        assert url.startswith("http://testserver/uploads/")
        assert url.endswith(".png")

        stored = os.path.join(get_settings().UPLOAD_DIR, url.rsplit("/", 1)[-1])
        assert os.path.exists(stored)
        assert client.get(url.replace("http://testserver", "")).content == PNG_BYTES

    def test_non_image_rejected(self, client, user_headers):
        response = client.post(
            "/api/upload",
            headers=user_headers,
            files={"image": ("notes.txt", b"hello", "text/plain")},
        )
        assert response.status_code == 400

    def test_too_large_rejected(self, client, user_headers):
        with patch.object(get_settings(), "MAX_UPLOAD_BYTES", 10):
            response = client.post(
                "/api/upload",
                headers=user_headers,
                files={"image": ("big.png", PNG_BYTES, "image/png")},
            )
        assert response.status_code == 400

    def test_requires_auth(self, client):
        response = client.post("/api/upload", files={"image": ("a.png", PNG_BYTES, "image/png")})
        assert response.status_code == 401
