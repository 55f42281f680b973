"""Tests for /api/auth routes."""

from datetime import timedelta

from app.application.services.token_service import create_access_token
from conftest import TEST_PASSWORD


class TestRegister:
    def test_register_returns_user_and_token(self, client):
        response = client.post("/api/auth/register", json={
            "email": "New@Example.com",
            "password": "secret1",
            "firstName": "New",
            "lastName": "Member",
        })
        assert response.status_code == 201
        body = response.json()
        assert body["user"]["email"] == "new@example.com"
        assert body["user"]["role"] == "user"
        assert body["user"]["fullName"] == "New Member"
        assert "passwordHash" not in body["user"]
        assert body["token"]

    def test_client_cannot_pick_role(self, client):
        response = client.post("/api/auth/register", json={
            "email": "sneaky@example.com",
            "password": "secret1",
            "firstName": "S",
            "lastName": "N",
            "role": "admin",
        })
        assert response.status_code == 201
        assert response.json()["user"]["role"] == "user"

    def test_duplicate_email_conflicts(self, client, user):
        response = client.post("/api/auth/register", json={
            "email": "ALICE@example.com",
            "password": "secret1",
            "firstName": "A",
            "lastName": "S",
        })
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ConflictException"

    def test_validation_errors_are_per_field_400(self, client):
        response = client.post("/api/auth/register", json={"email": "not-an-email", "password": "123"})
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "ValidationException"
        assert {"email", "password", "firstName", "lastName"} <= set(error["details"])
        assert error["path"] == "/api/auth/register"


class TestLogin:
    def test_login_success(self, client, user):
        response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": TEST_PASSWORD})
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["user"]["id"] == user.id
        assert body["user"]["lastLogin"] is not None

    def test_wrong_password(self, client, user):
        response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid credentials"

    def test_deactivated_account(self, client, user, db):
        user.is_active = False
        db.commit()
        response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": TEST_PASSWORD})
        assert response.status_code == 401


class TestMe:
    def test_requires_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_returns_current_user(self, client, user, user_headers):
        response = client.get("/api/auth/me", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["user"]["email"] == user.email

    def test_expired_token_rejected(self, client, user):
        token = create_access_token(user.id, expires_delta=timedelta(seconds=-1))
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "TokenExpiredError"

    def test_token_for_deleted_user_rejected(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {create_access_token(999)}"})
        assert response.status_code == 401

    def test_update_profile(self, client, user_headers):
        response = client.put("/api/auth/me", headers=user_headers, json={
            "firstName": "Alicia",
            "profilePicture": "https://cdn.example.com/a.png",
        })
        assert response.status_code == 200
        updated = response.json()["user"]
        assert updated["firstName"] == "Alicia"
        assert updated["lastName"] == "Smith"
        assert updated["profilePicture"] == "https://cdn.example.com/a.png"


class TestPasswordAndTokens:
    def test_change_password(self, client, user_headers):
        response = client.post("/api/auth/change-password", headers=user_headers, json={
            "currentPassword": TEST_PASSWORD,
            "newPassword": "brand-new-pass",
        })
        assert response.status_code == 200

        login = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "brand-new-pass"})
        assert login.status_code == 200

    def test_change_password_wrong_current(self, client, user_headers):
        response = client.post("/api/auth/change-password", headers=user_headers, json={
            "currentPassword": "wrong",
            "newPassword": "brand-new-pass",
        })
        assert response.status_code == 400
        assert "currentPassword" in response.json()["error"]["details"]

    def test_refresh_issues_new_token(self, client, user_headers):
        response = client.post("/api/auth/refresh", headers=user_headers)
        assert response.status_code == 200
        token = response.json()["token"]
        assert client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"}).status_code == 200

    def test_validate_token(self, client, user, user_headers):
        response = client.get("/api/auth/validate-token", headers=user_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is True
        assert body["user"]["id"] == user.id

    def test_logout(self, client, user_headers):
        assert client.post("/api/auth/logout", headers=user_headers).status_code == 200
