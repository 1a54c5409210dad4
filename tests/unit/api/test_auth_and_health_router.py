"""HTTP tests for the session, auth-state, logout and health routes."""

import asyncio

import pytest
from fastapi import status

from src.marketplace.api.http.deps import get_security_config
from src.marketplace.core.security import validate_csrf_token
from src.marketplace.runtime.config.config_data import SecurityConfig

ISSUER_HEADERS = {"X-Session-Issuer-Key": "issuer-secret"}


class TestIssueSession:
    @pytest.fixture
    def issuer_enabled(self, api_app):
        api_app.dependency_overrides[get_security_config] = lambda: SecurityConfig(
            session_issuer_key="issuer-secret"
        )

    def test_issued_session_opens_the_catalog(self, client, issuer_enabled, seed, user_session_service):
        response = client.post(
            "/auth/session", json={"phone": seed.owner.phone}, headers=ISSUER_HEADERS
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert "user_session_id=" in response.headers["set-cookie"]
        assert validate_csrf_token(body["session_id"], body["csrf_token"])
        stored = asyncio.run(user_session_service.get_user_session(body["session_id"]))
        assert stored.user_id == seed.owner.id

        products = client.get("/products")
        assert products.status_code == status.HTTP_200_OK
        assert products.json() == []

    def test_wrong_issuer_key(self, client, issuer_enabled, seed):
        response = client.post(
            "/auth/session",
            json={"phone": seed.owner.phone},
            headers={"X-Session-Issuer-Key": "guess"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert "set-cookie" not in response.headers
        assert client.get("/products").status_code == status.HTTP_401_UNAUTHORIZED

    def test_unknown_phone(self, client, issuer_enabled, seed):
        response = client.post(
            "/auth/session", json={"phone": "+19999999"}, headers=ISSUER_HEADERS
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "User not found"

    def test_disabled_without_key(self, client, api_app, seed):
        api_app.dependency_overrides[get_security_config] = lambda: SecurityConfig()

        response = client.post(
            "/auth/session", json={"phone": seed.owner.phone}, headers=ISSUER_HEADERS
        )

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


class TestAuthState:
    def test_anonymous(self, client):
        response = client.get("/auth/me")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["authenticated"] is False
        assert response.json()["csrf_token"] is None

    def test_vendor_user(self, client, login, seed):
        session_id = login(seed.owner)

        body = client.get("/auth/me").json()

        assert body["authenticated"] is True
        assert body["user"]["id"] == seed.owner.id
        assert body["vendor"]["id"] == seed.vendor.id
        assert body["vendor"]["market_id"] == seed.market.id
        assert validate_csrf_token(session_id, body["csrf_token"])

    def test_user_without_vendor(self, client, login, seed):
        login(seed.shopper)

        body = client.get("/auth/me").json()

        assert body["authenticated"] is True
        assert body["vendor"] is None


class TestLogout:
    def test_logout_deletes_session(self, client, login, seed, user_session_service):
        session_id = login(seed.owner)

        response = client.post("/auth/logout")

        assert response.status_code == status.HTTP_200_OK
        assert asyncio.run(user_session_service.get_user_session(session_id)) is None
        assert 'user_session_id=""' in response.headers["set-cookie"]

    def test_logout_without_session(self, client):
        response = client.post("/auth/logout")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestHealth:
    def test_liveness(self, client):
        response = client.get("/health")
        assert response.json() == {"status": "healthy", "service": "marketplace"}

    def test_readiness(self, client):
        response = client.get("/health/ready")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"]["database"]["status"] == "healthy"
        assert body["checks"]["sessions"]["type"] == "in-memory"

    def test_database(self, client):
        response = client.get("/health/database")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"
        assert "pool" in response.json()

    def test_security_headers(self, client):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Request-ID"]
