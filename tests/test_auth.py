"""Tests for the admin access guard."""

import json
from urllib.parse import quote

import pytest

from barbearia import auth
from barbearia.auth import AUTH_COOKIE, auth_cookie_value, is_authenticated, is_guarded_path
from barbearia.errors import InvalidCredentialsError


class TestGuardedPaths:
    @pytest.mark.parametrize(
        "path", ["/admin", "/admin/", "/admin/agendamentos", "/admin/financeiro/2024"]
    )
    def test_guarded(self, path):
        assert is_guarded_path(path)

    @pytest.mark.parametrize(
        "path", ["/", "/api/agendamento", "/admin/login", "/admin/logout", "/administrador"]
    )
    def test_not_guarded(self, path):
        assert not is_guarded_path(path)


class TestCookieCheck:
    def test_missing(self):
        assert is_authenticated(None) is False
        assert is_authenticated("") is False

    def test_valid_plain_json(self):
        assert is_authenticated('{"isAuthenticated": true, "username": "admin"}')

    def test_valid_url_encoded(self):
        assert is_authenticated(quote(json.dumps({"isAuthenticated": True})))

    def test_generated_value_round_trips(self):
        assert is_authenticated(auth_cookie_value("admin"))

    @pytest.mark.parametrize(
        "value",
        [
            "not-json",
            '{"isAuthenticated": false}',
            '{"username": "admin"}',
            "null",
            "[true]",
            "true",
        ],
    )
    def test_rejected(self, value):
        assert is_authenticated(value) is False


class TestCredentials:
    def test_default_pair(self):
        auth.check_credentials("admin", "admin123")

    def test_wrong_password(self):
        with pytest.raises(InvalidCredentialsError):
            auth.check_credentials("admin", "wrong")

    def test_configured_pair(self, monkeypatch):
        monkeypatch.setattr(auth, "ADMIN_USERNAME", "dono")
        monkeypatch.setattr(auth, "ADMIN_PASSWORD", "segredo")

        auth.check_credentials("dono", "segredo")
        with pytest.raises(InvalidCredentialsError):
            auth.check_credentials("admin", "admin123")


class TestGuardMiddleware:
    def test_redirects_without_cookie(self, api_client):
        response = api_client.get("/admin/agendamentos", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/admin/login"

    def test_redirects_with_bad_cookie(self, api_client):
        api_client.cookies.set(AUTH_COOKIE, quote('{"isAuthenticated": false}'))

        response = api_client.get("/admin", follow_redirects=False)

        assert response.status_code == 307

    def test_passes_with_valid_cookie(self, admin_client):
        response = admin_client.get("/admin/agendamentos", follow_redirects=False)

        assert response.status_code == 200
        assert response.json() == []

    def test_redirect_lands_on_login_hint(self, api_client):
        response = api_client.get("/admin/agendamentos")

        assert response.status_code == 200
        assert response.url.path == "/admin/login"
        assert "POST /admin/login" in response.json()["message"]

    def test_public_routes_not_guarded(self, api_client):
        response = api_client.get("/api/agendamento", follow_redirects=False)

        assert response.status_code == 200

    def test_login_sets_cookie_and_grants_access(self, api_client):
        response = api_client.post(
            "/admin/login", json={"username": "admin", "password": "admin123"}
        )

        assert response.status_code == 200
        assert AUTH_COOKIE in response.cookies
        assert "Max-Age=86400" in response.headers["set-cookie"]

        response = api_client.get("/admin", follow_redirects=False)
        assert response.status_code == 200

    def test_login_wrong_credentials(self, api_client):
        response = api_client.post(
            "/admin/login", json={"username": "admin", "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["error_type"] == "InvalidCredentialsError"
        assert AUTH_COOKIE not in response.cookies

    def test_logout_revokes_access(self, api_client):
        api_client.post("/admin/login", json={"username": "admin", "password": "admin123"})

        response = api_client.post("/admin/logout")
        assert response.status_code == 200

        response = api_client.get("/admin", follow_redirects=False)
        assert response.status_code == 307
