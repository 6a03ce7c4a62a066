"""
Tests for the session gatekeeper middleware.

Routing rules are tested directly through decide_route; the middleware
itself is exercised through the full app with a fake identity provider.
"""

import pytest
from fastapi import FastAPI, Request, Response
from fastapi.testclient import TestClient

from api.app import create_app
from api.middleware.gatekeeper import (
    SessionGatekeeperMiddleware,
    decide_route,
    is_callback_path,
    is_protected_path,
    is_static_asset,
)
from shared.config import Settings

from tests.conftest import TEST_COOKIE_NAME


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def client(auth_backend) -> TestClient:
    return TestClient(create_app())


def set_cookie_headers(response) -> list[str]:
    return response.headers.get_list("set-cookie")


class TestPathMatching:
    @pytest.mark.parametrize(
        "path",
        [
            "/_next/static/chunks/main.js",
            "/_next/image",
            "/_next/image/",
            "/static/app.css",
            "/favicon.ico",
            "/logo.svg",
            "/images/hero.PNG",
            "/fonts/inter.woff2",
        ],
    )
    def test_static_assets(self, path):
        assert is_static_asset(path)

    @pytest.mark.parametrize("path", ["/dashboard", "/dashboard/files", "/login", "/api/health", "/svg"])
    def test_not_static_assets(self, path):
        assert not is_static_asset(path)

    def test_protected_prefix_matches_segments(self, settings):
        assert is_protected_path("/dashboard", settings)
        assert is_protected_path("/dashboard/", settings)
        assert is_protected_path("/dashboard/files/abc", settings)
        assert not is_protected_path("/dashboards", settings)
        assert not is_protected_path("/login", settings)

    def test_callback_path(self, settings):
        assert is_callback_path("/auth/callback", settings)
        assert is_callback_path("/auth/callback/", settings)
        assert not is_callback_path("/auth/login", settings)


class TestDecideRoute:
    def test_anonymous_on_protected_path(self, settings):
        """Anonymous callers should go to login with the original path preserved."""
        assert decide_route("/dashboard/foo/bar", False, settings) == "/login?redirectedFrom=%2Fdashboard%2Ffoo%2Fbar"

    def test_anonymous_on_protected_root(self, settings):
        assert decide_route("/dashboard", False, settings) == "/login?redirectedFrom=%2Fdashboard"

    def test_anonymous_on_allow_listed_path(self, settings):
        """Password setup must stay reachable mid-flow."""
        assert decide_route("/dashboard/reset-password", False, settings) is None

    def test_anonymous_elsewhere(self, settings):
        assert decide_route("/login", False, settings) is None
        assert decide_route("/", False, settings) is None
        assert decide_route("/dashboards", False, settings) is None

    def test_authenticated_on_login(self, settings):
        """Signed-in callers should not see the login page."""
        assert decide_route("/login", True, settings) == "/dashboard"

    def test_authenticated_elsewhere(self, settings):
        assert decide_route("/dashboard/files", True, settings) is None
        assert decide_route("/login/help", True, settings) is None

    def test_custom_layout(self):
        settings = Settings(protected_prefix="/portal", login_path="/signin", public_protected_paths=[])
        assert decide_route("/portal/reset-password", False, settings) == "/signin?redirectedFrom=%2Fportal%2Freset-password"
        assert decide_route("/signin", True, settings) == "/portal"


class TestGatekeeperMiddleware:
    def test_redirects_anonymous_caller(self, client, auth_backend):
        response = client.get("/dashboard/foo/bar", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "http://testserver/login?redirectedFrom=%2Fdashboard%2Ffoo%2Fbar"
        assert auth_backend.call_names() == ["get_user"]

    def test_allow_listed_path_passes_through(self, client):
        """No app route serves the page, so passing through means a 404."""
        response = client.get("/dashboard/reset-password", follow_redirects=False)
        assert response.status_code == 404

    def test_signed_in_caller_on_login(self, client, signed_in):
        response = client.get("/login", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "http://testserver/dashboard"

    def test_signed_in_caller_passes_through(self, client, signed_in):
        response = client.get("/dashboard/files", follow_redirects=False)
        assert response.status_code == 404

    def test_refreshed_cookie_on_pass_through(self, client, signed_in):
        """A refreshed session should be written onto the normal response."""
        signed_in.refresh_session = True

        response = client.get("/api/health")

        assert response.status_code == 200
        headers = set_cookie_headers(response)
        assert len(headers) == 1
        assert headers[0].startswith(f"{TEST_COOKIE_NAME}=refreshed-session")

    def test_refreshed_cookie_on_redirect(self, client, signed_in):
        """A refreshed session must survive the gatekeeper's own redirects."""
        signed_in.refresh_session = True

        response = client.get("/login", follow_redirects=False)

        assert response.status_code == 307
        assert any(header.startswith(f"{TEST_COOKIE_NAME}=") for header in set_cookie_headers(response))

    def test_no_cookies_without_refresh(self, client, signed_in):
        response = client.get("/api/health")
        assert set_cookie_headers(response) == []

    def test_static_assets_bypass(self, client, auth_backend):
        response = client.get("/static/app.png", follow_redirects=False)

        assert response.status_code == 404
        assert auth_backend.calls == []

    def test_callback_bypass(self, client, auth_backend):
        """The gatekeeper must not refresh while the callback exchanges credentials."""
        client.get("/auth/callback?code=xyz", follow_redirects=False)
        assert "get_user" not in auth_backend.call_names()

    def test_user_available_to_routes(self, client, signed_in, test_user):
        response = client.get("/api/users/me")

        assert response.status_code == 200
        assert response.json()["id"] == test_user.id
        assert signed_in.call_names() == ["get_user"]


class TestCookiePropagation:
    """The gatekeeper and the handler share one request's cookie state."""

    @pytest.fixture
    def echo_client(self, signed_in) -> TestClient:
        app = FastAPI()
        app.add_middleware(SessionGatekeeperMiddleware, settings=Settings())

        @app.get("/api/echo-cookies")
        async def echo_cookies(request: Request):
            return dict(request.cookies)

        @app.get("/api/handler-cookie")
        async def handler_cookie(response: Response):
            response.set_cookie(TEST_COOKIE_NAME, "from-handler")
            return {}

        signed_in.refresh_session = True
        return TestClient(app)

    def test_handler_sees_refreshed_cookie(self, echo_client):
        echo_client.cookies.set(TEST_COOKIE_NAME, "stale-session")
        echo_client.cookies.set("theme", "dark")

        response = echo_client.get("/api/echo-cookies")

        assert response.json() == {TEST_COOKIE_NAME: "refreshed-session", "theme": "dark"}

    def test_handler_cookie_wins(self, echo_client):
        """A cookie the handler sets itself must not be overwritten."""
        response = echo_client.get("/api/handler-cookie")

        headers = set_cookie_headers(response)
        assert len(headers) == 1
        assert headers[0].startswith(f"{TEST_COOKIE_NAME}=from-handler")
