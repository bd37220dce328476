"""
Unit tests for the firewall middleware, request context and provider wiring.
"""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request as StarletteRequest

from service_firewall.app.firewall.service import FirewallService
from service_firewall.app.middleware.context import RedirectResponseBuilder, StarletteRequestContext
from service_firewall.app.provider import create_firewall, get_firewall, register_firewall
from service_firewall.app.routing.resolver import StarletteRouteResolver
from service_firewall.app.rules.models import Roles
from shared.config import FirewallSettings
from shared.errors import ConfigurationError, SetupIncompleteError
from shared.metrics import MetricsCollector


def make_request(path: str, query: bytes = b"") -> StarletteRequest:
    return StarletteRequest({
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "root_path": "",
        "path": path,
        "query_string": query,
        "headers": [],
    })


def build_app() -> FastAPI:
    app = FastAPI()

    @app.get("/admin/panel", name="admin_panel")
    async def admin_panel():
        return {"page": "admin"}

    @app.get("/login", name="login")
    async def login():
        return {"page": "login"}

    @app.get("/home", name="home")
    async def home():
        return {"page": "home"}

    @app.get("/posts/{post_id}/edit", name="edit_post")
    async def edit_post(post_id: int):
        return {"page": "edit", "post_id": post_id}

    @app.get("/firewall-info")
    async def firewall_info(firewall: FirewallService = Depends(get_firewall)):
        return {"configured": firewall.is_configured}

    return app


class TestStarletteRequestContext:
    """Test cases for StarletteRequestContext."""

    def test_path_without_query(self):
        """Test the path is returned as requested."""
        context = StarletteRequestContext(make_request("/admin/panel"))

        assert context.get_path() == "/admin/panel"

    def test_path_keeps_query(self):
        """Test the query string is kept on the path."""
        context = StarletteRequestContext(make_request("/admin/panel", b"tab=users"))

        assert context.get_path() == "/admin/panel?tab=users"
        assert context.get_full_url() == "http://testserver/admin/panel?tab=users"


class TestRedirectResponseBuilder:
    """Test cases for RedirectResponseBuilder."""

    def test_redirect(self):
        """Test redirects carry the location header."""
        response = RedirectResponseBuilder().redirect("/login")

        assert response.status_code == 302
        assert response.headers["location"] == "/login"

    def test_custom_status(self):
        """Test the redirect status can be changed."""
        response = RedirectResponseBuilder(status_code=303).redirect("/login")

        assert response.status_code == 303


class TestStarletteRouteResolver:
    """Test cases for StarletteRouteResolver."""

    @pytest.fixture
    def resolver(self):
        return StarletteRouteResolver(build_app(), "http://example.com")

    def test_relative(self, resolver):
        """Test relative route resolution."""
        assert resolver.resolve("login", {}, False) == "/login"

    def test_params(self, resolver):
        """Test route params are substituted, regex fragments included."""
        assert resolver.resolve("edit_post", {"post_id": "[0-9]+"}, False) == "/posts/[0-9]+/edit"

    def test_absolute(self, resolver):
        """Test absolute route resolution against the base URL."""
        assert resolver.resolve("login", {}, True) == "http://example.com/login"

    def test_unknown_route(self, resolver):
        """Test unknown routes are configuration errors."""
        with pytest.raises(ConfigurationError):
            resolver.resolve("missing", {}, False)


class TestFirewallMiddleware:
    """Test cases for FirewallMiddleware."""

    @pytest.fixture
    def settings(self):
        """Firewall settings for tests."""
        return FirewallSettings(full_uris=False, host="", anonymous_role="anonymous")

    @pytest.fixture
    def app(self):
        return build_app()

    @pytest.fixture
    def firewall(self, app, settings):
        """Register and configure a firewall on the app."""
        firewall = register_firewall(app, settings, metrics=MetricsCollector("firewall"))
        firewall.set_default_route("login")
        firewall.set_default_route_for_role("reader", "home")
        firewall.deny(Roles.many(["guest", "anonymous"]), "^/admin")
        firewall.allow_route(Roles.one("editor"), "edit_post", {"post_id": "[0-9]+"})
        return firewall

    @pytest.fixture
    def client(self, app, firewall):
        return TestClient(app)

    def test_denied_role_is_redirected(self, client):
        """Test deny-listed roles get a redirect to the default route."""
        response = client.get("/admin/panel", headers={"X-User-Role": "guest"}, follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/login"

    def test_permitted_role_proceeds(self, client):
        """Test other roles reach the handler."""
        response = client.get("/admin/panel", headers={"X-User-Role": "staff"})

        assert response.status_code == 200
        assert response.json() == {"page": "admin"}

    def test_anonymous_role_fallback(self, client):
        """Test requests without a role use the anonymous role."""
        response = client.get("/admin/panel", follow_redirects=False)

        assert response.status_code == 302

    def test_role_default_override(self, client):
        """Test per-role redirect targets."""
        response = client.get("/posts/3/edit", headers={"X-User-Role": "reader"}, follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/home"

    def test_allow_list_route(self, client):
        """Test allow-listed roles reach a named route."""
        response = client.get("/posts/3/edit", headers={"X-User-Role": "editor"})

        assert response.status_code == 200
        assert response.json()["post_id"] == 3

    def test_follow_redirect_lands_on_default(self, client):
        """Test following the redirect lands on the login page."""
        response = client.get("/admin/panel", headers={"X-User-Role": "guest"})

        assert response.status_code == 200
        assert response.json() == {"page": "login"}

    def test_dependency_returns_firewall(self, client):
        """Test get_firewall exposes the shared instance."""
        response = client.get("/firewall-info")

        assert response.json() == {"configured": True}

    def test_missing_role_without_anonymous(self, app):
        """Test an absent role is fatal when no anonymous role is set."""
        firewall = register_firewall(
            app, FirewallSettings(anonymous_role=""), metrics=MetricsCollector("firewall")
        )
        firewall.set_default("/login")
        client = TestClient(app)

        with pytest.raises(SetupIncompleteError):
            client.get("/login")

    def test_unconfigured_firewall_is_fatal(self, app, settings):
        """Test requests fail while no default route is configured."""
        register_firewall(app, settings, metrics=MetricsCollector("firewall"))
        client = TestClient(app)

        with pytest.raises(SetupIncompleteError):
            client.get("/login", headers={"X-User-Role": "guest"})

    def test_custom_role_getter(self, settings):
        """Test a custom role getter supplies the role."""
        app = build_app()
        firewall = register_firewall(
            app, settings, metrics=MetricsCollector("firewall"),
            role_getter=lambda request: request.query_params.get("as")
        )
        firewall.set_default("/login").deny(Roles.one("guest"), "^/admin")
        client = TestClient(app)

        assert client.get("/admin/panel?as=guest", follow_redirects=False).status_code == 302
        assert client.get("/admin/panel?as=staff").status_code == 200

    def test_host_and_full_uris(self):
        """Test host prefixing and full-URL matching through settings."""
        app = build_app()
        settings = FirewallSettings(full_uris=True, host="https://auth.example.com", base_url="http://testserver")
        firewall = register_firewall(app, settings, metrics=MetricsCollector("firewall"))
        firewall.set_default("/login")
        firewall.deny_route(Roles.one("guest"), "admin_panel")
        client = TestClient(app)

        assert firewall.get_all()[0][0] == "http://testserver/admin/panel"
        response = client.get("/admin/panel", headers={"X-User-Role": "guest"}, follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://auth.example.com/login"


class TestCreateFirewall:
    """Test cases for create_firewall."""

    def test_settings_are_applied(self):
        """Test settings flow into the firewall."""
        settings = FirewallSettings(full_uris=True, host="https://example.com", validate_patterns=True)

        firewall = create_firewall(settings, metrics=MetricsCollector("firewall"))

        assert firewall.full_uris is True
        assert firewall.host == "https://example.com"
        assert firewall.route_resolver is None
