"""
Integration tests for the firewall request flow.
"""

import pytest
import httpx
from fastapi import FastAPI

from service_firewall.app.provider import register_firewall
from service_firewall.app.rules.models import Roles
from shared.config import FirewallSettings
from shared.metrics import MetricsCollector
from shared.test_helpers import TestDataFactory, get_test_user


def page(name: str):
    async def handler():
        return {"page": name}
    return handler


def build_site() -> FastAPI:
    app = FastAPI()

    pages = {
        "login": "/login",
        "home": "/home",
        "dashboard": "/dashboard",
        "admin_settings": "/admin/settings",
        "admin_users": "/admin/users",
    }
    for name, path in pages.items():
        app.add_api_route(path, page(name), name=name, methods=["GET"])

    @app.get("/posts/{post_id}/edit", name="edit_post")
    async def edit_post(post_id: int):
        return {"page": "edit_post", "post_id": post_id}

    @app.get("/posts/{post_id}/drafts", name="post_drafts")
    async def post_drafts(post_id: int):
        return {"page": "post_drafts", "post_id": post_id}

    return app


class TestFirewallFlow:
    """Integration tests for a site protected by the firewall."""

    @pytest.fixture
    def metrics(self):
        return MetricsCollector("firewall")

    @pytest.fixture
    def app(self, metrics):
        """Site with the sample rule table installed."""
        app = build_site()
        firewall = register_firewall(app, FirewallSettings(anonymous_role="guest"), metrics=metrics)

        firewall.set_default_route("login")
        for role, uri in TestDataFactory.create_sample_defaults().items():
            firewall.set_default_for_role(role, uri)
        for rule in TestDataFactory.create_sample_rules():
            register = firewall.allow if rule["disposition"] == "allow" else firewall.deny
            register(Roles.many(rule["roles"]), rule["pattern"])

        return app

    @pytest.fixture
    async def client(self, app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role,path,expected", [
        ("admin", "/admin/settings", None),
        ("editor", "/admin/settings", "/dashboard"),
        ("guest", "/admin/settings", "/login"),
        ("editor", "/admin/users", None),
        ("reader", "/admin/users", "/home"),
        ("reader", "/posts/5/edit", "/home"),
        ("editor", "/posts/5/edit", None),
        ("guest", "/posts/5/drafts", "/login"),
        ("reader", "/posts/5/drafts", None),
        ("guest", "/home", None),
    ])
    async def test_decisions(self, client, role, path, expected):
        """Test each sample user against the sample rule table."""
        response = await client.get(path, headers=get_test_user(role).headers)

        if expected is None:
            assert response.status_code == 200
        else:
            assert response.status_code == 302
            assert response.headers["location"] == expected

    @pytest.mark.asyncio
    async def test_anonymous_is_treated_as_guest(self, client):
        """Test requests without a role header use the guest role."""
        response = await client.get("/admin/users")

        assert response.status_code == 302
        assert response.headers["location"] == "/login"

    @pytest.mark.asyncio
    async def test_redirect_chain_ends_on_default(self, client):
        """Test a denied reader ends up on their home page."""
        response = await client.get(
            "/admin/users", headers=get_test_user("reader").headers, follow_redirects=True
        )

        assert response.status_code == 200
        assert response.json() == {"page": "home"}

    @pytest.mark.asyncio
    async def test_decisions_are_observable(self, client, metrics):
        """Test decisions are counted in the firewall metrics."""
        await client.get("/admin/users", headers=get_test_user("reader").headers)
        await client.get("/admin/users", headers=get_test_user("editor").headers)

        assert metrics.sample("firewall_decisions_total", {"decision": "redirect"}) == 1.0
        assert metrics.sample("firewall_decisions_total", {"decision": "proceed"}) == 1.0
