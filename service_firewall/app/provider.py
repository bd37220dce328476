"""
Wiring of a shared firewall instance into an application.
"""

from typing import Optional

from fastapi import FastAPI, Request

from shared.config import FirewallSettings, get_settings
from shared.metrics import MetricsCollector
from .firewall.service import FirewallService
from .middleware.firewall_middleware import FirewallMiddleware, RoleGetter, header_role_getter
from .routing.resolver import RouteResolver, StarletteRouteResolver


def create_firewall(settings: Optional[FirewallSettings] = None,
                    route_resolver: Optional[RouteResolver] = None,
                    metrics: Optional[MetricsCollector] = None) -> FirewallService:
    """Build a firewall from settings."""
    settings = settings or get_settings()
    return FirewallService(
        full_uris=settings.full_uris,
        host=settings.host,
        validate_patterns=settings.validate_patterns,
        route_resolver=route_resolver,
        metrics=metrics
    )


def register_firewall(app: FastAPI, settings: Optional[FirewallSettings] = None,
                      metrics: Optional[MetricsCollector] = None,
                      install_middleware: bool = True,
                      role_getter: Optional[RoleGetter] = None) -> FirewallService:
    """Attach one shared firewall to ``app``.

    The instance is stored on ``app.state.firewall`` and resolves named routes
    against ``app``. Configure it before the application starts serving;
    the middleware is added when ``install_middleware`` is set.
    """
    settings = settings or get_settings()
    firewall = create_firewall(
        settings,
        route_resolver=StarletteRouteResolver(app, settings.base_url),
        metrics=metrics
    )
    app.state.firewall = firewall

    if install_middleware:
        app.add_middleware(
            FirewallMiddleware,
            firewall=firewall,
            role_getter=role_getter or header_role_getter(settings.role_header, settings.anonymous_role)
        )

    return firewall


def get_firewall(request: Request) -> FirewallService:
    """FastAPI dependency returning the application's firewall."""
    return request.app.state.firewall
