"""
Request-side integration: Starlette request context, redirect responses and
the firewall middleware.
"""

from .context import RedirectResponseBuilder, StarletteRequestContext
from .firewall_middleware import FirewallMiddleware, header_role_getter

__all__ = [
    "FirewallMiddleware",
    "RedirectResponseBuilder",
    "StarletteRequestContext",
    "header_role_getter",
]
