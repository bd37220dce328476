"""
Routing package: default-route table, redirect resolution and named-route
lookup used while configuring the firewall.
"""

from .defaults import DefaultRoutes, DefaultRouteTable, Redirector
from .resolver import RouteResolver, StarletteRouteResolver, resolve_decoded

__all__ = [
    "DefaultRoutes",
    "DefaultRouteTable",
    "Redirector",
    "RouteResolver",
    "StarletteRouteResolver",
    "resolve_decoded",
]
