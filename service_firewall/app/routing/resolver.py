"""
Named-route resolution for firewall configuration.
"""

from typing import Mapping, Optional, Protocol
from urllib.parse import unquote

from starlette.routing import NoMatchFound

from shared.errors import ConfigurationError


class RouteResolver(Protocol):
    """Turns a symbolic route name into a concrete URI."""

    def resolve(self, name: str, params: Mapping[str, str], absolute: bool) -> str:
        ...


class StarletteRouteResolver:
    """RouteResolver backed by a Starlette/FastAPI application's router.

    Absolute URIs are built against ``base_url`` since configuration happens
    outside of any request.
    """

    def __init__(self, app, base_url: str = "http://localhost"):
        self.app = app
        self.base_url = base_url

    def resolve(self, name: str, params: Mapping[str, str], absolute: bool) -> str:
        try:
            url_path = self.app.url_path_for(name, **dict(params))
        except NoMatchFound as e:
            raise ConfigurationError(
                f"Unknown route: {name}",
                {"route": name, "params": dict(params)}
            ) from e

        if absolute:
            return str(url_path.make_absolute_url(self.base_url))
        return str(url_path)


def resolve_decoded(resolver: RouteResolver, name: str,
                    params: Optional[Mapping[str, str]] = None, absolute: bool = False) -> str:
    """Resolve a named route and percent-decode it.

    Requests are matched against decoded paths, so stored patterns and
    defaults are decoded too. Route params may carry regex fragments.
    """
    return unquote(resolver.resolve(name, params or {}, absolute))
