"""
Request-side collaborators consumed by the firewall.
"""

from typing import Any, Protocol


class RequestContext(Protocol):
    """Exposes the request currently being handled."""

    def get_path(self) -> str:
        ...

    def get_full_url(self) -> str:
        ...


class ResponseBuilder(Protocol):
    """Turns a redirect decision into a framework response."""

    def redirect(self, uri: str) -> Any:
        ...
