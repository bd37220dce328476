"""
Firewall middleware for FastAPI/Starlette applications.
"""

from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shared.logging import get_logger, set_request_id, set_role_context
from ..firewall.service import FirewallService
from .context import RedirectResponseBuilder, StarletteRequestContext

RoleGetter = Callable[[Request], Optional[str]]


def header_role_getter(header: str = "X-User-Role", anonymous_role: Optional[str] = "anonymous") -> RoleGetter:
    """Role from ``request.state.role``, then ``header``, then ``anonymous_role``.

    An empty ``anonymous_role`` leaves the role unset, which the firewall
    rejects as an incomplete setup.
    """
    def get_role(request: Request) -> Optional[str]:
        role = getattr(request.state, "role", None)
        if role:
            return role

        role = request.headers.get(header)
        if role:
            return role

        return anonymous_role or None

    return get_role


class FirewallMiddleware(BaseHTTPMiddleware):
    """Runs the firewall before every request and redirects restricted ones."""

    def __init__(self, app, firewall: FirewallService, role_getter: Optional[RoleGetter] = None,
                 response_builder: Optional[RedirectResponseBuilder] = None):
        super().__init__(app)
        self.firewall = firewall
        self.role_getter = role_getter or header_role_getter()
        self.response_builder = response_builder or RedirectResponseBuilder()
        self.logger = get_logger("firewall.middleware")

    async def dispatch(self, request: Request, call_next):
        set_request_id(request.headers.get("X-Request-ID"))
        role = self.role_getter(request)
        set_role_context(role)

        result = self.firewall.evaluate(role, request_context=StarletteRequestContext(request))
        if not result.allowed:
            self.logger.info(
                "Redirecting restricted request",
                method=request.method,
                path=request.url.path,
                redirect_to=result.redirect_to
            )
            return self.response_builder.redirect(result.redirect_to)

        return await call_next(request)
