"""
Default routes and redirect target resolution.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional


@dataclass(frozen=True)
class DefaultRoutes:
    """Read-only view of the default-route table."""
    default_uri: str = ""
    role_defaults: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def get_default(self, role: Optional[str] = None) -> str:
        """Per-role default when one exists for ``role``, else the general default."""
        if role is not None and role in self.role_defaults:
            return self.role_defaults[role]
        return self.default_uri


class DefaultRouteTable:
    """General fallback destination plus optional per-role overrides."""

    def __init__(self):
        self._default_uri = ""
        self._role_defaults: Dict[str, str] = {}

    def set_default(self, uri: str) -> None:
        self._default_uri = uri

    def set_default_for_role(self, role: str, uri: str) -> None:
        self._role_defaults[role] = uri

    def get_default(self, role: Optional[str] = None) -> str:
        return self.freeze().get_default(role)

    @property
    def has_default(self) -> bool:
        return self._default_uri != ""

    def freeze(self) -> DefaultRoutes:
        return DefaultRoutes(
            default_uri=self._default_uri,
            role_defaults=MappingProxyType(dict(self._role_defaults))
        )

    def reset(self) -> None:
        self._default_uri = ""
        self._role_defaults = {}


@dataclass(frozen=True)
class Redirector:
    """Computes where a denied requester is sent.

    The host prefix is concatenated as-is; the URI is neither validated nor
    encoded.
    """
    host: str = ""

    def resolve_redirect_target(self, routes: DefaultRoutes, role: Optional[str]) -> str:
        redirect_uri = routes.get_default(role)
        if self.host:
            redirect_uri = self.host + redirect_uri
        return redirect_uri
