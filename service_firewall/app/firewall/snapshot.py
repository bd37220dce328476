"""
Immutable firewall configuration published to evaluators.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..rules.evaluator import find_restricting_rule
from ..rules.models import Rule
from ..routing.defaults import DefaultRoutes, Redirector


@dataclass(frozen=True)
class FirewallSnapshot:
    """Rules and default routes as they stood after the last mutation."""
    rules: Tuple[Rule, ...] = ()
    routes: DefaultRoutes = field(default_factory=DefaultRoutes)
    redirector: Redirector = field(default_factory=Redirector)

    @property
    def is_configured(self) -> bool:
        return self.routes.default_uri != ""

    def find_restricting_rule(self, path: str, role: str) -> Optional[Rule]:
        return find_restricting_rule(self.rules, path, role)

    def get_default(self, role: Optional[str] = None) -> str:
        return self.routes.get_default(role)

    def resolve_redirect_target(self, role: Optional[str]) -> str:
        return self.redirector.resolve_redirect_target(self.routes, role)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "configured": self.is_configured,
            "rules": [rule.to_dict() for rule in self.rules],
            "default_uri": self.routes.default_uri,
            "role_defaults": dict(self.routes.role_defaults),
            "host": self.redirector.host
        }
