"""
Rule data models for the Access Firewall.
"""

from typing import FrozenSet, Iterable, Optional, Union
from dataclasses import dataclass
from enum import Enum


class Disposition(str, Enum):
    """What a rule's role list means."""
    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class Roles:
    """One or many role identifiers, normalised to a frozen set.

    Build with ``Roles.one("editor")`` or ``Roles.many(["editor", "admin"])``.
    Roles are opaque strings and are never validated.
    """
    members: FrozenSet[str]

    @classmethod
    def one(cls, role: str) -> "Roles":
        return cls(frozenset((role,)))

    @classmethod
    def many(cls, roles: Iterable[str]) -> "Roles":
        if isinstance(roles, str):
            raise TypeError("Roles.many expects an iterable of roles, not a string: %r" % roles)
        return cls(frozenset(roles))

    @classmethod
    def coerce(cls, roles: Union["Roles", str]) -> "Roles":
        """Accept a ``Roles`` value or a single role identifier."""
        if isinstance(roles, Roles):
            return roles
        if isinstance(roles, str):
            return cls.one(roles)
        raise TypeError("Expected Roles or a role string, got %s" % type(roles).__name__)

    def __contains__(self, role: object) -> bool:
        return role in self.members

    def __iter__(self):
        return iter(sorted(self.members))

    def __len__(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class Rule:
    """Access rule attached to a single URI pattern.

    An ``allow`` rule lets only its roles through paths matching the pattern.
    A ``deny`` rule forbids its roles and lets everyone else through.
    """
    pattern: str
    disposition: Disposition
    roles: Roles

    @property
    def allowed_roles(self) -> Optional[Roles]:
        return self.roles if self.disposition == Disposition.ALLOW else None

    @property
    def denied_roles(self) -> Optional[Roles]:
        return self.roles if self.disposition == Disposition.DENY else None

    def restricts(self, role: str) -> bool:
        """Whether this rule forbids ``role`` on a matching path."""
        allowed = self.allowed_roles
        denied = self.denied_roles
        role_is_allowed = allowed is None or role in allowed.members
        role_is_denied = denied is not None and role in denied.members
        return not role_is_allowed or role_is_denied

    def to_dict(self):
        return {
            "pattern": self.pattern,
            "disposition": self.disposition.value,
            "roles": sorted(self.roles.members)
        }


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of a firewall evaluation: proceed, or redirect somewhere."""
    redirect_to: Optional[str] = None
    matched_pattern: Optional[str] = None

    @classmethod
    def proceed(cls) -> "EvaluationResult":
        return cls()

    @classmethod
    def redirect(cls, uri: str, matched_pattern: Optional[str] = None) -> "EvaluationResult":
        return cls(redirect_to=uri, matched_pattern=matched_pattern)

    @property
    def allowed(self) -> bool:
        return self.redirect_to is None

    @property
    def decision(self) -> str:
        return "proceed" if self.allowed else "redirect"
