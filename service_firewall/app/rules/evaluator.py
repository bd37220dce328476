"""
Rule evaluation for the Access Firewall.
"""

from typing import Iterable, Optional

from .models import Rule
from .patterns import pattern_matches


def find_restricting_rule(rules: Iterable[Rule], path: str, role: str) -> Optional[Rule]:
    """Return the first rule that matches ``path`` and restricts ``role``.

    Rules are visited in order. A matching rule that lets the role through
    does not end the walk: a later pattern may still restrict the same path.
    Patterns are searched anywhere in the path (unanchored).
    """
    for rule in rules:
        if not pattern_matches(rule.pattern, path):
            continue

        if rule.restricts(role):
            return rule

    return None


def is_restricted(rules: Iterable[Rule], path: str, role: str) -> bool:
    """Whether ``role`` is restricted from ``path`` by any rule."""
    return find_restricting_rule(rules, path, role) is not None
