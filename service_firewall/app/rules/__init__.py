"""
Rules package.

Defines the rule model, the ordered rule store and the evaluator used by the
firewall. Rules are keyed by a URI pattern (a regular expression searched
anywhere inside the requested path) and carry either an allow-list or a
deny-list of roles.

Modules of interest:
- models: Roles, Rule, Disposition and EvaluationResult.
- store: Insertion-ordered rule registration with conflict checks.
- evaluator: First-restriction-wins walk over the rules.
- patterns: Cached regex compilation.
"""

from .models import Disposition, EvaluationResult, Roles, Rule
from .store import RuleStore
from .evaluator import find_restricting_rule, is_restricted

__all__ = [
    "Disposition",
    "EvaluationResult",
    "Roles",
    "Rule",
    "RuleStore",
    "find_restricting_rule",
    "is_restricted",
]
