"""
Ordered rule storage for the Access Firewall.
"""

from typing import Dict, List, Optional, Tuple, Union

from shared.errors import ConflictingDispositionError
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from .models import Disposition, Roles, Rule
from .patterns import compile_pattern


class RuleStore:
    """Insertion-ordered mapping of URI pattern to rule.

    A pattern holds either an allow-list or a deny-list. Registering the same
    disposition again replaces the role set in place, keeping the pattern's
    position; registering the opposite disposition fails without touching the
    store.
    """

    def __init__(self, validate_patterns: bool = False, metrics: Optional[MetricsCollector] = None):
        self.logger = get_logger("firewall.rule_store")
        self.validate_patterns = validate_patterns
        self.metrics = metrics
        self._rules: Dict[str, Rule] = {}

    def allow(self, roles: Union[Roles, str], pattern: str) -> None:
        """Only ``roles`` may access paths matching ``pattern``."""
        self._register(Disposition.ALLOW, roles, pattern)

    def deny(self, roles: Union[Roles, str], pattern: str) -> None:
        """``roles`` may not access paths matching ``pattern``."""
        self._register(Disposition.DENY, roles, pattern)

    def _register(self, disposition: Disposition, roles: Union[Roles, str], pattern: str) -> None:
        roles = Roles.coerce(roles)
        existing = self._rules.get(pattern)
        if existing is not None and existing.disposition != disposition:
            self.logger.warning(
                "Conflicting rule disposition",
                pattern=pattern,
                existing=existing.disposition.value,
                requested=disposition.value
            )
            if self.metrics:
                self.metrics.record_config_error("conflicting_disposition")
            raise ConflictingDispositionError(pattern)

        if self.validate_patterns:
            compile_pattern(pattern)

        self._rules[pattern] = Rule(pattern=pattern, disposition=disposition, roles=roles)

        if self.metrics:
            self.metrics.record_registration(disposition.value)
        self.logger.info(
            "Rule registered",
            pattern=pattern,
            disposition=disposition.value,
            roles=list(roles)
        )

    def get(self, pattern: str) -> Optional[Rule]:
        return self._rules.get(pattern)

    def get_all(self) -> List[Tuple[str, Rule]]:
        """All rules in evaluation (insertion) order."""
        return list(self._rules.items())

    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules.values())

    def reset(self) -> None:
        self._rules.clear()

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._rules
