"""
Firewall service: the access filter facade.
"""

import threading
from contextlib import contextmanager
from typing import Any, List, Mapping, Optional, Tuple, Union

from shared.errors import ConfigurationError, SetupIncompleteError
from shared.logging import get_logger
from shared.metrics import MetricsCollector, get_metrics_collector
from ..rules.models import EvaluationResult, Roles, Rule
from ..rules.store import RuleStore
from ..routing.defaults import DefaultRouteTable, Redirector
from ..routing.resolver import RouteResolver, resolve_decoded
from ..interfaces import RequestContext, ResponseBuilder
from .snapshot import FirewallSnapshot


class FirewallService:
    """Decides whether a role may reach a URI, and where to send it if not.

    Configure with ``allow``/``deny`` and the default-route setters, then call
    ``evaluate`` per request. Patterns are regular expressions searched
    anywhere in the path (unanchored); they are walked in registration order
    and the first one that restricts the role wins.

    Mutations are serialised and publish a fresh immutable snapshot, so
    evaluations running concurrently always see one consistent configuration.
    """

    def __init__(
        self,
        full_uris: bool = False,
        host: str = "",
        validate_patterns: bool = False,
        route_resolver: Optional[RouteResolver] = None,
        request_context: Optional[RequestContext] = None,
        metrics: Optional[MetricsCollector] = None
    ):
        self.logger = get_logger("firewall.service")
        self.full_uris = full_uris
        self.route_resolver = route_resolver
        self.request_context = request_context
        self.metrics = metrics or get_metrics_collector("firewall")
        self.redirector = Redirector(host)

        self._lock = threading.Lock()
        self._store = RuleStore(validate_patterns=validate_patterns, metrics=self.metrics)
        self._defaults = DefaultRouteTable()
        self._snapshot = FirewallSnapshot(redirector=self.redirector)

    @property
    def host(self) -> str:
        return self.redirector.host

    @property
    def snapshot(self) -> FirewallSnapshot:
        return self._snapshot

    @property
    def is_configured(self) -> bool:
        return self._snapshot.is_configured

    @contextmanager
    def _mutate(self):
        with self._lock:
            yield
            self._snapshot = FirewallSnapshot(
                rules=self._store.rules(),
                routes=self._defaults.freeze(),
                redirector=self.redirector
            )

    # Rules

    def allow(self, roles: Union[Roles, str], pattern: str) -> "FirewallService":
        """Only ``roles`` may access paths matching ``pattern``.

        A single role string is treated as ``Roles.one(role)``.
        Calling again with the same pattern replaces its allowed roles.
        """
        with self._mutate():
            self._store.allow(roles, pattern)
        return self

    def deny(self, roles: Union[Roles, str], pattern: str) -> "FirewallService":
        """``roles`` may not access paths matching ``pattern``.

        Calling again with the same pattern replaces its denied roles.
        """
        with self._mutate():
            self._store.deny(roles, pattern)
        return self

    def allow_route(self, roles: Union[Roles, str], name: str,
                    params: Optional[Mapping[str, str]] = None) -> "FirewallService":
        """Allow a named route. Params may be regex fragments."""
        return self.allow(roles, self._resolve_route(name, params))

    def deny_route(self, roles: Union[Roles, str], name: str,
                   params: Optional[Mapping[str, str]] = None) -> "FirewallService":
        """Deny a named route. Params may be regex fragments."""
        return self.deny(roles, self._resolve_route(name, params))

    def get_all(self) -> List[Tuple[str, Rule]]:
        return [(rule.pattern, rule) for rule in self._snapshot.rules]

    # Default routes

    def set_default(self, uri: str) -> "FirewallService":
        with self._mutate():
            self._defaults.set_default(uri)
        return self

    def set_default_for_role(self, role: str, uri: str) -> "FirewallService":
        with self._mutate():
            self._defaults.set_default_for_role(role, uri)
        return self

    def set_default_route(self, name: str,
                          params: Optional[Mapping[str, str]] = None) -> "FirewallService":
        return self.set_default(self._resolve_route(name, params))

    def set_default_route_for_role(self, role: str, name: str,
                                   params: Optional[Mapping[str, str]] = None) -> "FirewallService":
        return self.set_default_for_role(role, self._resolve_route(name, params))

    def get_default(self, role: Optional[str] = None) -> str:
        return self._snapshot.get_default(role)

    def resolve_redirect_target(self, role: Optional[str]) -> str:
        return self._snapshot.resolve_redirect_target(role)

    def reset(self) -> None:
        """Drop every rule and default route."""
        with self._mutate():
            self._store.reset()
            self._defaults.reset()
        self.logger.info("Firewall reset")

    # Evaluation

    def is_restricted(self, path: str, role: str) -> bool:
        return self._snapshot.find_restricting_rule(path, role) is not None

    def evaluate(self, role: Optional[str], path: Optional[str] = None,
                 request_context: Optional[RequestContext] = None) -> EvaluationResult:
        """Decide whether ``role`` may proceed to ``path``.

        Without a ``path`` (``None`` or empty), the current request's path
        (or full URL when ``full_uris`` is set) is read from the request
        context.

        Raises:
            SetupIncompleteError: no role given, or no general default route.
        """
        snapshot = self._snapshot

        if role is None or not snapshot.is_configured:
            self.metrics.record_config_error("setup_incomplete")
            raise SetupIncompleteError(details={
                "role_set": role is not None,
                "default_set": snapshot.is_configured
            })

        if not path:
            path = self._current_uri(request_context or self.request_context)

        with self.metrics.time_evaluation():
            rule = snapshot.find_restricting_rule(path, role)

        if rule is None:
            result = EvaluationResult.proceed()
            self.logger.debug("Request allowed", path=path, role=role)
        else:
            result = EvaluationResult.redirect(
                snapshot.resolve_redirect_target(role),
                matched_pattern=rule.pattern
            )
            self.logger.info(
                "Request restricted",
                path=path,
                role=role,
                pattern=rule.pattern,
                redirect_to=result.redirect_to
            )

        self.metrics.record_decision(result.decision)
        return result

    def run(self, role: Optional[str], path: Optional[str] = None,
            request_context: Optional[RequestContext] = None,
            response_builder: Optional[ResponseBuilder] = None) -> Any:
        """Evaluate and return True, or the redirect built by ``response_builder``.

        Without a response builder the redirect target string is returned.
        """
        result = self.evaluate(role, path, request_context)
        if result.allowed:
            return True
        if response_builder is None:
            return result.redirect_to
        return response_builder.redirect(result.redirect_to)

    def _current_uri(self, request_context: Optional[RequestContext]) -> str:
        if request_context is None:
            raise SetupIncompleteError("no path given and no request context available")
        if self.full_uris:
            return request_context.get_full_url()
        return request_context.get_path()

    def _resolve_route(self, name: str, params: Optional[Mapping[str, str]]) -> str:
        if self.route_resolver is None:
            raise ConfigurationError("No route resolver configured", {"route": name})
        return resolve_decoded(self.route_resolver, name, params, absolute=self.full_uris)
