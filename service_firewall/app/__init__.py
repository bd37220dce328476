"""
Access Firewall application package.

Decides, for a requester's role and a requested URI, whether the request may
proceed and where to redirect it otherwise. It provides:

- app.rules: Rule model, ordered rule store and evaluator.
- app.routing: Default-route table, redirector and named-route lookup.
- app.firewall: The FirewallService facade and its configuration snapshot.
- app.middleware: Starlette request context and the firewall middleware.
- app.provider: Shared-instance wiring for FastAPI applications.
- app.main: Decision service exposing rules and checks over HTTP.

Guidelines:
- Configure rules and default routes before serving traffic.
- Patterns are regexes searched anywhere in the path; order matters.
- Roles are opaque; authentication happens elsewhere.
"""
