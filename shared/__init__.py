"""
Shared utilities for the Access Firewall.

This package aggregates common building blocks consumed by the services:

- config: Firewall settings via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses
- base_service: FastAPI service scaffold with health and metrics routes

Do not import from service_* packages into shared/.
"""
