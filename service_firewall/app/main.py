"""
Firewall decision service for the Access Firewall.

Exposes the configured rule table and a decision endpoint so gateways and
operators can ask what the firewall would do for a role and path.
"""

from typing import Callable, Dict, Any, List, Optional

from fastapi import Body
from pydantic import BaseModel, Field

from shared.base_service import BaseService
from shared.config import FirewallSettings
from .firewall.service import FirewallService
from .provider import create_firewall


class FirewallCheckRequest(BaseModel):
    """Request model for a firewall decision."""
    role: Optional[str] = Field(None, description="Requester role")
    path: str = Field(..., min_length=1, description="Requested path or URL")


class FirewallCheckResponse(BaseModel):
    """Response model for a firewall decision."""
    allowed: bool = Field(..., description="Whether the request may proceed")
    redirect_to: Optional[str] = Field(None, description="Redirect target when restricted")
    matched_pattern: Optional[str] = Field(None, description="Pattern that restricted the request")


class RuleResponse(BaseModel):
    """Response model for a single rule."""
    pattern: str
    disposition: str
    roles: List[str]


class RuleListResponse(BaseModel):
    """Response model for the rule table."""
    configured: bool
    rules: List[RuleResponse]
    default_uri: str
    role_defaults: Dict[str, str]
    host: str


class FirewallDecisionService(BaseService):
    """Firewall decision service implementation."""

    def __init__(self, configure: Optional[Callable[[FirewallService], None]] = None,
                 settings: Optional[FirewallSettings] = None):
        super().__init__("firewall", settings)

        self.firewall = create_firewall(self.config, metrics=self.metrics)
        if configure is not None:
            configure(self.firewall)

        self._setup_firewall_routes()

    def _setup_firewall_routes(self):
        """Set up firewall-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "firewall",
                "message": "Access Firewall - Decision Service",
                "version": "1.0.0",
                "capabilities": ["rules", "decisions", "redirects"]
            }

        @self.app.get("/firewall/rules", response_model=RuleListResponse)
        async def get_rules():
            """Rules in evaluation order with the default routes."""
            return self.firewall.snapshot.to_dict()

        @self.app.post("/firewall/check", response_model=FirewallCheckResponse)
        async def check(payload: FirewallCheckRequest = Body(...)):
            """Decide whether a role may reach a path."""
            result = self.firewall.evaluate(payload.role, payload.path)
            return FirewallCheckResponse(
                allowed=result.allowed,
                redirect_to=result.redirect_to,
                matched_pattern=result.matched_pattern
            )

    async def _check_dependencies(self) -> Dict[str, Any]:
        return {"firewall": "configured" if self.firewall.is_configured else "unconfigured"}


def create_app(configure: Optional[Callable[[FirewallService], None]] = None,
               settings: Optional[FirewallSettings] = None):
    """Create firewall decision service application."""
    service = FirewallDecisionService(configure, settings)
    return service.app


if __name__ == "__main__":
    service = FirewallDecisionService()
    service.run()
