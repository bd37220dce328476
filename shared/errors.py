"""
Shared error handling for the Access Firewall.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class FirewallException(Exception):
    """Base exception for firewall errors."""

    status_code = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class ConfigurationError(FirewallException):
    """Firewall configuration errors."""

    def __init__(self, message: str = "Invalid firewall configuration",
                 details: Optional[Dict[str, Any]] = None, code: str = "CONFIGURATION_ERROR"):
        super().__init__(code, message, details)


class ConflictingDispositionError(ConfigurationError):
    """A pattern cannot carry an allow-list and a deny-list at the same time."""

    MESSAGE = "Cannot allow and deny at the same time : %s"

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(
            self.MESSAGE % pattern,
            {"pattern": pattern},
            code="CONFLICTING_DISPOSITION"
        )


class SetupIncompleteError(ConfigurationError):
    """Evaluation attempted without a role or a general default route."""

    status_code = 500

    def __init__(self, message: str = "role or default route not set",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details, code="SETUP_INCOMPLETE")


class PatternError(ConfigurationError):
    """A URI pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__(
            f"Invalid URI pattern {pattern!r}: {reason}",
            {"pattern": pattern, "reason": reason},
            code="PATTERN_ERROR"
        )
