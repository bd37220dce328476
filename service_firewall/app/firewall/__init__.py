"""
Firewall package: the access filter facade and its configuration snapshot.
"""

from .service import FirewallService
from .snapshot import FirewallSnapshot

__all__ = ["FirewallService", "FirewallSnapshot"]
