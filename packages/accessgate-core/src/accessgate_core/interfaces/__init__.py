"""Contracts for the external collaborators of the decision engine."""

from accessgate_core.interfaces.access import (
    AccessCheckProvider,
    AccessCheckResult,
    RelationKind,
    Reporter,
    Resource,
)
from accessgate_core.interfaces.identity import ApplicationPermissionProvider, GrantedPermission

__all__ = [
    "AccessCheckProvider",
    "AccessCheckResult",
    "ApplicationPermissionProvider",
    "GrantedPermission",
    "RelationKind",
    "Reporter",
    "Resource",
]
