"""AccessGate Core - authorization decision engine for flat and resource-scoped checks."""

from accessgate_core.aggregator import PermissionAggregator, PermissionRecord
from accessgate_core.config import AccessGateConfig, load_config
from accessgate_core.errors import ProviderUnavailableError
from accessgate_core.interfaces import (
    AccessCheckProvider,
    AccessCheckResult,
    ApplicationPermissionProvider,
    RelationKind,
    Resource,
)
from accessgate_core.matcher import PermissionMatcher, evaluate_all, evaluate_any, matches
from accessgate_core.resolver import ResolutionState, ResourceAccessResolver
from accessgate_core.routes import AccessGuard, GuardDecision, RouteTable
from accessgate_core.session import GrantedPermissionCache

__version__ = "0.1.0"

__all__ = [
    "AccessCheckProvider",
    "AccessCheckResult",
    "AccessGateConfig",
    "AccessGuard",
    "ApplicationPermissionProvider",
    "GrantedPermissionCache",
    "GuardDecision",
    "PermissionAggregator",
    "PermissionMatcher",
    "PermissionRecord",
    "ProviderUnavailableError",
    "RelationKind",
    "ResolutionState",
    "Resource",
    "ResourceAccessResolver",
    "RouteTable",
    "evaluate_all",
    "evaluate_any",
    "load_config",
    "matches",
]
