"""Route permission definitions and the access guard."""

from accessgate_core.routes.definitions import (
    RouteDefinition,
    RouteRequirement,
    RouteTable,
    flatten_route_definitions,
    load_route_definitions,
    normalize_path,
)
from accessgate_core.routes.guard import AccessGuard, GuardDecision, decide

__all__ = [
    "AccessGuard",
    "GuardDecision",
    "RouteDefinition",
    "RouteRequirement",
    "RouteTable",
    "decide",
    "flatten_route_definitions",
    "load_route_definitions",
    "normalize_path",
]
