"""Resource-scoped relation resolution."""

from accessgate_core.resolver.models import RelationStatus, ResolutionState
from accessgate_core.resolver.resolver import ResourceAccessResolver, build_allowed_set

__all__ = ["RelationStatus", "ResolutionState", "ResourceAccessResolver", "build_allowed_set"]
