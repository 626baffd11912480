"""Flat wildcard permission matching."""

from accessgate_core.matcher.matcher import (
    WILDCARD,
    PermissionMatcher,
    evaluate_all,
    evaluate_any,
    matches,
)

__all__ = ["WILDCARD", "PermissionMatcher", "evaluate_all", "evaluate_any", "matches"]
