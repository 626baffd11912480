"""Gate decisions for protected views."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from accessgate_core.matcher.matcher import evaluate_all, evaluate_any
from accessgate_core.routes.definitions import RouteRequirement, RouteTable
from accessgate_core.session.cache import GrantedPermissionCache

logger = logging.getLogger(__name__)


class GuardDecision(str, Enum):
    """What a protected view should render."""

    loading = "loading"
    unauthorized = "unauthorized"
    authorized = "authorized"


def decide(
    requirement: RouteRequirement,
    granted: Sequence[str] | None,
    *,
    is_loading: bool = False,
    org_admin: bool = False,
) -> GuardDecision:
    """Combine the org-admin flag and flat permission checks into one decision.

    Order: org-admin requirement, then public routes, then loading, then the
    permission check (all-of when ``check_all``, otherwise any-of).
    """
    if requirement.require_org_admin and not org_admin:
        return GuardDecision.unauthorized
    if not requirement.permissions:
        return GuardDecision.authorized
    if is_loading or granted is None:
        return GuardDecision.loading

    check = evaluate_all if requirement.check_all else evaluate_any
    if check(requirement.permissions, granted):
        return GuardDecision.authorized
    return GuardDecision.unauthorized


class AccessGuard:
    """Looks up a path's requirements and evaluates them for a principal."""

    def __init__(self, table: RouteTable, cache: GrantedPermissionCache) -> None:
        self._table = table
        self._cache = cache

    def peek(self, path: str, principal_id: str, *, org_admin: bool = False) -> GuardDecision:
        """Decide from cached permissions only; ``loading`` if none are cached yet."""
        granted = self._cache.peek(principal_id)
        return decide(self._table.get(path), granted, org_admin=org_admin)

    async def check(self, path: str, principal_id: str, *, org_admin: bool = False) -> GuardDecision:
        requirement = self._table.get(path)
        if requirement.is_public:
            return GuardDecision.authorized
        granted = None
        if requirement.permissions:
            granted = await self._cache.get(principal_id)
        decision = decide(requirement, granted, org_admin=org_admin)
        logger.debug("Guard %s for %s on %s", decision.value, principal_id, path)
        return decision
