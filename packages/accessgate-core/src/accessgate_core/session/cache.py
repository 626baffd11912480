"""Per-principal cache of granted permission strings."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from accessgate_core.interfaces.identity import ApplicationPermissionProvider

if TYPE_CHECKING:
    from accessgate_core.config.models import AccessGateConfig

logger = logging.getLogger(__name__)


class GrantedPermissionCache:
    """Fetches a principal's granted permissions once per cache window.

    Concurrent callers for the same principal share a single fetch. Failed
    fetches are not cached.
    """

    def __init__(
        self,
        provider: ApplicationPermissionProvider,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._provider = provider
        self._ttl = ttl_seconds
        self._clock = clock
        # principal_id -> (permissions, fetched_at)
        self._entries: dict[str, tuple[tuple[str, ...], float]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    @classmethod
    def from_config(
        cls, config: AccessGateConfig, provider: ApplicationPermissionProvider
    ) -> GrantedPermissionCache:
        return cls(provider, ttl_seconds=config.cache.ttl_seconds)

    def _fresh(self, principal_id: str) -> tuple[str, ...] | None:
        entry = self._entries.get(principal_id)
        if entry is None:
            return None
        permissions, fetched_at = entry
        if self._clock() - fetched_at >= self._ttl:
            return None
        return permissions

    def peek(self, principal_id: str) -> tuple[str, ...] | None:
        """Cached permissions if still inside the window, without fetching."""
        return self._fresh(principal_id)

    async def get(self, principal_id: str) -> tuple[str, ...]:
        cached = self._fresh(principal_id)
        if cached is not None:
            return cached

        lock = self._locks.setdefault(principal_id, asyncio.Lock())
        async with lock:
            cached = self._fresh(principal_id)
            if cached is not None:
                return cached
            permissions = tuple(await self._provider.get_granted_permissions(principal_id))
            self._entries[principal_id] = (permissions, self._clock())
            logger.debug("Cached %d permission(s) for %s", len(permissions), principal_id)
            return permissions

    def invalidate(self, principal_id: str | None = None) -> None:
        """Drop one principal's entry, or every entry when no id is given."""
        if principal_id is None:
            self._entries.clear()
        else:
            self._entries.pop(principal_id, None)
