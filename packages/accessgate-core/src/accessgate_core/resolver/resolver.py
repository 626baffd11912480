"""Batched, generation-tagged resolution of per-relation allowed-id sets."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING

from accessgate_core.interfaces.access import (
    AccessCheckProvider,
    AccessCheckResult,
    RelationKind,
    Resource,
)
from accessgate_core.resolver.models import RelationStatus, ResolutionState

if TYPE_CHECKING:
    from accessgate_core.config.models import AccessGateConfig

logger = logging.getLogger(__name__)

Listener = Callable[[ResolutionState], None]


def build_allowed_set(results: Iterable[AccessCheckResult]) -> frozenset[str]:
    """Collect the ids of explicitly allowed, non-empty resources.

    Omitted resources and ``allowed=False`` entries are both denied.
    """
    return frozenset(
        result.resource.id
        for result in results
        if result.allowed is True and result.resource.id
    )


def _unique_relations(relations: Iterable[RelationKind | str]) -> tuple[RelationKind, ...]:
    return tuple(dict.fromkeys(RelationKind(r) for r in relations))


class ResourceAccessResolver:
    """Issues one provider call per relation and publishes the outcome.

    Each ``resolve`` call starts a new generation. Provider responses that
    arrive for an older generation are dropped, so a slow response for a
    previous resource collection can never overwrite the current one.
    """

    def __init__(
        self,
        provider: AccessCheckProvider,
        relations: Iterable[RelationKind | str] = tuple(RelationKind),
    ) -> None:
        self._provider = provider
        self._relations = _unique_relations(relations)
        self._generation = 0
        self._state = ResolutionState.initial()
        self._listeners: list[Listener] = []

    @classmethod
    def from_config(
        cls, config: AccessGateConfig, provider: AccessCheckProvider
    ) -> ResourceAccessResolver:
        return cls(provider, relations=config.relations)

    @property
    def relations(self) -> tuple[RelationKind, ...]:
        """Relations resolved when ``resolve`` is given none."""
        return self._relations

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def state(self) -> ResolutionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback for every published state. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _publish(self, state: ResolutionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def resolve(
        self,
        relations: Iterable[RelationKind | str] | None,
        resources: Sequence[Resource],
    ) -> ResolutionState:
        """Resolve allowed-id sets for every relation over the whole collection.

        ``relations=None`` uses the resolver's default relations.

        Returns the latest published state once this generation's calls have
        settled. If a newer ``resolve`` started meanwhile, that newer state is
        returned instead.
        """
        requested = self._relations if relations is None else _unique_relations(relations)
        batch = tuple(resources)
        self._generation += 1
        generation = self._generation

        if not batch or not requested:
            self._publish(
                ResolutionState(
                    generation=generation,
                    statuses={r: RelationStatus.resolved for r in requested},
                    allowed={r: frozenset() for r in requested},
                )
            )
            return self._state

        logger.debug(
            "Resolving %d relation(s) over %d resource(s), generation %d",
            len(requested), len(batch), generation,
        )
        self._publish(
            ResolutionState(
                generation=generation,
                statuses={r: RelationStatus.batching for r in requested},
                allowed={r: frozenset() for r in requested},
            )
        )
        try:
            await asyncio.gather(
                *(self._check_relation(generation, relation, batch) for relation in requested)
            )
        except asyncio.CancelledError:
            self._settle_cancelled(generation)
            raise
        return self._state

    def _settle_cancelled(self, generation: int) -> None:
        """Return relations still batching for ``generation`` to ``init``."""
        if not self._is_current(generation):
            return
        pending = [r for r, s in self._state.statuses.items() if s is RelationStatus.batching]
        if not pending:
            return
        logger.debug("Resolution cancelled, generation %d: %d relation(s) unsettled", generation, len(pending))
        state = self._state
        for relation in pending:
            state = state.with_relation(relation, RelationStatus.init, allowed=frozenset())
        self._publish(state)

    async def _check_relation(
        self,
        generation: int,
        relation: RelationKind,
        batch: tuple[Resource, ...],
    ) -> None:
        try:
            results = await self._provider.check_access(relation, batch)
            allowed = build_allowed_set(results)
        except Exception as e:
            if not self._is_current(generation):
                logger.debug("Dropping stale %s failure from generation %d", relation.value, generation)
                return
            logger.warning("Access check for relation %s failed: %s", relation.value, e)
            self._publish(self._state.with_relation(relation, RelationStatus.errored, error=e))
            return

        if not self._is_current(generation):
            logger.debug("Dropping stale %s response from generation %d", relation.value, generation)
            return
        self._publish(self._state.with_relation(relation, RelationStatus.resolved, allowed=allowed))
