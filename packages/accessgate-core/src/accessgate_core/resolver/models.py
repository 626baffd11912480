"""Snapshot types published by the resource access resolver."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from accessgate_core.interfaces.access import RelationKind

_EMPTY: frozenset[str] = frozenset()


class RelationStatus(str, Enum):
    """Lifecycle of one relation within a resolution cycle."""

    init = "init"
    batching = "batching"
    resolved = "resolved"
    errored = "errored"


def _freeze(mapping: Mapping | None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class ResolutionState:
    """Read-only view of the resolver's output for one generation.

    Every change produces a new instance with new mappings, so consumers can
    detect updates by identity.
    """

    generation: int
    statuses: Mapping[RelationKind, RelationStatus] = field(default_factory=dict)
    allowed: Mapping[RelationKind, frozenset[str]] = field(default_factory=dict)
    errors: Mapping[RelationKind, Exception] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "statuses", _freeze(self.statuses))
        object.__setattr__(self, "allowed", _freeze(self.allowed))
        object.__setattr__(self, "errors", _freeze(self.errors))

    @classmethod
    def initial(cls, relations: Iterable[RelationKind] = ()) -> ResolutionState:
        return cls(generation=0, statuses={r: RelationStatus.init for r in relations})

    @property
    def relations(self) -> tuple[RelationKind, ...]:
        return tuple(self.statuses)

    @property
    def is_loading(self) -> bool:
        return any(s is RelationStatus.batching for s in self.statuses.values())

    def allowed_for(self, relation: RelationKind) -> frozenset[str]:
        return self.allowed.get(relation, _EMPTY)

    def error_for(self, relation: RelationKind) -> Exception | None:
        return self.errors.get(relation)

    def with_relation(
        self,
        relation: RelationKind,
        status: RelationStatus,
        *,
        allowed: frozenset[str] | None = None,
        error: Exception | None = None,
    ) -> ResolutionState:
        """Return a copy with one relation's outcome replaced."""
        statuses = {**self.statuses, relation: status}
        allowed_map = dict(self.allowed)
        errors = dict(self.errors)
        if allowed is not None:
            allowed_map[relation] = allowed
        if error is None:
            errors.pop(relation, None)
        else:
            errors[relation] = error
        return ResolutionState(
            generation=self.generation,
            statuses=statuses,
            allowed=allowed_map,
            errors=errors,
        )
