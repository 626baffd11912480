"""Per-resource permission records and aggregate flags."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from pydantic import BaseModel, ConfigDict

from accessgate_core.interfaces.access import RelationKind, Resource
from accessgate_core.resolver.models import ResolutionState

_EMPTY: frozenset[str] = frozenset()

AllowedSets = Mapping[RelationKind, frozenset[str]]


class PermissionRecord(BaseModel):
    """Every relation's outcome for one resource. Unresolved relations are False."""

    model_config = ConfigDict(frozen=True)

    view: bool = False
    edit: bool = False
    delete: bool = False
    create: bool = False
    move: bool = False
    rename: bool = False

    def __getitem__(self, relation: RelationKind | str) -> bool:
        return getattr(self, RelationKind(relation).value)

    def as_dict(self) -> dict[RelationKind, bool]:
        return {r: self[r] for r in RelationKind}


def build_record(resource_id: str, per_relation_sets: AllowedSets) -> PermissionRecord:
    """Test ``resource_id`` against every relation's allowed set."""
    return PermissionRecord(
        **{r.value: resource_id in per_relation_sets.get(r, _EMPTY) for r in RelationKind}
    )


def compose_with_resources(
    resources: Sequence[Resource], per_relation_sets: AllowedSets
) -> tuple[tuple[Resource, PermissionRecord], ...]:
    """Pair each resource with its permission record."""
    return tuple((res, build_record(res.id, per_relation_sets)) for res in resources)


class PermissionAggregator:
    """Answers permission questions from one set of resolved allowed-id sets.

    An instance is immutable; build a new one (usually via ``for_state``)
    whenever the resolver publishes a new state.
    """

    def __init__(
        self,
        allowed: AllowedSets | None = None,
        errors: Mapping[RelationKind, Exception] | None = None,
    ) -> None:
        self._allowed: AllowedSets = dict(allowed or {})
        self._errors = dict(errors or {})
        self._records: dict[str, PermissionRecord] = {}
        self._composed: tuple[object, object, tuple] | None = None

    @classmethod
    def for_state(cls, state: ResolutionState) -> PermissionAggregator:
        return cls(state.allowed, state.errors)

    @property
    def allowed(self) -> AllowedSets:
        return self._allowed

    def has_permission(self, resource_id: str, relation: RelationKind | str) -> bool:
        return resource_id in self._allowed.get(RelationKind(relation), _EMPTY)

    def permissions_for(self, resource_id: str) -> PermissionRecord:
        record = self._records.get(resource_id)
        if record is None:
            record = build_record(resource_id, self._allowed)
            self._records[resource_id] = record
        return record

    def any_allowed(self, relation: RelationKind | str) -> bool:
        return bool(self._allowed.get(RelationKind(relation), _EMPTY))

    def root_allowed(self, relation: RelationKind | str, root_id: str) -> bool:
        return self.has_permission(root_id, relation)

    def has_error(self, relation: RelationKind | str) -> bool:
        """True if the relation could not be checked, as opposed to checked and denied."""
        return RelationKind(relation) in self._errors

    def compose_with_resources(
        self,
        resources: Sequence[Resource],
        per_relation_sets: AllowedSets | None = None,
    ) -> tuple[tuple[Resource, PermissionRecord], ...]:
        """Memoized ``compose_with_resources`` keyed on input identity."""
        sets = self._allowed if per_relation_sets is None else per_relation_sets
        cached = self._composed
        if cached is not None and cached[0] is resources and cached[1] is sets:
            return cached[2]
        composed = compose_with_resources(resources, sets)
        self._composed = (resources, sets, composed)
        return composed
