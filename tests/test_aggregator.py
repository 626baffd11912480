"""Tests for PermissionAggregator: records, aggregate flags, memoized composition."""

from __future__ import annotations

import pytest

from accessgate_core.aggregator import (
    PermissionAggregator,
    PermissionRecord,
    build_record,
    compose_with_resources,
)
from accessgate_core.interfaces.access import AccessCheckResult, RelationKind, Resource
from accessgate_core.resolver import ResourceAccessResolver


@pytest.fixture()
def allowed_sets():
    return {
        RelationKind.view: frozenset({"ws-root", "ws-a", "ws-b"}),
        RelationKind.edit: frozenset({"ws-a"}),
        RelationKind.create: frozenset({"ws-root"}),
    }


@pytest.fixture()
def aggregator(allowed_sets) -> PermissionAggregator:
    return PermissionAggregator(allowed_sets)


# -- PermissionRecord ----------------------------------------------------------


def test_record_defaults_every_relation_to_false():
    record = PermissionRecord()
    assert all(value is False for value in record.as_dict().values())
    assert set(record.as_dict()) == set(RelationKind)


def test_record_item_access_by_relation():
    record = PermissionRecord(edit=True)
    assert record[RelationKind.edit] is True
    assert record["edit"] is True
    assert record[RelationKind.move] is False


def test_record_is_frozen():
    record = PermissionRecord()
    with pytest.raises(Exception):
        record.edit = True


# -- has_permission / permissions_for -----------------------------------------


def test_has_permission(aggregator: PermissionAggregator):
    assert aggregator.has_permission("ws-a", RelationKind.edit) is True
    assert aggregator.has_permission("ws-b", RelationKind.edit) is False
    assert aggregator.has_permission("ws-a", "view") is True


def test_has_permission_for_unresolved_relation(aggregator: PermissionAggregator):
    assert aggregator.has_permission("ws-a", RelationKind.rename) is False


def test_permissions_for(aggregator: PermissionAggregator):
    record = aggregator.permissions_for("ws-a")
    assert record.view is True
    assert record.edit is True
    assert record.create is False
    assert record.delete is False
    assert record.move is False
    assert record.rename is False


def test_permissions_for_unknown_id_is_all_false(aggregator: PermissionAggregator):
    record = aggregator.permissions_for("never-seen")
    assert record == PermissionRecord()


def test_permissions_for_is_cached(aggregator: PermissionAggregator):
    assert aggregator.permissions_for("ws-a") is aggregator.permissions_for("ws-a")


def test_empty_aggregator_denies_everything():
    agg = PermissionAggregator()
    assert agg.permissions_for("ws-a") == PermissionRecord()
    assert not any(agg.any_allowed(r) for r in RelationKind)


# -- Aggregate flags -----------------------------------------------------------


def test_any_allowed(aggregator: PermissionAggregator):
    assert aggregator.any_allowed(RelationKind.create) is True
    assert aggregator.any_allowed(RelationKind.delete) is False
    assert aggregator.any_allowed("view") is True


def test_root_allowed(aggregator: PermissionAggregator):
    assert aggregator.root_allowed(RelationKind.create, "ws-root") is True
    assert aggregator.root_allowed(RelationKind.edit, "ws-root") is False


# -- compose_with_resources ----------------------------------------------------


def test_compose_pairs_each_resource(allowed_sets):
    resources = [Resource(id="ws-a"), Resource(id="ws-b")]
    composed = compose_with_resources(resources, allowed_sets)
    assert [res.id for res, _ in composed] == ["ws-a", "ws-b"]
    assert composed[0][1].edit is True
    assert composed[1][1].edit is False


def test_compose_is_pure(allowed_sets):
    resources = [Resource(id="ws-a")]
    assert compose_with_resources(resources, allowed_sets) == compose_with_resources(resources, allowed_sets)


def test_compose_memoized_on_input_identity(aggregator: PermissionAggregator, allowed_sets):
    resources = [Resource(id="ws-a"), Resource(id="ws-root")]
    first = aggregator.compose_with_resources(resources, allowed_sets)
    second = aggregator.compose_with_resources(resources, allowed_sets)
    assert first is second


def test_compose_recomputed_when_input_changes(aggregator: PermissionAggregator, allowed_sets):
    resources = [Resource(id="ws-a")]
    first = aggregator.compose_with_resources(resources, allowed_sets)

    other_resources = list(resources)
    second = aggregator.compose_with_resources(other_resources, allowed_sets)
    assert second is not first
    assert second == first

    narrowed = {**allowed_sets, RelationKind.edit: frozenset()}
    third = aggregator.compose_with_resources(other_resources, narrowed)
    assert third[0][1].edit is False


def test_compose_defaults_to_own_sets(aggregator: PermissionAggregator):
    resources = [Resource(id="ws-root")]
    composed = aggregator.compose_with_resources(resources)
    assert composed[0][1].create is True
    assert aggregator.compose_with_resources(resources) is composed


def test_build_record_matches_permissions_for(aggregator: PermissionAggregator, allowed_sets):
    assert build_record("ws-b", allowed_sets) == aggregator.permissions_for("ws-b")


# -- From a resolver state -----------------------------------------------------


@pytest.mark.asyncio
async def test_omitted_resource_has_no_edit(mock_access_provider):
    a, b = Resource(id="a"), Resource(id="b")
    mock_access_provider.check_access.return_value = [AccessCheckResult(resource=a, allowed=True)]
    resolver = ResourceAccessResolver(mock_access_provider)

    state = await resolver.resolve([RelationKind.edit], [a, b])
    aggregator = PermissionAggregator.for_state(state)

    assert aggregator.permissions_for("a").edit is True
    assert aggregator.permissions_for("b").edit is False


@pytest.mark.asyncio
async def test_empty_collection_nothing_creatable(mock_access_provider):
    resolver = ResourceAccessResolver(mock_access_provider)

    state = await resolver.resolve([RelationKind.create], [])
    aggregator = PermissionAggregator.for_state(state)

    assert state.is_loading is False
    assert aggregator.any_allowed(RelationKind.create) is False
    mock_access_provider.check_access.assert_not_called()


@pytest.mark.asyncio
async def test_error_distinguished_from_denial(fake_provider, sample_resources):
    fake_provider.failures = {RelationKind.delete: RuntimeError("down")}
    resolver = ResourceAccessResolver(fake_provider)

    state = await resolver.resolve([RelationKind.delete, RelationKind.move], sample_resources)
    aggregator = PermissionAggregator.for_state(state)

    assert aggregator.has_permission("ws-a", RelationKind.delete) is False
    assert aggregator.has_error(RelationKind.delete) is True
    assert aggregator.has_permission("ws-a", RelationKind.move) is False
    assert aggregator.has_error(RelationKind.move) is False
