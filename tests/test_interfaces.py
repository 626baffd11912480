"""Tests for accessgate_core.interfaces: models, enums, and structural subtyping."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from accessgate_core.interfaces import (
    AccessCheckProvider,
    AccessCheckResult,
    ApplicationPermissionProvider,
    GrantedPermission,
    RelationKind,
    Reporter,
    Resource,
)


# ---------------------------------------------------------------------------
# Enum values
# ---------------------------------------------------------------------------


class TestRelationKindEnum:
    def test_members(self):
        assert [r.value for r in RelationKind] == ["view", "edit", "delete", "create", "move", "rename"]

    def test_coerces_from_string(self):
        assert RelationKind("move") is RelationKind.move

    def test_unknown_rejected(self):
        with pytest.raises(ValueError):
            RelationKind("approve")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TestResourceModel:
    def test_round_trip(self):
        res = Resource(id="ws-1", type="workspace", reporter=Reporter(type="hbi"))
        restored = Resource.model_validate_json(res.model_dump_json())
        assert restored == res

    def test_hashable(self):
        assert len({Resource(id="ws-1"), Resource(id="ws-1")}) == 1


class TestAccessCheckResultModel:
    def test_frozen(self):
        result = AccessCheckResult(resource=Resource(id="ws-1"), allowed=True)
        with pytest.raises(Exception):
            result.allowed = False


class TestGrantedPermissionModel:
    def test_alias_accepted(self):
        entry = GrantedPermission.model_validate(
            {"permission": "rbac:role:read", "resourceDefinitions": [{"attributeFilter": {}}]}
        )
        assert entry.resource_definitions == [{"attributeFilter": {}}]

    def test_field_name_accepted(self):
        entry = GrantedPermission(permission="rbac:role:read", resource_definitions=[])
        assert entry.permission == "rbac:role:read"

    def test_definitions_default_empty(self):
        assert GrantedPermission(permission="rbac:*:*").resource_definitions == []

    def test_dump_by_alias(self):
        dumped = GrantedPermission(permission="rbac:*:*").model_dump(by_alias=True)
        assert dumped == {"permission": "rbac:*:*", "resourceDefinitions": []}


# ---------------------------------------------------------------------------
# Protocol structural subtyping
# ---------------------------------------------------------------------------


class DummyAccessCheck:
    async def check_access(
        self, relation: RelationKind, resources: Sequence[Resource]
    ) -> list[AccessCheckResult]:
        return []


class DummyIdentity:
    async def get_granted_permissions(self, principal_id: str) -> list[str]:
        return []


class TestProtocolSubtyping:
    def test_access_check_protocol(self):
        assert isinstance(DummyAccessCheck(), AccessCheckProvider)

    def test_identity_protocol(self):
        assert isinstance(DummyIdentity(), ApplicationPermissionProvider)

    def test_fake_provider_conforms(self, fake_provider):
        assert isinstance(fake_provider, AccessCheckProvider)

    def test_non_conforming_rejected(self):
        class NotAProvider:
            pass

        assert not isinstance(NotAProvider(), AccessCheckProvider)
        assert not isinstance(NotAProvider(), ApplicationPermissionProvider)
