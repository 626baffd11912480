"""Shared test fixtures for AccessGate."""

import asyncio
from collections.abc import Sequence

import pytest
from unittest.mock import AsyncMock, MagicMock

from accessgate_core.config.models import AccessGateConfig
from accessgate_core.interfaces.access import (
    AccessCheckProvider,
    AccessCheckResult,
    RelationKind,
    Resource,
)
from accessgate_core.interfaces.identity import ApplicationPermissionProvider


class FakeAccessCheckProvider:
    """In-memory provider: fixed allowed ids per relation, optional failures and gates.

    ``gates`` holds an asyncio.Event per relation; a call for a gated relation
    waits until the event is set, which lets tests control completion order.
    """

    def __init__(
        self,
        allowed: dict[RelationKind, set[str]] | None = None,
        failures: dict[RelationKind, Exception] | None = None,
    ) -> None:
        self.allowed = allowed or {}
        self.failures = failures or {}
        self.gates: dict[RelationKind, asyncio.Event] = {}
        self.calls: list[tuple[RelationKind, tuple[Resource, ...]]] = []

    async def check_access(
        self, relation: RelationKind, resources: Sequence[Resource]
    ) -> list[AccessCheckResult]:
        self.calls.append((relation, tuple(resources)))
        # snapshot before waiting so a later reconfiguration doesn't leak in
        allowed = set(self.allowed.get(relation, set()))
        failure = self.failures.get(relation)
        gate = self.gates.get(relation)
        if gate is not None:
            await gate.wait()
        if failure is not None:
            raise failure
        return [
            AccessCheckResult(resource=r, allowed=True)
            for r in resources
            if r.id in allowed
        ]


@pytest.fixture
def sample_resources():
    """A root workspace and two children."""
    return [
        Resource(id="ws-root", type="workspace"),
        Resource(id="ws-a", type="workspace"),
        Resource(id="ws-b", type="workspace"),
    ]


@pytest.fixture
def fake_provider():
    return FakeAccessCheckProvider()


@pytest.fixture
def mock_access_provider():
    provider = MagicMock(spec=AccessCheckProvider)
    provider.check_access = AsyncMock(return_value=[])
    return provider


@pytest.fixture
def mock_identity_provider():
    provider = MagicMock(spec=ApplicationPermissionProvider)
    provider.get_granted_permissions = AsyncMock(
        return_value=["rbac:role:read", "rbac:group:*", "inventory:groups:read"]
    )
    return provider


@pytest.fixture
def sample_config():
    return AccessGateConfig()
