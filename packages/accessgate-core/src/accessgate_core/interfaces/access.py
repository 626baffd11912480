"""Access-check provider interface and models."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class RelationKind(str, Enum):
    """Action verbs checkable against a single resource."""

    view = "view"
    edit = "edit"
    delete = "delete"
    create = "create"
    move = "move"
    rename = "rename"


class Reporter(BaseModel):
    """The system that reported a resource to the access-check service."""

    model_config = ConfigDict(frozen=True)

    type: str = "rbac"


class Resource(BaseModel):
    """An addressable protected entity.

    The id is allowed to be empty here so that provider results can be parsed
    as-is; empty ids are never treated as allowed.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    type: str = "workspace"
    reporter: Reporter = Field(default_factory=Reporter)


class AccessCheckResult(BaseModel):
    """Outcome of evaluating one (relation, resource) pair."""

    model_config = ConfigDict(frozen=True)

    resource: Resource
    allowed: StrictBool = False


@runtime_checkable
class AccessCheckProvider(Protocol):
    """Relation-scoped allow/deny decisions for a batch of resources.

    Implementations receive a non-empty resource list. They may return at most
    one result per input resource and may omit resources entirely; an omitted
    resource is denied.
    """

    async def check_access(
        self, relation: RelationKind, resources: Sequence[Resource]
    ) -> list[AccessCheckResult]: ...
