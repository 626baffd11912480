"""Identity service interface and models."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class GrantedPermission(BaseModel):
    """One entry of a principal's access listing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    permission: str
    resource_definitions: list[dict[str, Any]] = Field(
        default_factory=list, alias="resourceDefinitions"
    )


@runtime_checkable
class ApplicationPermissionProvider(Protocol):
    """Supplies the flat permission strings granted to a principal."""

    async def get_granted_permissions(self, principal_id: str) -> list[str]: ...
