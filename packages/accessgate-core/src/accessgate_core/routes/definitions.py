"""Route permission definitions and their flattened lookup table."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from accessgate_core.config.models import AccessGateConfig

logger = logging.getLogger(__name__)


class RouteDefinition(BaseModel):
    """A route and the permissions needed to open it.

    Child paths that don't start with ``/`` are relative to the parent.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    path: str
    permissions: list[str] = Field(default_factory=list)
    require_org_admin: bool = False
    check_all: bool = True
    inherit_permissions: bool = True
    child_routes: list[RouteDefinition] = Field(default_factory=list)


class RouteRequirement(BaseModel):
    """Effective requirements for a single normalized path."""

    model_config = ConfigDict(frozen=True)

    permissions: tuple[str, ...] = ()
    require_org_admin: bool = False
    check_all: bool = True
    inherit_permissions: bool = True

    @property
    def is_public(self) -> bool:
        return not self.permissions and not self.require_org_admin


def normalize_path(path: str) -> str:
    """Strip a trailing ``/*`` and trailing slash. Empty becomes ``/``."""
    path = re.sub(r"/\*$", "", path)
    path = re.sub(r"/$", "", path)
    return path or "/"


def flatten_route_definitions(
    routes: Iterable[RouteDefinition],
    parent_path: str = "",
    parent_permissions: Sequence[str] = (),
) -> dict[str, RouteRequirement]:
    """Walk the route tree into ``{path: requirement}``.

    A child's effective permissions are its parent's plus its own, unless it
    opts out with ``inherit_permissions=False``.
    """
    result: dict[str, RouteRequirement] = {}
    for route in routes:
        full_path = route.path if route.path.startswith("/") else f"{parent_path}/{route.path}"
        path = normalize_path(full_path)

        if route.inherit_permissions:
            effective = (*parent_permissions, *route.permissions)
        else:
            effective = tuple(route.permissions)

        result[path] = RouteRequirement(
            permissions=effective,
            require_org_admin=route.require_org_admin,
            check_all=route.check_all,
            inherit_permissions=route.inherit_permissions,
        )
        if route.child_routes:
            result.update(flatten_route_definitions(route.child_routes, path, effective))
    return result


class RouteTable:
    """Precomputed path lookup over a tree of route definitions."""

    def __init__(self, routes: Iterable[RouteDefinition]) -> None:
        self._requirements = flatten_route_definitions(routes)

    @classmethod
    def from_config(cls, config: AccessGateConfig) -> RouteTable:
        """Load ``routes.definitions_path``; no path gives an empty table."""
        definitions_path = config.routes.definitions_path
        if not definitions_path:
            return cls([])
        return cls(load_route_definitions(definitions_path))

    def __contains__(self, path: str) -> bool:
        return normalize_path(path) in self._requirements

    def __len__(self) -> int:
        return len(self._requirements)

    def paths(self) -> list[str]:
        return list(self._requirements)

    def get(self, path: str) -> RouteRequirement:
        """Requirements for ``path``. Unknown paths are public."""
        requirement = self._requirements.get(normalize_path(path))
        if requirement is None:
            logger.warning("No permissions found for path: %s", path)
            return RouteRequirement()
        return requirement


def load_route_definitions(path: str | Path) -> list[RouteDefinition]:
    """Read route definitions from YAML: a list, or a mapping with a ``routes`` key."""
    path = Path(path)
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        return []
    if isinstance(raw, dict):
        raw = raw.get("routes", [])
    if not isinstance(raw, list):
        raise ValueError(f"Invalid route definitions in {path}: expected a list of routes")
    try:
        return [RouteDefinition.model_validate(item) for item in raw]
    except ValidationError as e:
        raise ValueError(f"Invalid route definitions in {path}: {e}") from e
