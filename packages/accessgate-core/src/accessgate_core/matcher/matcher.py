"""Flat wildcard matching for `<application>:<resourceType>:<action>` permissions."""

from __future__ import annotations

from collections.abc import Iterable

WILDCARD = "*"

_COMPONENT_COUNT = 3


def _split(permission: object) -> tuple[str, str, str] | None:
    """Parse a permission string, or None if it is not well formed."""
    if not isinstance(permission, str):
        return None
    parts = permission.split(":")
    if len(parts) != _COMPONENT_COUNT:
        return None
    return parts[0], parts[1], parts[2]


def matches(granted: str, required: str) -> bool:
    """Return True if the granted permission satisfies the required one.

    Byte-equal strings always match. Otherwise both sides must have exactly
    three components; the application is compared literally and the resource
    type and action of the granted permission may be ``*``.
    """
    if not isinstance(granted, str) or not isinstance(required, str):
        return False
    if granted == required:
        return True

    granted_parts = _split(granted)
    required_parts = _split(required)
    if granted_parts is None or required_parts is None:
        return False

    g_app, g_type, g_action = granted_parts
    r_app, r_type, r_action = required_parts
    return (
        g_app == r_app
        and g_type in (WILDCARD, r_type)
        and g_action in (WILDCARD, r_action)
    )


def evaluate_any(required: Iterable[str], granted: Iterable[str]) -> bool:
    """True if at least one required permission is granted. Empty input is False."""
    granted = tuple(granted)
    return any(matches(g, r) for r in required for g in granted)


def evaluate_all(required: Iterable[str], granted: Iterable[str]) -> bool:
    """True if every required permission is granted. Empty input is True."""
    granted = tuple(granted)
    return all(any(matches(g, r) for g in granted) for r in required)


class PermissionMatcher:
    """Evaluates required permissions against one principal's granted set."""

    def __init__(self, granted: Iterable[str]) -> None:
        self._granted: tuple[str, ...] = tuple(granted)

    @property
    def granted(self) -> tuple[str, ...]:
        return self._granted

    def allows(self, required: str) -> bool:
        return any(matches(g, required) for g in self._granted)

    def allows_any(self, required: Iterable[str]) -> bool:
        return evaluate_any(required, self._granted)

    def allows_all(self, required: Iterable[str]) -> bool:
        return evaluate_all(required, self._granted)
