"""Shared helpers for converting engine models to and from JSON payloads."""

from __future__ import annotations

import os
from typing import Any

import httpx

from accessgate_core.interfaces.access import AccessCheckResult, Reporter, Resource


def resource_to_payload(resource: Resource) -> dict[str, Any]:
    return {
        "id": resource.id,
        "type": resource.type,
        "reporter": {"type": resource.reporter.type},
    }


def payload_to_result(item: dict[str, Any]) -> AccessCheckResult:
    """Parse one result entry. Anything other than a JSON ``true`` is denied."""
    raw = item["resource"]
    reporter = raw.get("reporter") or {}
    resource = Resource(
        id=str(raw.get("id") or ""),
        type=raw.get("type", "workspace"),
        reporter=Reporter(type=reporter.get("type", "rbac")),
    )
    return AccessCheckResult(resource=resource, allowed=item.get("allowed") is True)


def auth_headers(token_env: str) -> dict[str, str]:
    """Bearer header from the named env var, or nothing if it is unset."""
    token = os.environ.get(token_env)
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


def is_retryable(exc: httpx.HTTPError) -> bool:
    """Transport failures, 429 and 5xx responses may succeed on a later attempt."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return isinstance(exc, httpx.TransportError)
