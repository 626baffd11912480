"""Access-check provider backed by a Kessel-style HTTP service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import httpx

from accessgate_core.errors import ProviderUnavailableError
from accessgate_core.interfaces.access import AccessCheckResult, RelationKind, Resource

from ._serialization import auth_headers, is_retryable, payload_to_result, resource_to_payload

if TYPE_CHECKING:
    from accessgate_core.config.models import AccessGateConfig

logger = logging.getLogger(__name__)

_DEFAULT_CHECK_PATH = "/api/access/v1/check"


class KesselAccessCheckProvider:
    """Sends one relation and a whole resource batch per request.

    Conforms to the AccessCheckProvider protocol. Retries and timeouts are
    left to httpx; this class makes exactly one request per call.
    """

    def __init__(
        self,
        base_url: str,
        check_path: str = _DEFAULT_CHECK_PATH,
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/{check_path.lstrip('/')}"
        self._timeout = timeout
        self._headers = dict(headers or {})

    @classmethod
    def from_config(cls, config: AccessGateConfig) -> KesselAccessCheckProvider:
        kessel = config.kessel
        return cls(
            base_url=kessel.base_url,
            check_path=kessel.check_path,
            timeout=kessel.timeout,
            headers=auth_headers(kessel.token_env),
        )

    async def check_access(
        self, relation: RelationKind, resources: Sequence[Resource]
    ) -> list[AccessCheckResult]:
        if not resources:
            raise ValueError("check_access requires at least one resource")

        relation = RelationKind(relation)
        payload = {
            "relation": relation.value,
            "resources": [resource_to_payload(r) for r in resources],
        }
        try:
            async with httpx.AsyncClient(headers=self._headers, timeout=self._timeout) as client:
                resp = await client.post(self._url, json=payload)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(
                "kessel", "check_access", e, retryable=is_retryable(e)
            ) from e
        except ValueError as e:
            raise ProviderUnavailableError("kessel", "check_access", e) from e

        try:
            results = [payload_to_result(item) for item in data.get("results", [])]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ProviderUnavailableError("kessel", "check_access", e) from e

        logger.debug(
            "%s: %d result(s) for %d resource(s)", relation.value, len(results), len(resources)
        )
        return results
