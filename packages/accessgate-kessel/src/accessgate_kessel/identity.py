"""Identity provider backed by the RBAC access listing endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from accessgate_core.errors import ProviderUnavailableError
from accessgate_core.interfaces.identity import GrantedPermission

from ._serialization import auth_headers, is_retryable

if TYPE_CHECKING:
    from accessgate_core.config.models import AccessGateConfig

logger = logging.getLogger(__name__)

_DEFAULT_ACCESS_PATH = "/api/rbac/v1/access/"


class RbacIdentityProvider:
    """Lists a principal's granted permissions, following ``links.next`` pages.

    Conforms to the ApplicationPermissionProvider protocol.
    """

    def __init__(
        self,
        base_url: str,
        application: str = "rbac",
        access_path: str = _DEFAULT_ACCESS_PATH,
        page_limit: int = 1000,
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._access_path = "/" + access_path.lstrip("/")
        self._application = application
        self._page_limit = page_limit
        self._timeout = timeout
        self._headers = dict(headers or {})

    @classmethod
    def from_config(cls, config: AccessGateConfig) -> RbacIdentityProvider:
        identity = config.identity
        return cls(
            base_url=identity.base_url,
            application=identity.application,
            access_path=identity.access_path,
            page_limit=identity.page_limit,
            timeout=identity.timeout,
            headers=auth_headers(identity.token_env),
        )

    def _next_url(self, link: str | None) -> str | None:
        if not link:
            return None
        if link.startswith(("http://", "https://")):
            return link
        return f"{self._base_url}/{link.lstrip('/')}"

    async def list_access(self, principal_id: str) -> list[GrantedPermission]:
        """Fetch every access entry for the principal, in listing order."""
        entries: list[GrantedPermission] = []
        url: str | None = f"{self._base_url}{self._access_path}"
        params: dict[str, Any] | None = {
            "application": self._application,
            "username": principal_id,
            "limit": self._page_limit,
        }
        seen: set[str] = set()
        try:
            async with httpx.AsyncClient(headers=self._headers, timeout=self._timeout) as client:
                while url is not None and url not in seen:
                    seen.add(url)
                    resp = await client.get(url, params=params)
                    resp.raise_for_status()
                    body = resp.json()
                    entries.extend(GrantedPermission.model_validate(item) for item in body.get("data", []))
                    # next links already carry the query string
                    params = None
                    url = self._next_url((body.get("links") or {}).get("next"))
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(
                "rbac", "list_access", e, retryable=is_retryable(e)
            ) from e
        except (ValueError, AttributeError, TypeError) as e:
            raise ProviderUnavailableError("rbac", "list_access", e) from e

        logger.debug("Fetched %d access entries for %s", len(entries), principal_id)
        return entries

    async def get_granted_permissions(self, principal_id: str) -> list[str]:
        return [entry.permission for entry in await self.list_access(principal_id)]
