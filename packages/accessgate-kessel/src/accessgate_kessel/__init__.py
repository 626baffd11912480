"""HTTP adapters for the access-check and identity services."""

from accessgate_kessel.access_check import KesselAccessCheckProvider
from accessgate_kessel.identity import RbacIdentityProvider

__all__ = ["KesselAccessCheckProvider", "RbacIdentityProvider"]
