from .loader import DEFAULT_CONFIG_TEMPLATE, load_config
from .models import (
    AccessGateConfig,
    CacheConfig,
    IdentityConfig,
    KesselConfig,
    PluginsConfig,
    RoutesConfig,
)

__all__ = [
    "AccessGateConfig",
    "CacheConfig",
    "DEFAULT_CONFIG_TEMPLATE",
    "IdentityConfig",
    "KesselConfig",
    "PluginsConfig",
    "RoutesConfig",
    "load_config",
]
