"""Dynamic provider discovery and loading via entry points."""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING

from accessgate_core.interfaces.access import AccessCheckProvider
from accessgate_core.interfaces.identity import ApplicationPermissionProvider

if TYPE_CHECKING:
    from accessgate_core.config.models import AccessGateConfig

logger = logging.getLogger(__name__)


class PluginNotFoundError(Exception):
    """Raised when a requested plugin cannot be found."""

    def __init__(self, plugin_type: str, name: str | None = None):
        self.plugin_type = plugin_type
        self.name = name
        msg = f"No {plugin_type} plugin found"
        if name:
            msg += f" with name '{name}'"
        super().__init__(msg)


class PluginLoader:
    """Discovers provider classes via entry points or config.

    Loaded classes are expected to offer ``from_config(config)``.
    """

    # Entry point group names
    GROUPS = {
        "access_check": "accessgate.plugins.access_check",
        "identity": "accessgate.plugins.identity",
    }

    # Built-in HTTP adapters (lazy import paths)
    DEFAULTS = {
        "access_check": ("accessgate_kessel.access_check", "KesselAccessCheckProvider"),
        "identity": ("accessgate_kessel.identity", "RbacIdentityProvider"),
    }

    def __init__(self, config: AccessGateConfig):
        self._config = config

    def discover(self) -> dict[str, list[str]]:
        """Scan entry_points for registered plugins. Returns {type: [name, ...]}."""
        result: dict[str, list[str]] = {}
        for plugin_type, group in self.GROUPS.items():
            eps = importlib.metadata.entry_points(group=group)
            result[plugin_type] = [ep.name for ep in eps]
        return result

    def _resolve_name(self, plugin_type: str, name: str | None) -> str | None:
        """Resolve plugin name: explicit arg > config > None."""
        if name is not None:
            return name
        return getattr(self._config.plugins, plugin_type, None)

    def _load_from_entry_point(self, plugin_type: str, name: str) -> type | None:
        group = self.GROUPS[plugin_type]
        eps = importlib.metadata.entry_points(group=group)
        for ep in eps:
            if ep.name == name:
                return ep.load()
        return None

    def _load_default(self, plugin_type: str) -> type | None:
        module_path, class_name = self.DEFAULTS[plugin_type]
        try:
            module = __import__(module_path, fromlist=[class_name])
            return getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            logger.warning("Failed to import built-in %s provider %s.%s: %s", plugin_type, module_path, class_name, e)
            return None

    def _load_plugin(self, plugin_type: str, name: str | None) -> type:
        """Fallback chain: name/config > entry_points > built-in default."""
        resolved = self._resolve_name(plugin_type, name)
        if resolved is not None:
            result = self._load_from_entry_point(plugin_type, resolved)
            if result is not None:
                return result
            # Name was explicit but not found -- don't fallback silently
            raise PluginNotFoundError(plugin_type, resolved)

        result = self._load_default(plugin_type)
        if result is None:
            raise PluginNotFoundError(plugin_type)
        return result

    def load_access_check(self, name: str | None = None) -> type:
        return self._load_plugin("access_check", name)

    def load_identity(self, name: str | None = None) -> type:
        return self._load_plugin("identity", name)

    def create_access_check_provider(self, name: str | None = None) -> AccessCheckProvider:
        return self.load_access_check(name).from_config(self._config)

    def create_identity_provider(self, name: str | None = None) -> ApplicationPermissionProvider:
        return self.load_identity(name).from_config(self._config)
