"""Dynamic provider discovery and loading."""

from accessgate_core.plugins.loader import PluginLoader, PluginNotFoundError

__all__ = ["PluginLoader", "PluginNotFoundError"]
