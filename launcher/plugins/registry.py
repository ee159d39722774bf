"""Plugin registry - the live catalog of registered plugins."""

import logging
import threading
from typing import Dict, List, Optional

from launcher.plugins.errors import PluginValidationError
from launcher.plugins.hooks import run_hook
from launcher.plugins.types import Plugin, PluginConfig

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Catalog of plugins keyed by id.

    Mutations and snapshot reads share one lock, so readers never observe a
    partially updated catalog. Lifecycle hooks run outside the lock.
    """

    def __init__(self):
        self._plugins: Dict[str, Plugin] = {}
        self._lock = threading.Lock()

    async def register(self, plugin: Plugin) -> bool:
        """Validate a plugin, run its load hook and add it to the catalog.

        Args:
            plugin: Plugin to register

        Returns:
            True if the plugin was inserted, False if its load hook failed

        Raises:
            PluginValidationError: If the plugin is structurally invalid
        """
        self._validate(plugin)
        logger.info(f"Registering plugin: {plugin.id} ({plugin.name})")

        if self.has(plugin.id):
            logger.warning(f"Plugin '{plugin.id}' already registered, overwriting")

        result = await run_hook(plugin.on_load)
        if not result.ok:
            logger.error(f"Failed to load plugin {plugin.id}: {result.message}")
            return False

        with self._lock:
            self._plugins[plugin.id] = plugin
        logger.info(f"Registered plugin: {plugin.id}")
        return True

    async def unregister(self, plugin_id: str) -> bool:
        """Run a plugin's unload hook and remove it from the catalog.

        Args:
            plugin_id: Plugin ID

        Returns:
            True if the plugin was removed, False if it was not registered
        """
        plugin = self.get(plugin_id)
        if plugin is None:
            logger.warning(f"Plugin '{plugin_id}' not found, nothing to unregister")
            return False

        result = await run_hook(plugin.on_unload)
        if not result.ok:
            logger.error(f"Failed to unload plugin {plugin_id}: {result.message}")

        with self._lock:
            # The id may have been re-registered while the hook ran
            if self._plugins.get(plugin_id) is plugin:
                del self._plugins[plugin_id]
        logger.info(f"Unregistered plugin: {plugin_id}")
        return True

    async def clear(self) -> None:
        """Unregister every plugin, running each unload hook.

        Plugins registered while an unload hook is awaited are unregistered
        too; the catalog is only empty once no ids remain.
        """
        plugin_ids = self.ids()
        while plugin_ids:
            for plugin_id in plugin_ids:
                await self.unregister(plugin_id)
            plugin_ids = self.ids()
        logger.info("All plugins cleared")

    def get(self, plugin_id: str) -> Optional[Plugin]:
        """Get a plugin by ID."""
        with self._lock:
            return self._plugins.get(plugin_id)

    def has(self, plugin_id: str) -> bool:
        """Check if a plugin is registered."""
        with self._lock:
            return plugin_id in self._plugins

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._plugins.keys())

    def get_all(self) -> List[Plugin]:
        """Get a snapshot of all registered plugins."""
        with self._lock:
            return list(self._plugins.values())

    def get_enabled(self) -> List[Plugin]:
        """Get all enabled plugins - the list to hand to the matcher."""
        return [p for p in self.get_all() if p.config.enabled is not False]

    @property
    def size(self) -> int:
        """Number of registered plugins, enabled or not."""
        with self._lock:
            return len(self._plugins)

    def __len__(self) -> int:
        return self.size

    def _validate(self, plugin: Plugin) -> None:
        plugin_id = getattr(plugin, "id", None)

        if not plugin_id or not isinstance(plugin_id, str):
            raise PluginValidationError("Plugin must have a valid id")

        name = getattr(plugin, "name", None)
        if not name or not isinstance(name, str):
            raise PluginValidationError(f"Plugin '{plugin_id}' must have a valid name", plugin_id)

        if not callable(getattr(plugin, "execute", None)):
            raise PluginValidationError(f"Plugin '{plugin_id}' must have an execute function", plugin_id)

        if not isinstance(getattr(plugin, "config", None), PluginConfig):
            raise PluginValidationError(f"Plugin '{plugin_id}' must have a config object", plugin_id)
