"""Plugin manager - top-level orchestrator for the plugin system."""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from launcher.plugins.config import PluginConfigService
from launcher.plugins.discovery import PluginDiscovery
from launcher.plugins.errors import PluginValidationError
from launcher.plugins.lifecycle import PluginInstance, PluginLifecycle, PluginState
from launcher.plugins.registry import PluginRegistry
from launcher.plugins.types import Plugin, PluginConfig
from launcher.plugins.usage import UsageTracker

logger = logging.getLogger(__name__)


class PluginManager:
    """Coordinates discovery, loading, user settings and the registry.

    Owns the one PluginRegistry of the running application.
    """

    def __init__(
        self,
        bundled_dir: Path,
        installed_dir: Path,
        config_file: Path,
        extra_paths: Optional[List[Path]] = None,
        registry: Optional[PluginRegistry] = None,
    ):
        self.bundled_dir = bundled_dir
        self.installed_dir = installed_dir

        self.registry = registry if registry is not None else PluginRegistry()
        self.config_service = PluginConfigService(config_file)
        self.lifecycle = PluginLifecycle()
        self.usage = UsageTracker()
        self.instances: Dict[str, PluginInstance] = {}

        # Build search paths: (path, source_label)
        search_paths = [
            (bundled_dir, "bundled"),
            (installed_dir, "installed"),
        ]
        if extra_paths:
            for p in extra_paths:
                search_paths.append((p, "external"))

        self.discovery = PluginDiscovery(search_paths)

    async def load_all(self) -> List[PluginInstance]:
        """Discover, load and register all packaged plugins.

        Returns:
            Every discovered instance, including ones that failed to load
        """
        instances = self.discovery.discover_all()

        for instance in instances:
            self.instances[instance.id] = instance
            if not self.lifecycle.load(instance):
                continue

            try:
                registered = await self.register_plugin(instance.plugin)
            except PluginValidationError as e:
                instance.state = PluginState.ERROR
                instance.error = str(e)
                logger.error(f"Invalid plugin {instance.id}: {e}")
                continue

            if registered:
                instance.state = PluginState.REGISTERED
            else:
                instance.state = PluginState.ERROR
                instance.error = "load hook failed"

        logger.info(
            f"Plugin system initialized, "
            f"{len(self.registry.get_enabled())}/{self.registry.size} plugins enabled"
        )
        return instances

    async def register_plugin(self, plugin: Plugin) -> bool:
        """Apply user settings to a plugin and register it.

        Raises:
            PluginValidationError: If the plugin is structurally invalid
        """
        self._apply_settings(plugin)
        return await self.registry.register(plugin)

    async def unload_all(self) -> None:
        """Unregister every plugin, running unload hooks."""
        await self.registry.clear()
        for instance in self.instances.values():
            if instance.state == PluginState.REGISTERED:
                instance.state = PluginState.LOADED
        logger.info("All plugins unloaded")

    def enable_plugin(self, plugin_id: str) -> Optional[Plugin]:
        """Enable a plugin and persist the choice.

        Args:
            plugin_id: Plugin ID to enable

        Returns:
            The plugin if registered, None otherwise
        """
        plugin = self.registry.get(plugin_id)
        if not plugin:
            logger.error(f"Plugin not found: {plugin_id}")
            return None

        self.config_service.enable(plugin_id)
        plugin.config.enabled = True
        return plugin

    def disable_plugin(self, plugin_id: str) -> Optional[Plugin]:
        """Disable a plugin (it stays registered but stops matching)."""
        plugin = self.registry.get(plugin_id)
        if not plugin:
            logger.error(f"Plugin not found: {plugin_id}")
            return None

        self.config_service.disable(plugin_id)
        plugin.config.enabled = False
        return plugin

    def set_priority(self, plugin_id: str, priority: int) -> Optional[Plugin]:
        """Change a plugin's priority and persist it.

        Raises:
            pydantic.ValidationError: If priority is outside 0-100
        """
        plugin = self.registry.get(plugin_id)
        if not plugin:
            logger.error(f"Plugin not found: {plugin_id}")
            return None

        plugin.config.priority = priority
        self.config_service.update_plugin_config(plugin_id, {"priority": priority})
        return plugin

    def get_plugin_info(self, plugin_id: str) -> Optional[dict]:
        """Get plugin information as dict."""
        plugin = self.registry.get(plugin_id)
        if not plugin:
            return None

        info = plugin.to_dict()
        instance = self.instances.get(plugin_id)
        info["source"] = instance.source if instance else "builtin"
        info["settings"] = self.config_service.get_plugin_config(plugin_id)
        info["usage"] = self.usage.get(plugin_id).to_dict()
        return info

    def list_plugins(self) -> List[dict]:
        """List all registered plugins as dicts."""
        return [self.get_plugin_info(p.id) for p in self.registry.get_all()]

    def _apply_settings(self, plugin: Plugin) -> None:
        if not isinstance(plugin.config, PluginConfig):
            return  # left for registry validation to reject

        overrides = self.config_service.get_plugin_config(plugin.id)
        if overrides:
            try:
                plugin.config = PluginConfig(**{**plugin.config.model_dump(), **overrides})
            except ValidationError as e:
                logger.error(f"Ignoring invalid settings for plugin {plugin.id}: {e}")

        if not self.config_service.is_enabled(plugin.id):
            plugin.config.enabled = False
