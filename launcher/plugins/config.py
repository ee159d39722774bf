"""Plugin settings service - manages user overrides in plugins/config.json."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class PluginConfigService:
    """Manages the plugins/config.json settings file.

    Plugins are enabled unless listed under "disabled". Per-plugin entries
    override fields of the plugin's matching config.

    Config format:
    {
        "disabled": ["copy-text"],
        "plugins": {
            "web-search": {
                "priority": 80,
                "keywords": ["g", "google"]
            }
        }
    }
    """

    def __init__(self, config_file: Path):
        self.config_file = config_file
        self._config: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        """Load config from file, falling back to defaults if missing or broken."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    return json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                logger.error(f"Error loading plugin config: {e}")

        return {"disabled": [], "plugins": {}}

    def _save(self) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)
        logger.debug(f"Saved plugin config to {self.config_file}")

    def is_enabled(self, plugin_id: str) -> bool:
        """Check if a plugin is enabled."""
        return plugin_id not in self._config.get("disabled", [])

    def get_plugin_config(self, plugin_id: str) -> Dict[str, Any]:
        """Get config overrides for a specific plugin."""
        return dict(self._config.get("plugins", {}).get(plugin_id, {}))

    def get_disabled_list(self) -> List[str]:
        """Get list of disabled plugin IDs."""
        return list(self._config.get("disabled", []))

    def enable(self, plugin_id: str) -> None:
        """Enable a plugin."""
        disabled = self._config.get("disabled", [])
        if plugin_id in disabled:
            disabled.remove(plugin_id)
            self._save()
            logger.info(f"Enabled plugin: {plugin_id}")

    def disable(self, plugin_id: str) -> None:
        """Disable a plugin."""
        disabled = self._config.setdefault("disabled", [])
        if plugin_id not in disabled:
            disabled.append(plugin_id)
            self._save()
            logger.info(f"Disabled plugin: {plugin_id}")

    def update_plugin_config(self, plugin_id: str, config: Dict[str, Any]) -> None:
        """Merge overrides into a plugin's settings."""
        plugins = self._config.setdefault("plugins", {})
        plugins.setdefault(plugin_id, {}).update(config)
        self._save()
        logger.info(f"Updated config for plugin: {plugin_id}")

    def reload(self) -> None:
        """Reload config from disk."""
        self._config = self._load()
