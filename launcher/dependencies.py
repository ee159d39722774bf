"""Dependency container - the launcher's composition root."""

import logging

from launcher.constants import (
    BUNDLED_PLUGINS_DIR,
    INSTALLED_PLUGINS_DIR,
    PLUGIN_CONFIG_FILE,
    PLUGIN_PATHS,
)
from launcher.plugins.manager import PluginManager
from launcher.plugins.matcher import PluginMatcher

logger = logging.getLogger(__name__)

# ============================================================================
# Process-wide instances, exposed via functions for easier testing/mocking
# ============================================================================

_plugin_manager_instance = None
_plugin_matcher_instance = None


def get_plugin_manager() -> PluginManager:
    """Get plugin manager (owns the application's PluginRegistry)."""
    global _plugin_manager_instance
    if _plugin_manager_instance is None:
        _plugin_manager_instance = PluginManager(
            bundled_dir=BUNDLED_PLUGINS_DIR,
            installed_dir=INSTALLED_PLUGINS_DIR,
            config_file=PLUGIN_CONFIG_FILE,
            extra_paths=PLUGIN_PATHS or None,
        )
        logger.info("Created PluginManager instance")
    return _plugin_manager_instance


def get_plugin_matcher() -> PluginMatcher:
    """Get plugin matcher."""
    global _plugin_matcher_instance
    if _plugin_matcher_instance is None:
        _plugin_matcher_instance = PluginMatcher()
    return _plugin_matcher_instance


def reset_services():
    """Reset all service instances (only for testing)."""
    global _plugin_manager_instance, _plugin_matcher_instance

    _plugin_manager_instance = None
    _plugin_matcher_instance = None
    logger.info("Reset all service instances")
