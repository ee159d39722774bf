"""Plugin system for the launcher.

Imports are lazy so that lightweight pieces (types, matcher, registry) can be
used without pulling in discovery and settings handling.
"""

__all__ = [
    "Plugin",
    "PluginConfig",
    "PluginContext",
    "PluginResult",
    "PluginAction",
    "MatchResult",
    "MatchType",
    "PluginValidationError",
    "HookResult",
    "PluginRegistry",
    "PluginMatcher",
    "fuzzy_score",
    "PluginManifest",
    "PluginDiscovery",
    "PluginLifecycle",
    "PluginInstance",
    "PluginState",
    "PluginConfigService",
    "UsageTracker",
    "PluginManager",
]


def __getattr__(name):
    if name in ("Plugin", "PluginConfig", "PluginContext", "PluginResult", "PluginAction", "MatchResult", "MatchType"):
        from launcher.plugins import types
        return getattr(types, name)
    if name == "PluginValidationError":
        from launcher.plugins.errors import PluginValidationError
        return PluginValidationError
    if name == "HookResult":
        from launcher.plugins.hooks import HookResult
        return HookResult
    if name == "PluginRegistry":
        from launcher.plugins.registry import PluginRegistry
        return PluginRegistry
    if name in ("PluginMatcher", "fuzzy_score"):
        from launcher.plugins import matcher
        return getattr(matcher, name)
    if name == "PluginManifest":
        from launcher.plugins.manifest import PluginManifest
        return PluginManifest
    if name == "PluginDiscovery":
        from launcher.plugins.discovery import PluginDiscovery
        return PluginDiscovery
    if name in ("PluginLifecycle", "PluginInstance", "PluginState"):
        from launcher.plugins import lifecycle
        return getattr(lifecycle, name)
    if name == "PluginConfigService":
        from launcher.plugins.config import PluginConfigService
        return PluginConfigService
    if name == "UsageTracker":
        from launcher.plugins.usage import UsageTracker
        return UsageTracker
    if name == "PluginManager":
        from launcher.plugins.manager import PluginManager
        return PluginManager
    raise AttributeError(f"module 'launcher.plugins' has no attribute {name!r}")
