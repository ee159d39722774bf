"""Packaged plugin lifecycle - turns a discovered manifest into a Plugin object."""

import importlib.util
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from launcher.plugins.manifest import PluginManifest
from launcher.plugins.types import Plugin, PluginConfig

logger = logging.getLogger(__name__)

# Optional module-level callables a plugin module may define
OPTIONAL_HOOKS = ("on_load", "on_unload", "get_preview")


class PluginState(str, Enum):
    """Packaged plugin states."""

    DISCOVERED = "discovered"
    LOADED = "loaded"
    REGISTERED = "registered"
    ERROR = "error"


@dataclass
class PluginInstance:
    """A plugin found on disk, plus what became of it."""

    manifest: PluginManifest
    path: Path
    source: str  # "bundled" | "installed" | "external"
    state: PluginState = PluginState.DISCOVERED
    plugin: Optional[Plugin] = field(default=None, repr=False)
    error: Optional[str] = None

    @property
    def id(self) -> str:
        return self.manifest.id

    def to_dict(self) -> dict:
        """Serialize plugin instance to dict for API responses."""
        return {
            "id": self.manifest.id,
            "name": self.manifest.name,
            "version": self.manifest.version,
            "description": self.manifest.description,
            "source": self.source,
            "path": str(self.path),
            "state": self.state.value,
            "error": self.error,
        }


class PluginLifecycle:
    """Loads plugin modules and builds Plugin objects from manifests."""

    def load(self, instance: PluginInstance) -> bool:
        """Load plugin module and resolve its execute entry point.

        Args:
            instance: Plugin instance to load

        Returns:
            True if loaded successfully
        """
        if instance.state == PluginState.ERROR:
            logger.warning(f"Not loading plugin {instance.id}: {instance.error}")
            return False

        try:
            module_name, func_name = instance.manifest.entry_point.split(":")
            module_file = instance.path / f"{module_name}.py"

            spec = importlib.util.spec_from_file_location(
                f"launcher_plugin_{instance.id.replace('-', '_')}_{module_name}",
                module_file,
            )
            if spec is None or spec.loader is None:
                raise ImportError(f"Cannot find module {module_name}.py in {instance.path}")

            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)

            execute = getattr(module, func_name, None)
            if execute is None:
                raise AttributeError(f"Module {module_name} has no function '{func_name}'")
            if not callable(execute):
                raise TypeError(f"{module_name}.{func_name} is not callable")

            hooks = {name: getattr(module, name) for name in OPTIONAL_HOOKS if callable(getattr(module, name, None))}

            manifest = instance.manifest
            instance.plugin = Plugin(
                id=manifest.id,
                name=manifest.name,
                execute=execute,
                config=PluginConfig(**manifest.config),
                description=manifest.description,
                version=manifest.version,
                author=manifest.author,
                **hooks,
            )
            instance.state = PluginState.LOADED
            logger.info(f"Loaded plugin: {instance.id}")
            return True

        except Exception as e:
            instance.state = PluginState.ERROR
            instance.error = str(e)
            logger.error(f"Failed to load plugin {instance.id}: {e}")
            return False
