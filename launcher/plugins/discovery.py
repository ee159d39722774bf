"""Plugin discovery - finds plugin.json packages and checks them before loading."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from launcher.plugins.lifecycle import PluginInstance, PluginState
from launcher.plugins.manifest import PluginManifest
from launcher.plugins.types import PluginConfig

logger = logging.getLogger(__name__)

MANIFEST_FILE = "plugin.json"


class PluginDiscovery:
    """Finds packaged plugins on the search paths.

    Every manifest that parses comes back as a PluginInstance. A package that
    cannot load as it stands (entry module missing, matching config that does
    not build) is returned in the ERROR state with the reason, so the loader
    and ``manage_plugins.py doctor`` report the same problems.
    """

    def __init__(self, search_paths: List[Tuple[Path, str]]):
        """
        Args:
            search_paths: (directory, source label) pairs; earlier paths win on duplicate ids
        """
        self.search_paths = search_paths

    def discover_all(self) -> List[PluginInstance]:
        found: Dict[str, PluginInstance] = {}

        for root, source in self.search_paths:
            for package_dir in self._package_dirs(root):
                instance = self._read(package_dir, source)
                if instance is None:
                    continue

                shadowing = found.get(instance.id)
                if shadowing is not None:
                    logger.warning(f"Plugin '{instance.id}' at {package_dir} is shadowed by {shadowing.path}")
                    continue
                found[instance.id] = instance

        invalid = sum(1 for i in found.values() if i.state == PluginState.ERROR)
        logger.info(f"Discovered {len(found)} plugin(s), {invalid} invalid")
        return list(found.values())

    def discover_single(self, plugin_path: Path, source: str = "external") -> Optional[PluginInstance]:
        """Read one package directory, e.g. one the user points at explicitly."""
        if not (plugin_path / MANIFEST_FILE).is_file():
            logger.error(f"No {MANIFEST_FILE} found at {plugin_path}")
            return None
        return self._read(plugin_path, source)

    @staticmethod
    def check(instance: PluginInstance, overrides: Optional[Dict[str, Any]] = None) -> List[str]:
        """List what would stop a package from loading.

        Args:
            instance: Discovered package
            overrides: User settings merged over the manifest config, as the manager applies them

        Returns:
            Human-readable problems, empty when the package is loadable
        """
        problems = []

        module_name = instance.manifest.entry_point.partition(":")[0]
        entry_file = instance.path / f"{module_name}.py"
        if not entry_file.is_file():
            problems.append(f"entry module missing: {entry_file}")

        try:
            PluginConfig(**{**instance.manifest.config, **(overrides or {})})
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
            problems.append(f"invalid matching config ({fields or 'config'}): {e.errors()[0]['msg']}")

        return problems

    def _package_dirs(self, root: Path) -> List[Path]:
        if not root.is_dir():
            logger.debug(f"Plugin search path does not exist: {root}")
            return []
        return [d for d in sorted(root.iterdir()) if (d / MANIFEST_FILE).is_file()]

    def _read(self, package_dir: Path, source: str) -> Optional[PluginInstance]:
        manifest_file = package_dir / MANIFEST_FILE
        try:
            # Malformed JSON surfaces as a ValidationError too
            manifest = PluginManifest.model_validate_json(manifest_file.read_text(encoding="utf-8"))
        except ValidationError as e:
            logger.error(f"Skipping {manifest_file}: {e}")
            return None
        except OSError as e:
            logger.error(f"Error reading {manifest_file}: {e}")
            return None

        instance = PluginInstance(manifest=manifest, path=package_dir, source=source)
        problems = self.check(instance)
        if problems:
            instance.state = PluginState.ERROR
            instance.error = "; ".join(problems)
            logger.error(f"Plugin {manifest.id} cannot be loaded: {instance.error}")
        else:
            logger.debug(f"Discovered plugin: {manifest.id} at {package_dir}")
        return instance
