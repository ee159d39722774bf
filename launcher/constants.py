"""Global constants for the launcher."""

import os
import sys
from pathlib import Path

# Directory paths
LAUNCHER_ROOT = Path(__file__).resolve().parent.parent

PLUGINS_DIR = Path(os.getenv("LAUNCHER_PLUGINS_DIR", str(LAUNCHER_ROOT / "plugins")))
BUNDLED_PLUGINS_DIR = PLUGINS_DIR / "bundled"        # shipped with the launcher
INSTALLED_PLUGINS_DIR = PLUGINS_DIR / "installed"    # user-installed plugins
PLUGIN_CONFIG_FILE = Path(os.getenv("LAUNCHER_PLUGIN_CONFIG", str(PLUGINS_DIR / "config.json")))

# Extra plugin search paths, colon separated
PLUGIN_PATHS = [Path(p.strip()) for p in os.getenv("PLUGIN_PATHS", "").split(":") if p.strip()]


def _detect_platform() -> str:
    override = os.getenv("LAUNCHER_PLATFORM", "").strip().lower()
    if override in ("mac", "windows", "linux"):
        return override
    if sys.platform == "darwin":
        return "mac"
    if sys.platform.startswith("win"):
        return "windows"
    return "linux"


PLATFORM = _detect_platform()

# Whether HostBridge.open_url launches a real browser
OPEN_BROWSER = os.getenv("LAUNCHER_OPEN_BROWSER", "true").lower() in ("1", "true", "yes", "on")
