#!/usr/bin/env python3
"""Plugin management CLI tool."""

import argparse
import json
import sys
from pathlib import Path

# Ensure project root is in path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from launcher.constants import BUNDLED_PLUGINS_DIR, INSTALLED_PLUGINS_DIR, PLUGIN_CONFIG_FILE, PLUGIN_PATHS
from launcher.plugins.config import PluginConfigService
from launcher.plugins.discovery import PluginDiscovery


def get_discovery() -> PluginDiscovery:
    """Create a PluginDiscovery instance."""
    search_paths = [
        (BUNDLED_PLUGINS_DIR, "bundled"),
        (INSTALLED_PLUGINS_DIR, "installed"),
    ]
    search_paths.extend((p, "external") for p in PLUGIN_PATHS)
    return PluginDiscovery(search_paths)


def get_config() -> PluginConfigService:
    """Create a PluginConfigService instance."""
    return PluginConfigService(PLUGIN_CONFIG_FILE)


def find_plugin(plugin_id: str):
    plugins = get_discovery().discover_all()
    plugin = next((p for p in plugins if p.manifest.id == plugin_id), None)
    if not plugin:
        print(f"Plugin '{plugin_id}' not found.")
        sys.exit(1)
    return plugin


def cmd_list(args):
    """List all discovered plugins."""
    config = get_config()
    plugins = get_discovery().discover_all()

    if not plugins:
        print("No plugins found.")
        return

    print(f"{'ID':<20} {'Name':<24} {'Keywords':<24} {'Source':<10} {'Enabled':<8} {'Version'}")
    print("-" * 100)

    for p in plugins:
        enabled = "Yes" if config.is_enabled(p.id) and p.manifest.config.get("enabled", True) else "No"
        keywords = ", ".join(p.manifest.config.get("keywords", []))
        print(
            f"{p.manifest.id:<20} {p.manifest.name:<24} {keywords:<24} "
            f"{p.source:<10} {enabled:<8} {p.manifest.version}"
        )


def cmd_info(args):
    """Show detailed plugin information."""
    config = get_config()
    plugin = find_plugin(args.plugin_id)
    settings = config.get_plugin_config(plugin.id)

    print(f"Plugin: {plugin.manifest.id}")
    print(f"  Name:        {plugin.manifest.name}")
    print(f"  Version:     {plugin.manifest.version}")
    print(f"  Author:      {plugin.manifest.author}")
    print(f"  Description: {plugin.manifest.description}")
    print(f"  Source:      {plugin.source}")
    print(f"  Path:        {plugin.path}")
    print(f"  Entry Point: {plugin.manifest.entry_point}")
    print(f"  Enabled:     {config.is_enabled(plugin.id)}")
    print(f"  Matching:    {json.dumps(plugin.manifest.config, indent=4, ensure_ascii=False)}")
    if settings:
        print(f"  Overrides:   {json.dumps(settings, indent=4, ensure_ascii=False)}")


def cmd_enable(args):
    """Enable a plugin."""
    find_plugin(args.plugin_id)
    get_config().enable(args.plugin_id)
    print(f"Plugin '{args.plugin_id}' enabled. Restart the launcher to take effect.")


def cmd_disable(args):
    """Disable a plugin."""
    find_plugin(args.plugin_id)
    get_config().disable(args.plugin_id)
    print(f"Plugin '{args.plugin_id}' disabled. Restart the launcher to take effect.")


def cmd_doctor(args):
    """Run health checks on the plugin system."""
    issues = []

    if not BUNDLED_PLUGINS_DIR.exists():
        issues.append(f"Bundled plugins directory missing: {BUNDLED_PLUGINS_DIR}")

    if PLUGIN_CONFIG_FILE.exists():
        try:
            with open(PLUGIN_CONFIG_FILE) as f:
                json.load(f)
        except json.JSONDecodeError as e:
            issues.append(f"Plugin config file has invalid JSON: {e}")

    config = get_config()
    plugins = get_discovery().discover_all()
    discovered_ids = {p.manifest.id for p in plugins}

    for did in config.get_disabled_list():
        if did not in discovered_ids:
            issues.append(f"Disabled plugin '{did}' not found in any search path")

    # Same checks the loader applies, plus the user's overrides
    for p in plugins:
        for problem in PluginDiscovery.check(p, config.get_plugin_config(p.id)):
            issues.append(f"Plugin '{p.id}': {problem}")

    if issues:
        print(f"Found {len(issues)} issue(s):")
        for i, issue in enumerate(issues, 1):
            print(f"  {i}. {issue}")
        sys.exit(1)
    else:
        disabled = len(config.get_disabled_list())
        print(f"All checks passed. {len(plugins)} plugin(s) found, {disabled} disabled.")


def main():
    parser = argparse.ArgumentParser(description="Launcher Plugin Manager")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("list", help="List all plugins")

    info_parser = subparsers.add_parser("info", help="Show plugin details")
    info_parser.add_argument("plugin_id", help="Plugin ID")

    enable_parser = subparsers.add_parser("enable", help="Enable a plugin")
    enable_parser.add_argument("plugin_id", help="Plugin ID")

    disable_parser = subparsers.add_parser("disable", help="Disable a plugin")
    disable_parser.add_argument("plugin_id", help="Plugin ID")

    subparsers.add_parser("doctor", help="Run health checks")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    commands = {
        "list": cmd_list,
        "info": cmd_info,
        "enable": cmd_enable,
        "disable": cmd_disable,
        "doctor": cmd_doctor,
    }

    commands[args.command](args)


if __name__ == "__main__":
    main()
