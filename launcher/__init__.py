"""Launcher core: plugin registry, matching engine and host services."""

__version__ = "0.1.0"
