"""Shared fixtures."""

import pytest

from launcher.plugins.types import Plugin


def noop(context):
    return None


@pytest.fixture
def make_plugin():
    """Factory for plugins with a no-op execute."""

    def _make(plugin_id="test", name=None, execute=noop, **config):
        return Plugin(
            id=plugin_id,
            name=name or plugin_id.title(),
            execute=execute,
            config=config,
        )

    return _make
