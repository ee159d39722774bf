"""Tests for plugin discovery, loading and the plugin manager."""

import json

import pytest

from launcher.constants import BUNDLED_PLUGINS_DIR
from launcher.plugins.discovery import PluginDiscovery
from launcher.plugins.lifecycle import PluginState
from launcher.plugins.manager import PluginManager
from launcher.plugins.matcher import PluginMatcher

PLUGIN_SOURCE = '''
def execute(context):
    context.show_notification("ran " + context.input)
'''

HOOKED_PLUGIN_SOURCE = '''
calls = []

def execute(context):
    pass

def on_load():
    calls.append("load")

def on_unload():
    calls.append("unload")

def get_preview(text):
    return "preview " + text
'''

FAILING_HOOK_SOURCE = '''
def execute(context):
    pass

def on_load():
    raise RuntimeError("cannot start")
'''


def write_plugin(root, plugin_id, config=None, source=PLUGIN_SOURCE, **manifest):
    """Create a packaged plugin directory under root."""
    plugin_dir = root / plugin_id
    plugin_dir.mkdir(parents=True)
    data = {
        "id": plugin_id,
        "name": plugin_id.replace("-", " ").title(),
        "entry_point": "plugin:execute",
        "config": config or {},
    }
    data.update(manifest)
    (plugin_dir / "plugin.json").write_text(json.dumps(data), encoding="utf-8")
    if source is not None:
        (plugin_dir / "plugin.py").write_text(source, encoding="utf-8")
    return plugin_dir


@pytest.fixture
def dirs(tmp_path):
    bundled = tmp_path / "bundled"
    installed = tmp_path / "installed"
    bundled.mkdir()
    installed.mkdir()
    return bundled, installed, tmp_path / "config.json"


def make_manager(dirs, **kwargs):
    bundled, installed, config_file = dirs
    return PluginManager(bundled, installed, config_file, **kwargs)


class TestDiscovery:
    """Manifest scanning."""

    def test_discovers_valid_manifests(self, dirs):
        bundled, installed, _ = dirs
        write_plugin(bundled, "alpha")
        write_plugin(installed, "beta")

        found = PluginDiscovery([(bundled, "bundled"), (installed, "installed")]).discover_all()

        assert [(p.id, p.source) for p in found] == [("alpha", "bundled"), ("beta", "installed")]
        assert all(p.state == PluginState.DISCOVERED for p in found)

    def test_first_found_wins_on_duplicate(self, dirs):
        bundled, installed, _ = dirs
        write_plugin(bundled, "alpha")
        write_plugin(installed, "alpha")

        found = PluginDiscovery([(bundled, "bundled"), (installed, "installed")]).discover_all()

        assert len(found) == 1
        assert found[0].source == "bundled"

    def test_invalid_manifests_are_skipped(self, dirs):
        bundled, _, _ = dirs
        (bundled / "broken-json").mkdir()
        (bundled / "broken-json" / "plugin.json").write_text("{not json", encoding="utf-8")
        write_plugin(bundled, "bad-entry", entry_point="no_function_here")
        write_plugin(bundled, "good")

        found = PluginDiscovery([(bundled, "bundled")]).discover_all()

        assert [p.id for p in found] == ["good"]

    def test_unloadable_packages_are_flagged(self, dirs):
        bundled, _, _ = dirs
        write_plugin(bundled, "bad-pattern", config={"pattern": "(unclosed"})
        write_plugin(bundled, "no-module", source=None)
        write_plugin(bundled, "good")

        found = {p.id: p for p in PluginDiscovery([(bundled, "bundled")]).discover_all()}

        assert found["bad-pattern"].state == PluginState.ERROR
        assert "invalid matching config (pattern)" in found["bad-pattern"].error
        assert found["no-module"].state == PluginState.ERROR
        assert "entry module missing" in found["no-module"].error
        assert found["good"].state == PluginState.DISCOVERED
        assert found["good"].error is None

    def test_check_applies_overrides(self, dirs):
        bundled, _, _ = dirs
        write_plugin(bundled, "alpha", config={"priority": 20})
        instance = PluginDiscovery([(bundled, "bundled")]).discover_all()[0]

        assert PluginDiscovery.check(instance) == []
        assert PluginDiscovery.check(instance, {"priority": 40}) == []
        problems = PluginDiscovery.check(instance, {"priority": 900})
        assert len(problems) == 1
        assert "priority" in problems[0]

    def test_missing_search_path_is_ignored(self, tmp_path):
        assert PluginDiscovery([(tmp_path / "nope", "installed")]).discover_all() == []

    def test_discover_single(self, dirs):
        bundled, _, _ = dirs
        path = write_plugin(bundled, "alpha")
        discovery = PluginDiscovery([])

        assert discovery.discover_single(path).id == "alpha"
        assert discovery.discover_single(bundled) is None


class TestLoadAll:
    """Loading packaged plugins into the registry."""

    async def test_loads_and_registers(self, dirs):
        bundled, _, _ = dirs
        write_plugin(bundled, "alpha", config={"keywords": ["a"], "priority": 60})
        manager = make_manager(dirs)

        instances = await manager.load_all()

        assert instances[0].state == PluginState.REGISTERED
        plugin = manager.registry.get("alpha")
        assert plugin.name == "Alpha"
        assert plugin.config.keywords == ["a"]
        assert plugin.config.priority == 60

    async def test_module_hooks_are_wired(self, dirs):
        bundled, _, _ = dirs
        write_plugin(bundled, "hooked", source=HOOKED_PLUGIN_SOURCE)
        manager = make_manager(dirs)

        await manager.load_all()
        plugin = manager.registry.get("hooked")

        assert plugin.has_load_hook and plugin.has_unload_hook
        assert plugin.preview("x") == "preview x"

    async def test_missing_module_marks_error(self, dirs):
        bundled, _, _ = dirs
        write_plugin(bundled, "no-module", source=None)
        write_plugin(bundled, "fine")
        manager = make_manager(dirs)

        await manager.load_all()

        assert manager.instances["no-module"].state == PluginState.ERROR
        assert not manager.registry.has("no-module")
        assert manager.registry.has("fine")

    async def test_missing_entry_function_marks_error(self, dirs):
        bundled, _, _ = dirs
        write_plugin(bundled, "wrong-entry", entry_point="plugin:run")
        manager = make_manager(dirs)

        await manager.load_all()

        instance = manager.instances["wrong-entry"]
        assert instance.state == PluginState.ERROR
        assert "run" in instance.error

    async def test_invalid_matching_config_marks_error(self, dirs):
        bundled, _, _ = dirs
        write_plugin(bundled, "bad-pattern", config={"pattern": "(unclosed"})
        manager = make_manager(dirs)

        await manager.load_all()

        assert manager.instances["bad-pattern"].state == PluginState.ERROR
        assert manager.registry.size == 0

    async def test_failing_load_hook_marks_error(self, dirs):
        bundled, _, _ = dirs
        write_plugin(bundled, "flaky", source=FAILING_HOOK_SOURCE)
        manager = make_manager(dirs)

        await manager.load_all()

        assert manager.instances["flaky"].state == PluginState.ERROR
        assert not manager.registry.has("flaky")

    async def test_extra_paths_are_external(self, dirs, tmp_path):
        extra = tmp_path / "extra"
        write_plugin(extra, "outside")
        manager = make_manager(dirs, extra_paths=[extra])

        await manager.load_all()

        assert manager.get_plugin_info("outside")["source"] == "external"

    async def test_unload_all_clears_registry(self, dirs):
        bundled, _, _ = dirs
        write_plugin(bundled, "alpha")
        manager = make_manager(dirs)
        await manager.load_all()

        await manager.unload_all()

        assert manager.registry.size == 0
        assert manager.instances["alpha"].state == PluginState.LOADED


class TestSettings:
    """User overrides from the settings file."""

    async def test_overrides_are_applied(self, dirs):
        bundled, _, config_file = dirs
        write_plugin(bundled, "alpha", config={"keywords": ["a"]})
        config_file.write_text(
            json.dumps({"disabled": [], "plugins": {"alpha": {"keywords": ["al"], "priority": 90}}}),
            encoding="utf-8",
        )
        manager = make_manager(dirs)

        await manager.load_all()

        config = manager.registry.get("alpha").config
        assert config.keywords == ["al"]
        assert config.priority == 90

    async def test_invalid_override_is_ignored(self, dirs):
        bundled, _, config_file = dirs
        write_plugin(bundled, "alpha", config={"priority": 20})
        config_file.write_text(
            json.dumps({"plugins": {"alpha": {"priority": 900}}}),
            encoding="utf-8",
        )
        manager = make_manager(dirs)

        await manager.load_all()

        assert manager.registry.get("alpha").config.priority == 20

    async def test_disabled_plugin_stays_registered(self, dirs):
        bundled, _, config_file = dirs
        write_plugin(bundled, "alpha", config={"keywords": ["a"]})
        config_file.write_text(json.dumps({"disabled": ["alpha"]}), encoding="utf-8")
        manager = make_manager(dirs)

        await manager.load_all()

        assert manager.registry.has("alpha")
        assert manager.registry.get_enabled() == []
        assert PluginMatcher().match("a b", manager.registry.get_enabled()) == []

    async def test_disable_and_enable_persist(self, dirs):
        bundled, _, config_file = dirs
        write_plugin(bundled, "alpha")
        manager = make_manager(dirs)
        await manager.load_all()

        manager.disable_plugin("alpha")

        assert manager.registry.get("alpha").config.enabled is False
        assert json.loads(config_file.read_text(encoding="utf-8"))["disabled"] == ["alpha"]

        manager.enable_plugin("alpha")

        assert manager.registry.get("alpha").config.enabled is True
        assert json.loads(config_file.read_text(encoding="utf-8"))["disabled"] == []

    async def test_set_priority_persists(self, dirs):
        bundled, _, config_file = dirs
        write_plugin(bundled, "alpha")
        manager = make_manager(dirs)
        await manager.load_all()

        manager.set_priority("alpha", 85)

        assert manager.registry.get("alpha").config.priority == 85
        saved = json.loads(config_file.read_text(encoding="utf-8"))
        assert saved["plugins"]["alpha"] == {"priority": 85}

    async def test_unknown_plugin(self, dirs):
        manager = make_manager(dirs)

        assert manager.enable_plugin("ghost") is None
        assert manager.disable_plugin("ghost") is None
        assert manager.set_priority("ghost", 10) is None
        assert manager.get_plugin_info("ghost") is None

    async def test_register_builtin_plugin(self, dirs, make_plugin):
        manager = make_manager(dirs)

        assert await manager.register_plugin(make_plugin("inline", keywords=["i"])) is True

        info = manager.get_plugin_info("inline")
        assert info["source"] == "builtin"
        assert info["usage"]["usage_count"] == 0


class TestBundledPlugins:
    """The plugins shipped with the launcher."""

    async def test_bundled_plugins_load(self, tmp_path):
        manager = PluginManager(BUNDLED_PLUGINS_DIR, tmp_path / "installed", tmp_path / "config.json")

        await manager.load_all()

        ids = set(manager.registry.ids())
        assert {"web-search", "open-url", "copy-text"} <= ids
        for plugin_id in ("web-search", "open-url", "copy-text"):
            assert manager.instances[plugin_id].state == PluginState.REGISTERED

    async def test_bundled_ranking(self, tmp_path):
        manager = PluginManager(BUNDLED_PLUGINS_DIR, tmp_path / "installed", tmp_path / "config.json")
        await manager.load_all()
        enabled = manager.registry.get_enabled()
        matcher = PluginMatcher()

        search = matcher.match("g python asyncio", enabled)[0]
        assert search.plugin.id == "web-search"
        assert search.extracted_input == "python asyncio"

        url = matcher.match("https://example.com", enabled)[0]
        assert url.plugin.id == "open-url"
        assert url.score == 80
