"""REPL state management."""

from datetime import datetime

from launcher.plugins.manager import PluginManager
from launcher.services.host import HostBridge
from launcher.services.search_service import ExecutionOutcome, SearchSession


class REPLState:
    """REPL state: the search session, the host bridge and a run history."""

    def __init__(self, manager: PluginManager, open_browser: bool = True):
        self.manager = manager
        self.session = SearchSession(manager.registry, usage=manager.usage)
        self.host = HostBridge(open_browser=open_browser)
        self.history: list = []

    def record(self, outcome: ExecutionOutcome):
        """Remember an execution.

        Args:
            outcome: Result of running a plugin
        """
        self.history.append({
            "plugin_id": outcome.plugin_id,
            "input": outcome.input,
            "ok": outcome.ok,
            "executed_at": datetime.now().isoformat(),
        })
