"""Search session - re-matches on every query change and executes the selection."""

import inspect
import logging
from dataclasses import dataclass
from typing import List, Optional

from launcher.constants import PLATFORM
from launcher.plugins.matcher import PluginMatcher
from launcher.plugins.registry import PluginRegistry
from launcher.plugins.types import MatchResult, PluginContext, PluginResult
from launcher.plugins.usage import UsageTracker
from launcher.services.host import HostBridge

logger = logging.getLogger(__name__)


@dataclass
class ExecutionOutcome:
    """What happened when a match was committed."""

    plugin_id: str
    plugin_name: str
    input: str
    result: PluginResult
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "plugin_id": self.plugin_id,
            "plugin_name": self.plugin_name,
            "input": self.input,
            "result": self.result.to_dict(),
            "error": self.error,
        }


class SearchSession:
    """Query state for one launcher input box.

    Every ``set_query`` matches against the registry's enabled plugins at
    call time; debouncing is the caller's job.
    """

    def __init__(
        self,
        registry: PluginRegistry,
        matcher: Optional[PluginMatcher] = None,
        usage: Optional[UsageTracker] = None,
        platform: str = PLATFORM,
    ):
        self.registry = registry
        self.matcher = matcher or PluginMatcher()
        self.usage = usage
        self.platform = platform

        self.query: str = ""
        self.matches: List[MatchResult] = []
        self.selected_index: int = 0

    def set_query(self, query: str) -> List[MatchResult]:
        """Update the query, re-match and reset the selection.

        Args:
            query: Current input box text

        Returns:
            Ranked matches for the new query
        """
        self.query = query
        self.matches = self.matcher.match(query, self.registry.get_enabled())
        self.selected_index = 0
        logger.debug(f"Matched {len(self.matches)} plugins for query: '{query}'")
        return self.matches

    @property
    def show_plugin_list(self) -> bool:
        return len(self.matches) > 0

    @property
    def selected(self) -> Optional[MatchResult]:
        if not self.matches:
            return None
        return self.matches[self.selected_index]

    def select(self, index: int) -> MatchResult:
        """Select a match by index.

        Raises:
            IndexError: If there is no match at that index
        """
        if not 0 <= index < len(self.matches):
            raise IndexError(f"No match at index {index} ({len(self.matches)} matches)")
        self.selected_index = index
        return self.matches[index]

    def select_next(self) -> Optional[MatchResult]:
        if self.matches:
            self.selected_index = (self.selected_index + 1) % len(self.matches)
        return self.selected

    def select_previous(self) -> Optional[MatchResult]:
        if self.matches:
            self.selected_index = (self.selected_index - 1) % len(self.matches)
        return self.selected

    def reset(self) -> None:
        self.query = ""
        self.matches = []
        self.selected_index = 0

    def build_context(self, match: MatchResult, host: HostBridge) -> PluginContext:
        return PluginContext(
            input=match.extracted_input,
            raw_input=self.query,
            platform=self.platform,
            show_notification=host.show_notification,
            copy_to_clipboard=host.copy_to_clipboard,
            open_url=host.open_url,
            hide_window=host.hide_window,
            show_result=host.show_result,
            clipboard=host.clipboard,
        )

    async def execute(self, match: MatchResult, host: HostBridge) -> ExecutionOutcome:
        """Run a matched plugin with a fresh context.

        Plugin failures are logged and reported in the outcome, never raised.
        """
        plugin = match.plugin
        logger.info(f"Executing plugin: {plugin.id}")
        if self.usage is not None:
            self.usage.record(plugin.id)

        shown_before = len(host.results)
        context = self.build_context(match, host)

        try:
            ret = plugin.execute(context)
            if inspect.isawaitable(ret):
                await ret
        except Exception as e:
            logger.exception(f"Plugin execution failed: {plugin.id}")
            return ExecutionOutcome(
                plugin_id=plugin.id,
                plugin_name=plugin.name,
                input=match.extracted_input,
                result=PluginResult(type="text", content=f"Execution failed: {e}"),
                error=str(e),
            )

        # Prefer what the plugin passed to show_result
        shown = host.results[shown_before:]
        result = shown[-1] if shown else PluginResult(type="text", content=None)
        return ExecutionOutcome(
            plugin_id=plugin.id,
            plugin_name=plugin.name,
            input=match.extracted_input,
            result=result,
        )

    async def execute_selected(self, host: HostBridge) -> Optional[ExecutionOutcome]:
        """Execute the selected match, if any."""
        match = self.selected
        if match is None:
            return None
        return await self.execute(match, host)
