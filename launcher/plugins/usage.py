"""Plugin usage tracking. Kept by the host, never read by the matcher."""

import time
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class PluginUsage:
    plugin_id: str
    usage_count: int = 0
    last_used: Optional[float] = None  # epoch seconds

    def to_dict(self) -> dict:
        return {
            "plugin_id": self.plugin_id,
            "usage_count": self.usage_count,
            "last_used": self.last_used,
        }


class UsageTracker:
    """In-memory usage counters per plugin."""

    def __init__(self):
        self._usage: Dict[str, PluginUsage] = {}

    def record(self, plugin_id: str) -> PluginUsage:
        """Count one execution of a plugin."""
        usage = self._usage.setdefault(plugin_id, PluginUsage(plugin_id=plugin_id))
        usage.usage_count += 1
        usage.last_used = time.time()
        return usage

    def get(self, plugin_id: str) -> PluginUsage:
        return self._usage.get(plugin_id, PluginUsage(plugin_id=plugin_id))

    def get_all(self) -> List[PluginUsage]:
        """All tracked plugins, most used first."""
        return sorted(self._usage.values(), key=lambda u: u.usage_count, reverse=True)

    def reset(self) -> None:
        self._usage.clear()
