"""Host-side services built on the plugin core."""

from .host import HostBridge
from .search_service import ExecutionOutcome, SearchSession

__all__ = ["HostBridge", "ExecutionOutcome", "SearchSession"]
