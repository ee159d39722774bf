"""Lifecycle hook invocation.

Hooks may be plain callables or coroutine functions. Invocation never raises:
the outcome is returned as a HookResult for the caller to inspect.
"""

import inspect
from dataclasses import dataclass
from typing import Optional

from launcher.plugins.types import HookFn


@dataclass(frozen=True)
class HookResult:
    """Outcome of running a lifecycle hook."""

    ok: bool
    error: Optional[Exception] = None
    skipped: bool = False

    @property
    def message(self) -> str:
        if self.error is None:
            return ""
        return f"{type(self.error).__name__}: {self.error}"


async def run_hook(hook: Optional[HookFn]) -> HookResult:
    """Run an optional lifecycle hook, awaiting it if it returns an awaitable.

    Args:
        hook: The hook callable, or None if the plugin has no such hook

    Returns:
        HookResult (skipped=True when there was no hook)
    """
    if hook is None:
        return HookResult(ok=True, skipped=True)

    try:
        result = hook()
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        return HookResult(ok=False, error=e)

    return HookResult(ok=True)
