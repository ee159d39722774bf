"""Host bridge - the callbacks a plugin can reach through its PluginContext."""

import asyncio
import logging
import webbrowser
from typing import List, Optional

from launcher.constants import OPEN_BROWSER
from launcher.plugins.types import PluginResult

logger = logging.getLogger(__name__)


class HostBridge:
    """Implements host callbacks and records their effects.

    A REPL or HTTP client shows the recorded effects after execution; the
    clipboard is held in memory.
    """

    def __init__(self, open_browser: bool = OPEN_BROWSER, clipboard: Optional[str] = None):
        self.open_browser = open_browser
        self.clipboard = clipboard
        self.notifications: List[str] = []
        self.opened_urls: List[str] = []
        self.results: List[PluginResult] = []
        self.hidden = False

    def show_notification(self, message: str) -> None:
        self.notifications.append(message)
        logger.info(f"Notification: {message}")

    async def copy_to_clipboard(self, text: str) -> None:
        self.clipboard = text
        logger.debug(f"Copied {len(text)} chars to clipboard")

    async def open_url(self, url: str) -> None:
        self.opened_urls.append(url)
        logger.info(f"Opening URL: {url}")
        if self.open_browser:
            await asyncio.to_thread(webbrowser.open, url)

    async def hide_window(self) -> None:
        self.hidden = True

    def show_result(self, result: PluginResult) -> None:
        self.results.append(result)

    def effects(self) -> dict:
        """Recorded side effects, for API responses and the REPL."""
        return {
            "notifications": list(self.notifications),
            "clipboard": self.clipboard,
            "opened_urls": list(self.opened_urls),
            "hidden": self.hidden,
        }

    def clear(self) -> None:
        """Forget recorded effects (the clipboard is kept)."""
        self.notifications.clear()
        self.opened_urls.clear()
        self.results.clear()
        self.hidden = False
