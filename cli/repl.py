"""REPL core loop."""

import asyncio
import logging
from pathlib import Path

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import FileHistory
from rich.panel import Panel

from launcher.dependencies import get_plugin_manager
from cli.command_handler import CommandHandler
from cli.renderer import MatchRenderer, console
from cli.state import REPLState

logger = logging.getLogger(__name__)

# Log directory
LOG_DIR = Path(__file__).parent.parent / "log"
LOG_DIR.mkdir(exist_ok=True)


class REPLRunner:
    """Wraps the REPL main loop."""

    def __init__(self, open_browser: bool = True):
        self.manager = get_plugin_manager()
        self.state = REPLState(self.manager, open_browser=open_browser)
        self.renderer = MatchRenderer()
        self.command_handler = CommandHandler(self.state, self.renderer)

    def _show_welcome(self):
        registry = self.manager.registry
        console.print(Panel.fit(
            "[bold cyan]Launcher CLI[/bold cyan]\n"
            f"[green]Plugins:[/green] {len(registry.get_enabled())}/{registry.size} enabled\n"
            "Type a query to match plugins, /help for help, /q to quit",
            border_style="blue"
        ))
        console.print()

    def _build_prompt(self) -> HTML:
        selected = self.state.session.selected
        if selected:
            return HTML(f'<ansicyan>[{selected.plugin.id}]</ansicyan> <b>&gt;</b> ')
        return HTML('<b>&gt;</b> ')

    def match_once(self, query: str):
        """Match a single query and print the ranked list."""
        session = self.state.session
        session.set_query(query)
        self.renderer.show_matches(query, session.matches, session.selected_index)

    async def run(self):
        """Main loop."""
        await self.manager.load_all()

        history_file = LOG_DIR / ".cli_history"
        prompt = PromptSession(history=FileHistory(str(history_file)))

        self._show_welcome()

        try:
            while True:
                try:
                    user_input = await prompt.prompt_async(self._build_prompt())

                    if not user_input.strip():
                        continue

                    if user_input.startswith("/"):
                        should_continue = await self.command_handler.handle(user_input)
                        if not should_continue:
                            break
                        continue

                    self.match_once(user_input)

                except asyncio.CancelledError:
                    print()
                    continue

                except KeyboardInterrupt:
                    print("\n\033[33m(use /q to quit)\033[0m\n")
                    continue

                except EOFError:
                    print("\n\033[33mbye bye!\033[0m")
                    break

                except Exception as e:
                    print(f"\033[31mError: {str(e)}\033[0m\n")
                    logger.exception("REPL error")
        finally:
            await self.manager.unload_all()
