"""Command handler with command pattern."""

from typing import Awaitable, Callable, Dict

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cli.renderer import MatchRenderer, console
from cli.state import REPLState


class CommandHandler:
    """Slash-command dispatcher.

    Commands are looked up by their first word, so "/q" never shadows "/quit".
    """

    def __init__(self, state: REPLState, renderer: MatchRenderer):
        self.state = state
        self.renderer = renderer
        self.commands = self._register_commands()

    def _register_commands(self) -> Dict[str, Callable[[str], Awaitable[bool]]]:
        return {
            "/q": self._cmd_quit,
            "/quit": self._cmd_quit,
            "/exit": self._cmd_quit,
            "/run": self._cmd_run,
            "/next": self._cmd_next,
            "/prev": self._cmd_prev,
            "/plugins": self._cmd_list_plugins,
            "/enable": self._cmd_enable,
            "/disable": self._cmd_disable,
            "/usage": self._cmd_usage,
            "/help": self._cmd_help,
        }

    async def handle(self, cmd: str) -> bool:
        """Handle a slash command.

        Args:
            cmd: Raw command line

        Returns:
            Whether the REPL loop should continue
        """
        name = cmd.split(maxsplit=1)[0]
        handler = self.commands.get(name)
        if handler is None:
            print(f"\033[31mUnknown command: {cmd}\033[0m")
            print("\033[2mType /help for help\033[0m\n")
            return True
        return await handler(cmd)

    async def _cmd_quit(self, cmd: str) -> bool:
        print("\033[33mbye bye!\033[0m")
        return False

    async def _cmd_run(self, cmd: str) -> bool:
        """Execute the selected match, or match n with "/run n"."""
        session = self.state.session
        parts = cmd.split(maxsplit=1)
        if len(parts) == 2:
            try:
                session.select(int(parts[1]))
            except (ValueError, IndexError) as e:
                self.renderer.show_error(f"Cannot select '{parts[1]}': {e}")
                return True

        if session.selected is None:
            self.renderer.show_error("Nothing to run, type a query first")
            return True

        self.state.host.clear()
        outcome = await session.execute_selected(self.state.host)
        self.state.record(outcome)
        self.renderer.show_outcome(outcome, self.state.host.effects())
        return True

    async def _cmd_next(self, cmd: str) -> bool:
        session = self.state.session
        session.select_next()
        self.renderer.show_matches(session.query, session.matches, session.selected_index)
        return True

    async def _cmd_prev(self, cmd: str) -> bool:
        session = self.state.session
        session.select_previous()
        self.renderer.show_matches(session.query, session.matches, session.selected_index)
        return True

    async def _cmd_list_plugins(self, cmd: str) -> bool:
        plugins = self.state.manager.registry.get_all()
        if not plugins:
            print("\033[33mNo plugins registered\033[0m\n")
            return True

        table = Table(title="Plugins")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Keywords")
        table.add_column("Pattern")
        table.add_column("Fuzzy")
        table.add_column("Priority", justify="right")
        table.add_column("Enabled")
        for p in sorted(plugins, key=lambda p: p.id):
            config = p.config
            table.add_row(
                escape(p.id),
                escape(p.name),
                escape(", ".join(config.keywords)),
                escape(config.pattern.pattern) if config.pattern is not None else "",
                "yes" if config.fuzzy_match else "",
                str(config.effective_priority),
                "[green]yes[/green]" if config.enabled else "[red]no[/red]",
            )
        console.print(table)
        console.print()
        return True

    async def _cmd_enable(self, cmd: str) -> bool:
        return self._toggle(cmd, enable=True)

    async def _cmd_disable(self, cmd: str) -> bool:
        return self._toggle(cmd, enable=False)

    def _toggle(self, cmd: str, enable: bool) -> bool:
        parts = cmd.split(maxsplit=1)
        if len(parts) < 2:
            print(f"\033[31mUsage: {parts[0]} <plugin-id>\033[0m\n")
            return True

        manager = self.state.manager
        plugin_id = parts[1].strip()
        plugin = manager.enable_plugin(plugin_id) if enable else manager.disable_plugin(plugin_id)
        if plugin is None:
            print(f"\033[31mPlugin '{plugin_id}' not found\033[0m\n")
        else:
            print(f"\033[32m✓ {plugin_id} {'enabled' if enable else 'disabled'}\033[0m\n")
        return True

    async def _cmd_usage(self, cmd: str) -> bool:
        usage = self.state.manager.usage.get_all()
        if not usage:
            print("\033[33mNo plugin has been run yet\033[0m\n")
            return True

        table = Table(title="Usage")
        table.add_column("Plugin", style="cyan")
        table.add_column("Runs", justify="right")
        for u in usage:
            table.add_row(escape(u.plugin_id), str(u.usage_count))
        console.print(table)
        console.print()
        return True

    async def _cmd_help(self, cmd: str) -> bool:
        help_text = """[bold]Type any text to see which plugins match it.[/bold]

[bold]Commands:[/bold]
  /q, /quit, /exit    Quit
  /run [n]            Run the selected match (or match n)
  /next, /prev        Move the selection
  /plugins            List registered plugins
  /enable <id>        Enable a plugin
  /disable <id>       Disable a plugin
  /usage              Show how often each plugin ran
  /help               Show this help"""
        console.print(Panel(help_text, title="Help", border_style="blue"))
        console.print()
        return True
