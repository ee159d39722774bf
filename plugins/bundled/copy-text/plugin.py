"""Copy text plugin."""

from launcher.plugins.types import PluginResult


async def execute(context):
    if not context.input:
        context.show_notification("Nothing to copy")
        return

    await context.copy_to_clipboard(context.input)
    context.show_notification(f"Copied {len(context.input)} characters")
    context.show_result(PluginResult(type="text", content=context.input))
