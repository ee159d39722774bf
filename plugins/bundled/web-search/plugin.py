"""Web search plugin - opens a search engine results page."""

import os
from urllib.parse import quote_plus

SEARCH_URL = os.getenv("LAUNCHER_SEARCH_URL", "https://www.google.com/search?q={query}")


async def execute(context):
    if not context.input:
        context.show_notification("Type something to search for")
        return

    await context.open_url(SEARCH_URL.format(query=quote_plus(context.input)))
    await context.hide_window()


def get_preview(input: str) -> str:
    return f"Search the web for: {input or '(type a query)'}"
