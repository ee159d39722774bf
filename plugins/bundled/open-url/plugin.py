"""Open URL plugin - the whole query is the address."""


async def execute(context):
    url = context.input
    if url.lower().startswith("www."):
        url = f"https://{url}"
    await context.open_url(url)
    await context.hide_window()


def get_preview(input: str) -> str:
    return f"Open {input}"
