"""
Stash - CLI Entry Point.

Terminal command palette over the Stash API. Type to search links, snippets
and resumes; navigate and activate with the commands below.
"""

import asyncio
import logging

from dotenv import load_dotenv

load_dotenv()

from stash.client.dashboard import load_dashboard  # noqa: E402
from stash.client.gateway import GatewayClient  # noqa: E402
from stash.client.keyboard import Key, KeyEvent, KeyEventStream, PaletteShell  # noqa: E402
from stash.client.palette import KEY_HINTS, CommandPalette, PaletteStatus  # noqa: E402
from stash.config import settings  # noqa: E402

COMMANDS = {
    "/down": KeyEvent(Key.ARROW_DOWN),
    "/up": KeyEvent(Key.ARROW_UP),
    "/open": KeyEvent(Key.ENTER),
    "/esc": KeyEvent(Key.ESCAPE),
}
SHORTCUT = KeyEvent("k", ctrl=True)


def render(palette: CommandPalette) -> None:
    """Print the palette's current state."""
    if palette.notice:
        print(f"! {palette.notice}")

    status = palette.status
    if status is PaletteStatus.SEARCHING:
        print("Searching...")
    elif status is PaletteStatus.NO_RESULTS:
        print("No results found")
    elif status is PaletteStatus.IDLE:
        print("Start typing to search across all your items")
    else:
        for index, result in enumerate(palette.results):
            marker = ">" if index == palette.selected_index else " "
            print(f"{marker} [{result.kind.value:<7}] {result.title}  -  {result.subtitle}")
    print("   ".join(KEY_HINTS))


async def show_summary(client: GatewayClient) -> None:
    summary = await load_dashboard(client, settings.api_token)
    print(f"Links: {summary.links_count}  Snippets: {summary.snippets_count}  Resumes: {summary.resumes_count}")
    for link in summary.recent_links:
        print(f"  {link.label}: {link.url}")


async def run() -> None:
    """Run the interactive palette."""
    print("Stash")
    print("=" * 40)

    if not settings.api_token:
        print("Warning: API_TOKEN not set - searches will return nothing")

    async with GatewayClient() as client:
        palette = CommandPalette(client, credentials=lambda: settings.api_token or None)
        stream = KeyEventStream()
        shell = PaletteShell(palette, stream)
        shell.mount()

        print("Commands: /down, /up, /open, /esc, /summary, /quit (anything else searches)")
        print("-" * 40)

        try:
            while True:
                if not shell.is_open:
                    await stream.publish(SHORTCUT)

                try:
                    user_input = (await asyncio.to_thread(input, "Search: ")).rstrip("\n")
                except EOFError:
                    break

                command = user_input.strip().lower()
                if command == "/quit":
                    break
                if command == "/summary":
                    await show_summary(client)
                    continue

                if command in COMMANDS:
                    await stream.publish(COMMANDS[command])
                else:
                    palette.on_query_change(user_input)
                    await palette.settled()

                if shell.is_open:
                    render(palette)
                else:
                    print("(closed)")
        except KeyboardInterrupt:
            pass
        finally:
            shell.unmount()

    print("Goodbye!")


def main():
    logging.basicConfig(level=settings.log_level)
    asyncio.run(run())


if __name__ == "__main__":
    main()
