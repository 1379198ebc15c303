"""
Command palette: debounced unified search with keyboard selection.

State is the (query, results, selection) triple of one open palette. All
mutation happens on the event loop thread; searches overlap only as
in-flight requests. Every search takes a generation number when it is
issued, and only the newest generation may commit, so a slow earlier query
can never overwrite a later one.
"""

import logging
from collections.abc import Callable
from enum import Enum

from stash.client.actions import (
    BrowserOpener,
    Clipboard,
    ClipboardError,
    Opener,
    SystemClipboard,
    log_notice,
)
from stash.client.aggregator import SearchAggregator
from stash.client.debounce import Debouncer
from stash.client.gateway import GatewayClient, GatewayError
from stash.client.keyboard import Key, KeyEvent
from stash.client.models import CopyPayload, ResultKind, SearchResult
from stash.config import settings

logger = logging.getLogger(__name__)

KEY_HINTS = ("↑↓ Navigate", "↵ Copy / Open", "Esc Close")

RESUME_OPEN_FAILED = "Could not open resume. Please try again."
SIGN_IN_AGAIN = "Your session has expired. Sign in again to open resumes."

CredentialSource = Callable[[], str | None]


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


class PaletteStatus(str, Enum):
    IDLE = "idle"  # nothing typed
    SEARCHING = "searching"
    NO_RESULTS = "no_results"
    RESULTS = "results"


class CommandPalette:
    def __init__(
        self,
        client: GatewayClient,
        credentials: CredentialSource,
        aggregator: SearchAggregator | None = None,
        clipboard: Clipboard | None = None,
        opener: Opener | None = None,
        notify: Callable[[str], None] | None = None,
        debounce_seconds: float | None = None,
    ):
        self.client = client
        self.credentials = credentials
        self.aggregator = aggregator or SearchAggregator(client)
        self.clipboard = clipboard or SystemClipboard()
        self.opener = opener or BrowserOpener()
        self.notify = notify or log_notice

        delay = settings.search_debounce_seconds if debounce_seconds is None else debounce_seconds
        self._debouncer: Debouncer[str] = Debouncer(delay, self.run_search)
        self._generation = 0

        self.is_open = False
        self.query = ""
        self.results: tuple[SearchResult, ...] = ()
        self.selected_index = 0
        self.loading = False
        self.notice: str | None = None

    # Lifecycle

    def open(self) -> None:
        """Open with a clean slate; nothing carries over from a previous session."""
        self._invalidate()
        self.query = ""
        self.results = ()
        self.selected_index = 0
        self.notice = None
        self.is_open = True

    def close(self) -> None:
        """Close. Searches still in flight finish but are discarded."""
        if not self.is_open:
            return
        self._invalidate()
        self.is_open = False

    def _invalidate(self) -> None:
        self._debouncer.cancel()
        self._generation += 1
        self.loading = False

    async def settled(self) -> None:
        """Wait for any scheduled or running search to finish."""
        await self._debouncer.drain()

    # Query & search

    def on_query_change(self, text: str) -> None:
        self.query = text
        if not text.strip():
            self._invalidate()
            self.results = ()
            self.selected_index = 0
            return
        self._debouncer.trigger(text)

    async def run_search(self, query: str) -> None:
        """Fetch and commit results for ``query``. Called by the debounce timer."""
        self._generation += 1
        generation = self._generation

        token = self.credentials()
        if not token:
            logger.info("No credential available, search returns nothing")
            self.loading = False
            self._commit(generation, [])
            return

        self.loading = True
        try:
            results = await self.aggregator.search(query, token)
        finally:
            if generation == self._generation:
                self.loading = False
        self._commit(generation, results)

    def _commit(self, generation: int, results: list[SearchResult]) -> None:
        if generation != self._generation or not self.is_open:
            logger.debug(f"Discarding stale results for generation {generation}")
            return
        self.results = tuple(results)
        self.selected_index = 0

    # Selection

    @property
    def selected(self) -> SearchResult | None:
        if not self.results:
            return None
        return self.results[self.selected_index]

    def move_selection(self, direction: Direction) -> None:
        if not self.results:
            self.selected_index = 0
            return
        if direction is Direction.DOWN:
            self.selected_index = min(self.selected_index + 1, len(self.results) - 1)
        else:
            self.selected_index = max(self.selected_index - 1, 0)

    @property
    def status(self) -> PaletteStatus:
        if self.loading:
            return PaletteStatus.SEARCHING
        if self.results:
            return PaletteStatus.RESULTS
        if self.query.strip():
            return PaletteStatus.NO_RESULTS
        return PaletteStatus.IDLE

    # Activation

    async def activate(self, result: SearchResult | None = None) -> None:
        """Copy a link/snippet or open a resume, then close.

        If a resume URL cannot be issued the palette stays open with a notice.
        """
        result = result or self.selected
        if result is None:
            return

        if result.kind is ResultKind.RESUME:
            if not await self._open_resume(result.id):
                return
        elif isinstance(result.activation, CopyPayload):
            try:
                self.clipboard.copy(result.activation.text)
            except ClipboardError as e:
                logger.warning(f"Copy to clipboard failed for {result.kind.value} {result.id}: {e}")

        self.close()

    async def _open_resume(self, resume_id: str) -> bool:
        token = self.credentials()
        if not token:
            self._post_notice(SIGN_IN_AGAIN)
            return False
        try:
            signed = await self.client.get_resume_url(token, resume_id)
        except GatewayError as e:
            logger.error(f"Signed URL request for resume {resume_id} failed: {e}")
            self._post_notice(RESUME_OPEN_FAILED)
            return False
        self.opener.open(signed.url)
        return True

    def _post_notice(self, message: str) -> None:
        self.notice = message
        self.notify(message)

    def dismiss_notice(self) -> None:
        self.notice = None

    # Keyboard

    async def handle_key(self, event: KeyEvent) -> bool:
        """Apply a key press while open. Returns True if the key was consumed."""
        if not self.is_open:
            return False
        if event.key == Key.ARROW_DOWN:
            self.move_selection(Direction.DOWN)
        elif event.key == Key.ARROW_UP:
            self.move_selection(Direction.UP)
        elif event.key == Key.ENTER:
            if self.selected is not None:
                await self.activate()
        elif event.key == Key.ESCAPE:
            self.close()
        else:
            return False
        return True
