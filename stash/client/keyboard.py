"""
Application-wide keyboard handling for the command palette.

Key events from anywhere in the app go through one KeyEventStream. The
PaletteShell, which plays the role of the root layout, subscribes on mount
and unsubscribes on teardown. The palette owns the open/closed state; the
shell changes it only through ``palette_reducer``.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stash.client.palette import CommandPalette

logger = logging.getLogger(__name__)


class Key:
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ENTER = "Enter"
    ESCAPE = "Escape"


PALETTE_SHORTCUT_KEY = "k"


@dataclass(frozen=True)
class KeyEvent:
    key: str
    ctrl: bool = False
    meta: bool = False

    def is_palette_shortcut(self) -> bool:
        """Ctrl+K or Cmd+K."""
        return (self.ctrl or self.meta) and self.key.lower() == PALETTE_SHORTCUT_KEY


class PaletteAction(str, Enum):
    OPEN = "open"
    CLOSE = "close"


def palette_reducer(is_open: bool, action: PaletteAction) -> bool:
    """Next open/closed state for an action."""
    if action is PaletteAction.OPEN:
        return True
    if action is PaletteAction.CLOSE:
        return False
    return is_open


KeyListener = Callable[[KeyEvent], Awaitable[None] | None]


class KeyEventStream:
    """Process-wide fan-out of key events to subscribed listeners."""

    def __init__(self):
        self._listeners: list[KeyListener] = []

    def subscribe(self, listener: KeyListener) -> Callable[[], None]:
        """Add a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def publish(self, event: KeyEvent) -> None:
        for listener in list(self._listeners):
            result = listener(event)
            if inspect.isawaitable(result):
                await result


class PaletteShell:
    """Routes key events to the palette and drives its open state."""

    def __init__(self, palette: "CommandPalette", stream: KeyEventStream):
        self.palette = palette
        self.stream = stream
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def is_open(self) -> bool:
        return self.palette.is_open

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    def mount(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self.stream.subscribe(self.on_key)

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.dispatch(PaletteAction.CLOSE)

    def dispatch(self, action: PaletteAction) -> None:
        new_state = palette_reducer(self.is_open, action)
        if new_state == self.is_open:
            return
        if new_state:
            self.palette.open()
        else:
            self.palette.close()

    async def on_key(self, event: KeyEvent) -> None:
        if event.is_palette_shortcut():
            # Only opens; while open the shortcut is reserved and ignored
            if not self.is_open:
                self.dispatch(PaletteAction.OPEN)
            return
        if self.is_open:
            await self.palette.handle_key(event)
