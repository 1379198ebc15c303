"""Side effects of activating a result: clipboard writes and opening URLs."""

import logging
import webbrowser
from typing import Protocol

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    """The system clipboard could not be written."""


class Clipboard(Protocol):
    def copy(self, text: str) -> None: ...


class Opener(Protocol):
    def open(self, url: str) -> None: ...


class SystemClipboard:
    """System clipboard via pyperclip."""

    def copy(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(str(e)) from e


class BrowserOpener:
    """Opens URLs in a new browser tab."""

    def open(self, url: str) -> None:
        if not webbrowser.open_new_tab(url):
            logger.warning("No browser available to open the resume URL")


def log_notice(message: str) -> None:
    """Default notice sink when no UI is attached."""
    logger.warning(message)
