"""
Client side of Stash.

- gateway: async HTTP client for the resource gateway
- aggregator: unified links/snippets/resumes search
- palette: command palette state, debounce and activation
- keyboard: global shortcut and key routing
- dashboard: counts and recent items
"""

from stash.client.aggregator import SearchAggregator
from stash.client.gateway import GatewayClient, GatewayError, UnauthorizedError
from stash.client.keyboard import KeyEvent, KeyEventStream, PaletteShell
from stash.client.models import ResultKind, SearchResult
from stash.client.palette import CommandPalette, Direction, PaletteStatus

__all__ = [
    "CommandPalette",
    "Direction",
    "GatewayClient",
    "GatewayError",
    "KeyEvent",
    "KeyEventStream",
    "PaletteShell",
    "PaletteStatus",
    "ResultKind",
    "SearchAggregator",
    "SearchResult",
    "UnauthorizedError",
]
