"""Keyboard input handling for the dashboard."""

from enum import Enum

from tman.state import DashboardState

QUIT_KEYS = frozenset({"q", "ctrl+c"})


class KeyResult(Enum):
    """What the app should do after a key was dispatched."""

    QUIT = "quit"
    REPAINT = "repaint"
    IGNORED = "ignored"


def dispatch_key(key: str, state: DashboardState) -> KeyResult:
    """Apply a key press to the state and report the follow-up action."""
    if key in QUIT_KEYS:
        return KeyResult.QUIT
    if key == "up":
        state.scroll_up()
        return KeyResult.REPAINT
    if key == "down":
        state.scroll_down()
        return KeyResult.REPAINT
    return KeyResult.IGNORED
