"""Single in-place status line at the bottom of the terminal.

The line is redrawn with a carriage return plus erase-in-line before every
render, so stale characters never survive a shorter update. Renders are
written straight through the console; nothing is queued.
"""

import logging
from enum import Enum

from rich.console import Console
from rich.control import Control, ControlType
from rich.markup import escape

from ask_stream.exceptions import StatusLineClosedError

logger = logging.getLogger(__name__)

CLEAR_LINE = Control(ControlType.CARRIAGE_RETURN, (ControlType.ERASE_IN_LINE, 0))

SUCCESS_GLYPH = "✔"
FAILURE_GLYPH = "✖"


class StatusLineState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    STOPPED = "stopped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


TERMINAL_STATES = (StatusLineState.SUCCEEDED, StatusLineState.FAILED)


class StatusLine:
    """Owns one line of terminal output that is rewritten in place.

    Args:
        console: Console the line is drawn on.
        plain: Skip in-place renders (only final succeed/fail lines are
            printed). Implied when the console is not a terminal.
        style: Rich style for the in-place text.
    """

    def __init__(self, console: Console, plain: bool = False, style: str = "cyan"):
        self.console = console
        self.style = style
        self.live = console.is_terminal and not plain
        self.state = StatusLineState.IDLE
        self.text = ""
        self._visible = False

    @property
    def visible(self) -> bool:
        """True while a render is on screen."""
        return self._visible

    @property
    def closed(self) -> bool:
        return self.state in TERMINAL_STATES

    def start(self, text: str) -> None:
        self.set_text(text)

    def set_text(self, text: str) -> None:
        self._ensure_open("set_text")
        self.clear()
        self.text = text
        self.state = StatusLineState.ACTIVE
        if self.live:
            self.console.print(text, style=self.style, end="", markup=False, highlight=False, no_wrap=True, overflow="ellipsis", crop=True)
            self._visible = True

    def clear(self) -> None:
        """Erase the visible render without changing state."""
        if self._visible:
            self.console.control(CLEAR_LINE)
            self._visible = False

    def stop(self) -> None:
        if self.closed:
            return
        self.clear()
        self.state = StatusLineState.STOPPED

    def succeed(self, message: str) -> None:
        self._finish(StatusLineState.SUCCEEDED, f"[green]{SUCCESS_GLYPH}[/green] {escape(message)}")

    def fail(self, message: str) -> None:
        self._finish(StatusLineState.FAILED, f"[red]{FAILURE_GLYPH}[/red] {escape(message)}")

    def _finish(self, state: StatusLineState, line: str) -> None:
        self._ensure_open(state.value)
        self.clear()
        self.state = state
        self.text = ""
        self.console.print(line, highlight=False, emoji=False)

    def _ensure_open(self, operation: str) -> None:
        if self.closed:
            logger.debug(f"Rejected {operation} on status line in state {self.state.value}")
            raise StatusLineClosedError(f"Cannot {operation} a status line that already {self.state.value}")
