"""
Curses terminal surface for the interactive session.

The run loop is the session scheduler: it waits for a key at most one tick
interval, applies the key, runs one scan tick and repaints.
"""

import curses
from typing import Optional

from .renderer import Frame, render
from ..core.session import SessionStateMachine
from ..utils.logger import Logger, get_logger

KEY_CTRL_C = 3
ENTER_KEYS = {curses.KEY_ENTER, ord("\n"), ord("\r")}
QUIT_KEYS = {ord("q"), KEY_CTRL_C}

_BORDER = {"tl": "╭", "tr": "╮", "bl": "╰", "br": "╯", "h": "─", "v": "│"}


def dispatch_key(machine: SessionStateMachine, key: int) -> None:
    """
    Apply one key press to the session.

    Args:
        machine: Session to update
        key: Curses key code, -1 when no key was pressed
    """
    if key in QUIT_KEYS:
        machine.quit()
    elif key == curses.KEY_UP:
        machine.move_up()
    elif key == curses.KEY_DOWN:
        machine.move_down()
    elif key in ENTER_KEYS:
        machine.confirm()


class TerminalUI:
    """
    Paints session frames with curses and feeds key presses and ticks
    back into the session.
    """

    def __init__(self, machine: SessionStateMachine, tick_interval_ms: int = 1,
                 logger: Optional[Logger] = None):
        self.machine = machine
        self.tick_interval_ms = tick_interval_ms
        self.logger = logger or get_logger(__name__)
        self._highlight_attr = curses.A_REVERSE

    def run(self) -> None:
        """Run the session until the operator quits."""
        curses.wrapper(self._main)

    def _main(self, stdscr) -> None:
        self._setup(stdscr)
        stage = self.machine.stage
        while not self.machine.quit_requested:
            try:
                self._step(stdscr)
            except KeyboardInterrupt:
                # SIGINT from outside the terminal, possibly during a read
                self.machine.quit()
            if self.machine.stage is not stage:
                stage = self.machine.stage
                self.logger.debug(f"Entered stage {stage.value}")

    def _step(self, stdscr) -> None:
        self._paint(stdscr)
        dispatch_key(self.machine, stdscr.getch())
        if not self.machine.quit_requested:
            self.machine.tick()

    def _setup(self, stdscr) -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        # Raw mode delivers ctrl+c as a key instead of SIGINT
        curses.raw()
        stdscr.keypad(True)
        stdscr.timeout(self.tick_interval_ms)

        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(1, curses.COLOR_BLACK, curses.COLOR_RED)
            self._highlight_attr = curses.color_pair(1)

    def _addstr_safe(self, stdscr, y: int, x: int, text: str, attr: int = curses.A_NORMAL) -> None:
        height, width = stdscr.getmaxyx()
        if y < 0 or y >= height or x >= width or not text:
            return
        try:
            stdscr.addstr(y, max(x, 0), text[:width - max(x, 0)], attr)
        except curses.error:
            # Writing the bottom-right cell raises after the text is drawn
            pass

    def _paint(self, stdscr) -> None:
        height, width = stdscr.getmaxyx()
        frame = render(self.machine, width, height)

        stdscr.erase()
        self._addstr_safe(stdscr, 0, 0, frame.status.ljust(width), self._highlight_attr)
        self._paint_box(stdscr, frame, width, height)
        stdscr.refresh()

    def _paint_box(self, stdscr, frame: Frame, width: int, height: int) -> None:
        inner = max((len(line) for line in frame.lines), default=0)
        box_width = inner + 2
        box_height = len(frame.lines) + 2
        top = max((height - box_height) // 2, 1)
        left = max((width - box_width) // 2, 0)

        self._addstr_safe(stdscr, top, left, _BORDER["tl"] + _BORDER["h"] * inner + _BORDER["tr"])
        for offset, line in enumerate(frame.lines):
            y = top + 1 + offset
            attr = self._highlight_attr if offset == frame.highlight else curses.A_NORMAL
            self._addstr_safe(stdscr, y, left, _BORDER["v"])
            self._addstr_safe(stdscr, y, left + 1, line.ljust(inner), attr)
            self._addstr_safe(stdscr, y, left + 1 + inner, _BORDER["v"])
        self._addstr_safe(stdscr, top + box_height - 1, left,
                          _BORDER["bl"] + _BORDER["h"] * inner + _BORDER["br"])
