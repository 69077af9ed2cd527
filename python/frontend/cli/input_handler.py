"""Single-keypress reader shared by the terminal frontends.

Arrow keys, WASD and a few command letters are normalised to action
strings without waiting for Enter. macOS / Linux use tty+termios,
Windows uses msvcrt.
"""

from __future__ import annotations

import os
import sys
from typing import Callable

from backend.models.board import Direction


# -- low-level character readers -----------------------------------------------


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


_getch = _getch_windows if os.name == "nt" else _getch_unix


# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "W": "up",
    "s": "down",
    "S": "down",
    "a": "left",
    "A": "left",
    "d": "right",
    "D": "right",
    "q": "quit",
    "Q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
    "R": "restart",
    "b": "scores",
    "B": "scores",
    "\r": "enter",
    "\n": "enter",
}

# Final byte of the ESC [ x sequences terminals send for arrow keys.
_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}

_DIRECTIONS: dict[str, Direction] = {d.value: d for d in Direction}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    return _KEY_MAP.get(ch, ch if ch.isprintable() else "")


def _decode_escape(read_next: Callable[[], str | None]) -> str:
    """Finish decoding a sequence that started with ESC.

    *read_next* returns the next pending character, or ``None`` when the
    terminal has nothing more to give (a bare Escape press).
    """
    ch2 = read_next()
    if ch2 != "[":
        return "quit"
    ch3 = read_next()
    if ch3 is None:
        return ""
    return _ARROW_MAP.get(ch3, "")


# -- public API ----------------------------------------------------------------


def to_direction(action: str | None) -> Direction | None:
    """Return the tile direction for a movement action, else ``None``."""
    if action is None:
        return None
    return _DIRECTIONS.get(action)


def get_key() -> str:
    """Read a single keypress and return a normalised action string.

    Blocks until a key is pressed.

    Possible return values:
        "up", "down", "left", "right"  — movement
        "quit"                         — q / Ctrl-C / Escape
        "restart"                      — r (shuffle a new game)
        "scores"                       — b (best scores)
        "enter"                        — Enter / Return
        "<char>"                       — unmapped printable char
        ""                             — unrecognised key
    """
    ch = _getch()
    if ch == "\x1b":
        return _decode_escape(_getch)
    return _resolve(ch)


def get_key_timeout(timeout: float) -> str | None:
    """Read a single keypress, giving up after *timeout* seconds.

    Returns the normalised action string (same as ``get_key``) or
    ``None`` if nothing was pressed in time. Terminal loops use this to
    wake up and pump the game clock.
    """
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]
        import time

        end = time.monotonic() + timeout
        while time.monotonic() < end:
            if msvcrt.kbhit():
                return get_key()
            time.sleep(0.02)
        return None

    import select
    import termios
    import tty

    fd = sys.stdin.fileno()

    def read_pending(wait: float) -> str | None:
        # os.read is unbuffered, so select() still sees the rest of a
        # multi-byte escape sequence.
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return None
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = read_pending(timeout)
        if ch is None:
            return None
        if ch == "\x1b":
            return _decode_escape(lambda: read_pending(0.1))
        return _resolve(ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
